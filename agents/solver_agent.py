"""Solver Agent for answering a parsed question."""

import logging
from agents.gemini_client import GeminiClient
from agents import prompts
from models.schemas import ParsedData, Solution
from utils.json_utils import parse_json_response


logger = logging.getLogger(__name__)


class SolverAgent:
    """Agent responsible for producing an answer and explanation."""

    def __init__(self, gemini_client: GeminiClient):
        """
        Initialize the Solver Agent.

        Args:
            gemini_client: The Gemini API client to use for generating responses
        """
        self.gemini_client = gemini_client
        logger.info("SolverAgent initialized")

    def _build_prompt(self, parsed: ParsedData) -> str:
        options = ", ".join(parsed.options) if parsed.options else prompts.NO_OPTIONS
        return prompts.SOLVE_PROMPT_TEMPLATE.format(question=parsed.question, options=options)

    def solve(self, parsed: ParsedData) -> Solution:
        """
        Answer a parsed question.

        No model call is made when the question is missing. Model and JSON
        failures are reported inside the returned Solution.

        Args:
            parsed: The question and options to solve

        Returns:
            Solution with answer and explanation
        """
        if not parsed.question:
            logger.warning("No question recognised, skipping solve")
            return Solution(
                answer=prompts.NO_QUESTION_ANSWER,
                explanation=prompts.NO_QUESTION_EXPLANATION
            )

        prompt = self._build_prompt(parsed)
        logger.debug(f"Solver prompt: {prompt}")

        try:
            raw_response = self.gemini_client.generate_response(prompt)
            logger.debug(f"Solve API raw response: {raw_response}")
            solution = Solution.model_validate(parse_json_response(raw_response))
        except Exception as e:
            logger.error(f"Gemini solve API/JSON error: {e}", exc_info=True)
            return Solution(
                answer=prompts.SOLVE_FAILED_ANSWER,
                explanation=prompts.SOLVE_FAILED_EXPLANATION.format(error=e)
            )

        logger.info(f"Solved question, answer: '{solution.answer}'")
        return solution
