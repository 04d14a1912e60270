"""Parser Agent for splitting extracted text into a question and options."""

import logging
from agents.gemini_client import GeminiClient
from agents.prompts import PARSE_PROMPT_TEMPLATE
from models.schemas import ParsedData
from utils.json_utils import parse_json_response


logger = logging.getLogger(__name__)


class ParserAgent:
    """Agent responsible for structuring raw text into question/options."""

    def __init__(self, gemini_client: GeminiClient):
        self.gemini_client = gemini_client
        logger.info("ParserAgent initialized")

    def _build_prompt(self, extracted_text: str) -> str:
        return PARSE_PROMPT_TEMPLATE.format(text=extracted_text)

    def parse_question(self, extracted_text: str) -> ParsedData:
        """
        Split extracted text into a question and its multiple-choice options.

        Falls back to the whole text as the question, with no options, when
        the model call or the JSON in its response fails.

        Args:
            extracted_text: Text read from the image

        Returns:
            ParsedData with question and options
        """
        prompt = self._build_prompt(extracted_text)
        logger.debug(f"Parser prompt: {prompt}")

        try:
            raw_response = self.gemini_client.generate_response(prompt)
            logger.debug(f"Parse API raw response: {raw_response}")
            parsed_data = ParsedData.model_validate(parse_json_response(raw_response))
        except ValueError as e:
            logger.error(f"Failed to parse question JSON: {e}")
            return ParsedData(question=extracted_text, options=[])
        except Exception as e:
            logger.error(f"Gemini parse API error: {e}", exc_info=True)
            return ParsedData(question=extracted_text, options=[])

        logger.info(
            f"Parsed question with {len(parsed_data.options or [])} options"
        )
        return parsed_data
