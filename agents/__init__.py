"""Agent components for extracting, parsing and solving exam questions."""

from agents.gemini_client import GeminiClient, GeminiAPIError, build_image_part
from agents.extractor_agent import ExtractorAgent, ExtractionError
from agents.parser_agent import ParserAgent
from agents.solver_agent import SolverAgent
from agents.problem_solver import ProblemSolver

__all__ = [
    "GeminiClient",
    "GeminiAPIError",
    "build_image_part",
    "ExtractorAgent",
    "ExtractionError",
    "ParserAgent",
    "SolverAgent",
    "ProblemSolver"
]
