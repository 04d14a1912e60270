"""Problem Solver orchestrating the extract, parse and solve stages."""

import logging
from agents.extractor_agent import ExtractorAgent
from agents.parser_agent import ParserAgent
from agents.solver_agent import SolverAgent
from agents.prompts import ANALYSIS_COMPLETE
from models.schemas import SolveResponse
from utils.logging_config import set_stage


logger = logging.getLogger(__name__)


class ProblemSolver:
    """Runs the three model calls for one uploaded image in sequence."""

    def __init__(
        self,
        extractor_agent: ExtractorAgent,
        parser_agent: ParserAgent,
        solver_agent: SolverAgent
    ):
        """
        Initialize the Problem Solver.

        Args:
            extractor_agent: Reads text from the image
            parser_agent: Splits the text into question and options
            solver_agent: Answers the question
        """
        self.extractor_agent = extractor_agent
        self.parser_agent = parser_agent
        self.solver_agent = solver_agent
        logger.info("ProblemSolver initialized")

    def solve(self, image_bytes: bytes, mime_type: str) -> SolveResponse:
        """
        Solve the exam question shown in an image.

        The pipeline:
        1. Extractor reads all text from the image
        2. Parser splits it into question and options (falls back to raw text)
        3. Solver answers the question (failures are reported in the solution)

        Args:
            image_bytes: Raw image data
            mime_type: MIME type of the image

        Returns:
            SolveResponse with extracted text, parsed data and solution

        Raises:
            ExtractionError: If text extraction fails
        """
        try:
            set_stage("extract")
            extracted_text = self.extractor_agent.extract_text(image_bytes, mime_type)

            set_stage("parse")
            parsed_data = self.parser_agent.parse_question(extracted_text)

            set_stage("solve")
            solution = self.solver_agent.solve(parsed_data)
        finally:
            set_stage(None)

        return SolveResponse(
            message=ANALYSIS_COMPLETE,
            extracted_text=extracted_text,
            parsed_data=parsed_data,
            solution=solution
        )
