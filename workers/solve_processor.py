"""Solve processor bounding concurrent pipeline runs."""

import asyncio
import contextvars
import logging
import time
from models.schemas import SolveResponse
from agents.problem_solver import ProblemSolver


logger = logging.getLogger(__name__)


class SolveProcessor:
    """Runs the blocking solve pipeline off the event loop with a worker limit."""

    def __init__(self, solver: ProblemSolver, max_concurrent_workers: int = 5):
        """
        Initialize the solve processor.

        Args:
            solver: The problem solver instance
            max_concurrent_workers: Maximum number of concurrent pipeline runs (default: 5)
        """
        self.solver = solver
        self.max_concurrent_workers = max_concurrent_workers
        self.semaphore = asyncio.Semaphore(max_concurrent_workers)
        logger.info(f"SolveProcessor initialized with max_concurrent_workers={max_concurrent_workers}")

    async def process(self, image_bytes: bytes, mime_type: str) -> SolveResponse:
        """
        Solve one uploaded image.

        Args:
            image_bytes: Raw image data
            mime_type: MIME type of the image

        Returns:
            SolveResponse from the pipeline

        Raises:
            ExtractionError: If text extraction fails
        """
        async with self.semaphore:
            start_time = time.time()

            # Carry the request ID into the worker thread
            ctx = contextvars.copy_context()
            loop = asyncio.get_running_loop()
            try:
                return await loop.run_in_executor(
                    None,
                    ctx.run,
                    self.solver.solve,
                    image_bytes,
                    mime_type
                )
            finally:
                processing_time_ms = int((time.time() - start_time) * 1000)
                logger.info(f"Solve pipeline finished in {processing_time_ms}ms")
