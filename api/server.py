"""FastAPI server for the exam problem solver."""

import logging
import mimetypes
import os
import uuid
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from contextlib import asynccontextmanager
from starlette.datastructures import UploadFile

from models.schemas import ErrorResponse, SolveResponse, SystemConfig
from workers.solve_processor import SolveProcessor
from agents.problem_solver import ProblemSolver
from agents.extractor_agent import ExtractorAgent, ExtractionError
from agents.parser_agent import ParserAgent
from agents.solver_agent import SolverAgent
from agents.gemini_client import GeminiClient
from agents import prompts
from utils.logging_config import configure_logging, set_request_id


logger = logging.getLogger(__name__)

INDEX_HTML = Path(__file__).parent / "static" / "index.html"
DEFAULT_MIME_TYPE = "image/jpeg"


# Global instances
solve_processor: SolveProcessor = None
system_config: SystemConfig = None


def load_config() -> SystemConfig:
    """Build the system configuration from environment variables."""
    return SystemConfig(
        googleApiKey=os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY", ""),
        visionModel=os.getenv("GEMINI_VISION_MODEL", "gemini-2.0-flash"),
        textModel=os.getenv("GEMINI_TEXT_MODEL", "gemini-2.0-flash"),
        apiPort=int(os.getenv("API_PORT", 8000)),
        maxConcurrentWorkers=int(os.getenv("MAX_CONCURRENT_WORKERS", 5)),
        maxUploadBytes=int(os.getenv("MAX_UPLOAD_BYTES", 10 * 1024 * 1024)),
        geminiMaxRetries=int(os.getenv("GEMINI_MAX_RETRIES", 1)),
        geminiBaseRetryDelayMs=int(os.getenv("GEMINI_BASE_RETRY_DELAY_MS", 1000)),
        logLevel=os.getenv("LOG_LEVEL", "INFO")
    )


def build_processor(config: SystemConfig) -> SolveProcessor:
    """Wire the Gemini clients, agents and processor for a configuration."""
    vision_client = GeminiClient(
        api_key=config.googleApiKey,
        model=config.visionModel,
        max_retries=config.geminiMaxRetries,
        base_retry_delay_ms=config.geminiBaseRetryDelayMs
    )
    text_client = GeminiClient(
        api_key=config.googleApiKey,
        model=config.textModel,
        max_retries=config.geminiMaxRetries,
        base_retry_delay_ms=config.geminiBaseRetryDelayMs
    )

    solver = ProblemSolver(
        extractor_agent=ExtractorAgent(vision_client),
        parser_agent=ParserAgent(text_client),
        solver_agent=SolverAgent(text_client)
    )

    return SolveProcessor(
        solver=solver,
        max_concurrent_workers=config.maxConcurrentWorkers
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Handles startup and shutdown events.
    """
    global solve_processor, system_config

    try:
        system_config = load_config()

        configure_logging(system_config.logLevel)

        logger.info("Starting exam problem solver API...")
        logger.info(f"Configuration loaded: port={system_config.apiPort}, "
                    f"vision_model={system_config.visionModel}, "
                    f"text_model={system_config.textModel}, "
                    f"workers={system_config.maxConcurrentWorkers}")

        solve_processor = build_processor(system_config)

        logger.info("Exam problem solver API started successfully")

    except Exception as e:
        logger.error(f"Failed to start API: {e}", exc_info=True)
        raise

    yield

    logger.info("Shutting down exam problem solver API...")


app = FastAPI(
    title="Exam Problem Solver API",
    description="Reads an exam question from an image and solves it with Gemini",
    version="1.0.0",
    lifespan=lifespan
)


def resolve_mime_type(upload: UploadFile) -> str:
    """Pick the MIME type sent to the vision model for an upload."""
    content_type = upload.content_type or ""
    if content_type.startswith("image/"):
        return content_type
    guessed = mimetypes.guess_type(upload.filename or "")[0] or ""
    if guessed.startswith("image/"):
        return guessed
    return DEFAULT_MIME_TYPE


def error_response(status_code: int, message: str, request: Request) -> JSONResponse:
    """Build the JSON error body returned by every failing route."""
    request_id = getattr(request.state, "request_id", None)
    body = ErrorResponse(error=message, request_id=request_id)
    response = JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
    if request_id:
        # Unhandled errors are answered outside the request-ID middleware
        response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """
    Middleware to add request ID for tracing.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    set_request_id(request_id)

    logger.info(f"{request.method} {request.url.path}")

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id

    logger.info(f"{request.method} {request.url.path} - Status: {response.status_code}")

    return response


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unhandled errors.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    set_request_id(request_id)
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return error_response(500, prompts.INTERNAL_ERROR.format(error=exc), request)


@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Serve the upload page."""
    return HTMLResponse(INDEX_HTML.read_text(encoding="utf-8"))


@app.post(
    "/api/solve",
    response_model=SolveResponse,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "multipart/form-data": {
                    "schema": {
                        "type": "object",
                        "properties": {"imageFile": {"type": "string", "format": "binary"}},
                        "required": ["imageFile"]
                    }
                }
            }
        }
    }
)
async def solve(request: Request):
    """
    Extract, structure and solve the exam question in an uploaded image.

    Args:
        request: Multipart form with the uploaded image in field "imageFile"

    Returns:
        SolveResponse, or an ErrorResponse body with status 400/413/500/503
    """
    async with request.form() as form:
        image_file = form.get("imageFile")
        if not isinstance(image_file, UploadFile):
            logger.error("No image file provided")
            return error_response(400, prompts.IMAGE_REQUIRED, request)

        return await solve_upload(request, image_file)


async def solve_upload(request: Request, image_file: UploadFile):
    """Validate an uploaded image and run it through the solve pipeline."""
    if solve_processor is None or system_config is None:
        logger.error("Solve processor not initialized")
        return error_response(503, prompts.SERVICE_NOT_READY, request)

    max_upload_bytes = system_config.maxUploadBytes
    if image_file.size is not None and image_file.size > max_upload_bytes:
        logger.error(f"Image file too large: {image_file.size} > {max_upload_bytes} bytes")
        return error_response(413, prompts.IMAGE_TOO_LARGE, request)

    # Never hold more than the limit in memory
    buffer = await image_file.read(max_upload_bytes + 1)
    mime_type = resolve_mime_type(image_file)
    logger.info(f"Received file: name={image_file.filename}, type={mime_type}, size={len(buffer)}")

    if not buffer:
        logger.error("Empty image file provided")
        return error_response(400, prompts.IMAGE_REQUIRED, request)

    if len(buffer) > max_upload_bytes:
        logger.error(f"Image file too large: more than {max_upload_bytes} bytes")
        return error_response(413, prompts.IMAGE_TOO_LARGE, request)

    try:
        result = await solve_processor.process(buffer, mime_type)
    except ExtractionError as e:
        return error_response(500, prompts.EXTRACTION_FAILED.format(error=e), request)

    logger.info(f"Solved problem, answer: '{result.solution.answer}'")
    return result


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Status information about the service
    """
    is_ready = solve_processor is not None and system_config is not None

    return {
        "status": "healthy" if is_ready else "starting",
        "ready": is_ready,
        "version": "1.0.0"
    }
