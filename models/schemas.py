"""Pydantic models for request/response validation."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional


class ParsedData(BaseModel):
    """Question and multiple-choice options split out of the extracted text."""

    question: Optional[str] = Field(None, description="Question text")
    options: Optional[List[str]] = Field(None, description="Multiple-choice options, empty if none")


class Solution(BaseModel):
    """Answer and explanation produced for a question."""

    answer: Optional[str] = Field(None, description="The answer")
    explanation: Optional[str] = Field(None, description="How the answer was reached")


class SolveResponse(BaseModel):
    """Response body of a successful solve request."""

    message: str = Field(default="분석 완료", description="Status message")
    extracted_text: str = Field(..., description="Text read from the image")
    parsed_data: ParsedData
    solution: Solution

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "message": "분석 완료",
                "extracted_text": "1. 2 + 3 = ?\n① 4 ② 5 ③ 6",
                "parsed_data": {"question": "2 + 3 = ?", "options": ["4", "5", "6"]},
                "solution": {"answer": "5", "explanation": "2와 3을 더하면 5입니다."}
            }
        }


class ErrorResponse(BaseModel):
    """Response body of a failed request."""

    error: str = Field(..., description="Error message")
    request_id: Optional[str] = Field(None, description="Request ID for tracing")


class SystemConfig(BaseModel):
    """Model for system configuration from environment variables."""

    googleApiKey: str = Field(..., min_length=1, description="Gemini API authentication key")
    visionModel: str = Field(default="gemini-2.0-flash", min_length=1, description="Model for text extraction")
    textModel: str = Field(default="gemini-2.0-flash", min_length=1, description="Model for parsing and solving")
    apiPort: int = Field(default=8000, ge=1, le=65535, description="API server port")
    maxConcurrentWorkers: int = Field(default=5, ge=1, description="Maximum concurrent solve requests")
    maxUploadBytes: int = Field(default=10 * 1024 * 1024, ge=1, description="Maximum accepted image size")
    geminiMaxRetries: int = Field(default=1, ge=1, description="Maximum Gemini API attempts per call")
    geminiBaseRetryDelayMs: int = Field(default=1000, ge=0, description="Base retry delay in milliseconds")
    logLevel: str = Field(default="INFO", description="Logging level")

    @field_validator('logLevel')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper
