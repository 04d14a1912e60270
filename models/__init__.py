"""Data models and schemas for the exam problem solver."""

from models.schemas import ParsedData, Solution, SolveResponse, ErrorResponse, SystemConfig

__all__ = ["ParsedData", "Solution", "SolveResponse", "ErrorResponse", "SystemConfig"]
