"""Core schemas for API responses."""

from src.core.schemas.responses import ApiResponse, ErrorResponse

__all__ = ["ApiResponse", "ErrorResponse"]
