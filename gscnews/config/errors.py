"""
Error Taxonomy - Consistent error codes across the application.

Usage:
    from gscnews.config.errors import ErrorCode, GSCNewsError

    raise GSCNewsError(ErrorCode.SEARCH_INVALID_QUERY, "Limit out of range")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error responses."""

    # Search errors
    SEARCH_INVALID_QUERY = "SEARCH_INVALID_QUERY"

    # LLM/completion errors
    LLM_UNAVAILABLE = "LLM_UNAVAILABLE"
    LLM_HTTP_ERROR = "LLM_HTTP_ERROR"
    LLM_TRANSPORT_ERROR = "LLM_TRANSPORT_ERROR"
    LLM_INVALID_RESPONSE = "LLM_INVALID_RESPONSE"

    # Storage errors
    STORAGE_CONNECTION_FAILED = "STORAGE_CONNECTION_FAILED"
    STORAGE_READ_FAILED = "STORAGE_READ_FAILED"
    STORAGE_WRITE_FAILED = "STORAGE_WRITE_FAILED"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


class GSCNewsError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to API-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class SearchError(GSCNewsError):
    """Search domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.SEARCH_INVALID_QUERY, message, details)


class StorageError(GSCNewsError):
    """Storage/database errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.STORAGE_CONNECTION_FAILED,
    ) -> None:
        super().__init__(code, message, details)
