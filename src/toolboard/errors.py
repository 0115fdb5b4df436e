from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"
    SOURCE_FETCH_FAILED = "SOURCE_FETCH_FAILED"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    INVALID_INPUT = "INVALID_INPUT"


class ToolboardError(Exception):
    """Raised for all expected failure conditions.

    Tool handlers let it propagate to server.py, which serialises it into the
    MCP error response. Pipelines catch the FetchError subclass at their own
    boundary and turn it into a Failed state instead.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }


class FetchError(ToolboardError):
    """The collection endpoint could not be read or returned an unusable body."""
