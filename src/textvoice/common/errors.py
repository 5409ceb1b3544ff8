"""Normalized error types shared by the clients, services and the HTTP app.

Every upstream failure is raised as an ``ApiError`` subclass. The subclass
(and its ``kind`` tag) says what went wrong; ``code`` is the symbolic,
vendor-prefixed string returned to callers.
"""
from __future__ import annotations
from enum import Enum
from typing import Any


class ErrorCode:
    """Symbolic error codes returned in error bodies."""

    GEMINI_AUTH_ERROR = "GEMINI_AUTH_ERROR"
    GEMINI_RATE_LIMIT = "GEMINI_RATE_LIMIT"
    GEMINI_API_ERROR = "GEMINI_API_ERROR"
    GEMINI_NO_RESPONSE = "GEMINI_NO_RESPONSE"
    GEMINI_REQUEST_FAILED = "GEMINI_REQUEST_FAILED"
    ELEVENLABS_AUTH_ERROR = "ELEVENLABS_AUTH_ERROR"
    ELEVENLABS_RATE_LIMIT = "ELEVENLABS_RATE_LIMIT"
    ELEVENLABS_API_ERROR = "ELEVENLABS_API_ERROR"
    PROMPT_REQUIRED = "PROMPT_REQUIRED"
    INVALID_REQUEST = "INVALID_REQUEST"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorKind(str, Enum):
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    UPSTREAM = "upstream"
    NO_CONTENT = "no_content"
    REQUEST_FAILED = "request_failed"
    INVALID_REQUEST = "invalid_request"


class ConfigurationError(RuntimeError):
    """Raised when a required setting (e.g. an API key) is missing."""


class ApiError(Exception):
    """
    Base exception for normalized errors.

    Attributes:
        code: Symbolic code from ErrorCode.
        message: Human readable message.
        status_code: HTTP-like status.
        details: Optional JSON-friendly payload (usually the upstream error).
    """

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Any = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the error body returned to API callers."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "statusCode": self.status_code,
        }
        if self.details is not None:
            result["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, status_code={self.status_code})"


class AuthError(ApiError):
    """Invalid or missing upstream credentials (401/403)."""

    kind = ErrorKind.AUTH


class RateLimitError(ApiError):
    """Upstream rate limit hit (429)."""

    kind = ErrorKind.RATE_LIMIT


class UpstreamApiError(ApiError):
    """Any other non-2xx upstream reply."""

    kind = ErrorKind.UPSTREAM


class NoContentError(ApiError):
    """Upstream answered successfully but with no usable payload."""

    kind = ErrorKind.NO_CONTENT


class RequestFailedError(ApiError):
    """Network or parsing failure before a usable reply was read."""

    kind = ErrorKind.REQUEST_FAILED


class InvalidRequestError(ApiError):
    """Inbound request rejected before any upstream call."""

    kind = ErrorKind.INVALID_REQUEST

    def __init__(self, code: str, message: str, details: Any = None) -> None:
        super().__init__(code, message, 400, details)


def error_for_status(status_code: int, vendor: str, message: str, details: Any = None) -> ApiError:
    """
    Map an upstream HTTP status to the matching ApiError subclass.

    Args:
        status_code: Upstream status.
        vendor: Code prefix, e.g. "GEMINI" or "ELEVENLABS".
        message: Error message.
        details: Upstream error payload.
    """
    if status_code in (401, 403):
        return AuthError(f"{vendor}_AUTH_ERROR", message, status_code, details)
    if status_code == 429:
        return RateLimitError(f"{vendor}_RATE_LIMIT", message, status_code, details)
    return UpstreamApiError(f"{vendor}_API_ERROR", message, status_code, details)


def handle_api_error(error: BaseException) -> tuple[int, dict[str, Any]]:
    """Map any caught exception to an HTTP ``(status, body)`` pair."""
    if isinstance(error, ApiError):
        return error.status_code, error.to_dict()
    message = str(error) or "Unknown error"
    return 500, {
        "code": ErrorCode.INTERNAL_ERROR,
        "message": message,
        "statusCode": 500,
    }
