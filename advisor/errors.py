"""Classified failures surfaced by the advisory engine.

Every failure the engine can produce is one of the five kinds below. Callers
branch on ``error.kind`` (or the exception type) and show ``user_message`` to
the operator; ``detail`` is for logs only.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    RATE_LIMIT = "rate_limit"
    UPSTREAM = "upstream"
    PARSE = "parse"
    NETWORK = "network"


class AdvisoryError(Exception):
    """Base class for all classified engine failures."""

    kind: ErrorKind
    default_message: str = "Something went wrong. Please try again."

    def __init__(self, detail: str = "", *, user_message: str | None = None) -> None:
        self.detail = detail
        self.user_message = user_message or self.default_message
        super().__init__(detail or self.user_message)


class ConfigurationError(AdvisoryError):
    kind = ErrorKind.CONFIGURATION
    default_message = (
        "The advisor is not configured: the generation service API key is missing. "
        "Set ADVISOR_GEMINI_API_KEY and try again."
    )


class RateLimitError(AdvisoryError):
    kind = ErrorKind.RATE_LIMIT
    default_message = "Rate limit exceeded. Please wait a minute and try again."


class UpstreamError(AdvisoryError):
    kind = ErrorKind.UPSTREAM
    default_message = (
        "The analysis service encountered an issue. Please try again in a moment."
    )

    def __init__(
        self,
        detail: str = "",
        *,
        status_code: int | None = None,
        user_message: str | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(detail, user_message=user_message)


class ParseError(AdvisoryError):
    kind = ErrorKind.PARSE
    default_message = (
        "I'm having trouble processing the response. Please try rephrasing your "
        "question or try again in a moment."
    )


class NetworkError(AdvisoryError):
    kind = ErrorKind.NETWORK
    default_message = "Network error. Please check your connection and try again."
