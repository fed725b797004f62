"""Tests for settings loading and the error taxonomy."""

import pytest

from advisor.config import Settings
from advisor.errors import (
    AdvisoryError,
    ConfigurationError,
    ErrorKind,
    NetworkError,
    ParseError,
    RateLimitError,
    UpstreamError,
)


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("ADVISOR_GEMINI_API_KEY", "secret")
    monkeypatch.setenv("ADVISOR_PIPELINE", "two_pass")
    monkeypatch.setenv("ADVISOR_REQUEST_TIMEOUT_SECONDS", "12.5")

    config = Settings()

    assert config.gemini_api_key == "secret"
    assert config.pipeline == "two_pass"
    assert config.request_timeout_seconds == 12.5


def test_defaults(monkeypatch):
    for name in ("ADVISOR_GEMINI_API_KEY", "ADVISOR_PIPELINE", "ADVISOR_GEMINI_MODEL"):
        monkeypatch.delenv(name, raising=False)

    config = Settings()

    assert config.gemini_api_key == ""
    assert config.pipeline == "single_pass"
    assert config.gemini_model == "gemini-2.5-flash"


@pytest.mark.parametrize(
    "error_cls, kind",
    [
        (ConfigurationError, ErrorKind.CONFIGURATION),
        (RateLimitError, ErrorKind.RATE_LIMIT),
        (UpstreamError, ErrorKind.UPSTREAM),
        (ParseError, ErrorKind.PARSE),
        (NetworkError, ErrorKind.NETWORK),
    ],
)
def test_error_kinds_are_distinct(error_cls, kind):
    error = error_cls("detail for logs")
    assert isinstance(error, AdvisoryError)
    assert error.kind is kind
    assert error.detail == "detail for logs"
    assert error.user_message
    assert "detail for logs" not in error.user_message


def test_user_message_override():
    error = UpstreamError("status 500", status_code=500, user_message="Try later.")
    assert error.user_message == "Try later."
    assert error.status_code == 500
