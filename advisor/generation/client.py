"""Gemini client — one generateContent call per request, failures classified.

Generation parameters are fixed policy: low temperature, a hard output cap and
JSON response mode. There are no retries here; a failed call is reported to
the caller as one of the ``advisor.errors`` kinds.
"""

from __future__ import annotations

import asyncio
import logging
import time

import httpx
from pydantic import ValidationError

from advisor.config import settings
from advisor.errors import ConfigurationError, NetworkError, RateLimitError, UpstreamError
from advisor.generation.models import GenerationConfig, GenerationRequest, GenerationResponse

logger = logging.getLogger("advisor.generation")

TEMPERATURE = 0.2
MAX_OUTPUT_TOKENS = 2000
RESPONSE_MIME_TYPE = "application/json"

_GENERATION_CONFIG = GenerationConfig(
    temperature=TEMPERATURE,
    max_output_tokens=MAX_OUTPUT_TOKENS,
    response_mime_type=RESPONSE_MIME_TYPE,
)

_API_KEY_HEADER = "x-goog-api-key"
_ERROR_BODY_LOG_LIMIT = 500


class GeminiClient:
    """Thin async wrapper around ``POST /models/{model}:generateContent``."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = settings.gemini_api_key if api_key is None else api_key
        self._model = model or settings.gemini_model
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.gemini_base_url,
            timeout=timeout or settings.request_timeout_seconds,
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    @property
    def model(self) -> str:
        return self._model

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> GeminiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def generate(self, prompt: str) -> str:
        """Send ``prompt`` and return the raw text of the first candidate."""
        if not self._api_key:
            raise ConfigurationError("ADVISOR_GEMINI_API_KEY is not set")

        body = GenerationRequest.for_prompt(prompt, _GENERATION_CONFIG).model_dump(by_alias=True)
        started = time.perf_counter()

        try:
            resp = await self._http.post(
                f"/models/{self._model}:generateContent",
                json=body,
                headers={_API_KEY_HEADER: self._api_key},
            )
        except asyncio.CancelledError:
            logger.info("Generation request cancelled after %.2fs", time.perf_counter() - started)
            raise
        except httpx.TimeoutException as exc:
            logger.warning("Generation request timed out after %.2fs", time.perf_counter() - started)
            raise NetworkError(f"timeout: {exc!r}") from exc
        except httpx.TransportError as exc:
            logger.exception("Generation request failed before a response was received")
            raise NetworkError(f"transport: {exc!r}") from exc

        elapsed = time.perf_counter() - started
        logger.info(
            "Generation call: model=%s status=%d duration=%.2fs prompt_chars=%d",
            self._model, resp.status_code, elapsed, len(prompt),
        )

        if resp.status_code == 429:
            raise RateLimitError(f"status 429: {resp.text[:_ERROR_BODY_LOG_LIMIT]}")

        if not resp.is_success:
            logger.warning(
                "Generation service returned %d: %s",
                resp.status_code, resp.text[:_ERROR_BODY_LOG_LIMIT],
            )
            raise UpstreamError(f"status {resp.status_code}", status_code=resp.status_code)

        try:
            envelope = GenerationResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise UpstreamError(
                f"unreadable response envelope: {exc}", status_code=resp.status_code
            ) from exc

        text = envelope.first_text().strip()
        if not text:
            raise UpstreamError("empty payload", status_code=resp.status_code)
        return text
