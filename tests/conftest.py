"""Shared fixtures: knowledge base, stub generation backend, Gemini response helpers."""

from __future__ import annotations

import json

import httpx
import pytest

from advisor.generation.client import GeminiClient
from advisor.knowledge.matrix import default_knowledge_base


class StubClient:
    """Generation backend that replays canned payloads and records prompts."""

    def __init__(self, *responses: str | BaseException) -> None:
        self._responses = list(responses)
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._responses:
            raise AssertionError("generation called more times than expected")
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


def gemini_envelope(text: str) -> dict:
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": text}]}, "finishReason": "STOP"}
        ]
    }


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it sees."""

    def __init__(self, handler) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture(scope="session")
def kb():
    return default_knowledge_base()


@pytest.fixture
def stub_client():
    return StubClient


@pytest.fixture
def gemini_factory():
    """Build a GeminiClient whose transport answers with ``handler``."""

    def _make(handler, *, api_key: str = "test-key"):
        transport = RecordingTransport(handler)
        client = GeminiClient(
            api_key,
            model="gemini-2.5-flash",
            base_url="https://generativelanguage.googleapis.com/v1beta",
            timeout=5.0,
            transport=transport,
        )
        return client, transport

    return _make


@pytest.fixture
def payload():
    """Serialize a dict as the JSON text the model would emit."""
    return lambda data: json.dumps(data)
