"""Chat endpoints — the operator-facing caller of the analysis engine."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from advisor.analysis.engine import AnalysisEngine
from advisor.analysis.models import IncidentAssessment
from advisor.errors import AdvisoryError, ErrorKind
from app.history import ChatHistory
from app.telemetry.metrics import analyses_total, analysis_duration

logger = logging.getLogger("app.chat")
router = APIRouter(prefix="/chat", tags=["chat"])

EMPTY_INPUT_MESSAGE = "Please describe the incident or ask a question."

_ERROR_STATUS = {
    ErrorKind.CONFIGURATION: 503,
    ErrorKind.RATE_LIMIT: 429,
    ErrorKind.UPSTREAM: 502,
    ErrorKind.PARSE: 502,
    ErrorKind.NETWORK: 504,
}


class ChatRequest(BaseModel):
    message: str


def _error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"kind": kind, "message": message}})


@router.post("")
async def chat(body: ChatRequest, request: Request):
    """Analyze one operator message and record the exchange in history."""
    engine: AnalysisEngine = request.app.state.engine
    history: ChatHistory = request.app.state.history

    text = body.message.strip()
    if not text:
        return _error_response(422, "empty_input", EMPTY_INPUT_MESSAGE)

    history.add_user(text)
    started = time.perf_counter()
    try:
        outcome = await engine.analyze(text)
    except AdvisoryError as exc:
        analyses_total.labels(pipeline=engine.pipeline, outcome=exc.kind.value).inc()
        history.add_error(exc.user_message, kind=exc.kind.value)
        return _error_response(_ERROR_STATUS[exc.kind], exc.kind.value, exc.user_message)
    finally:
        analysis_duration.labels(pipeline=engine.pipeline).observe(time.perf_counter() - started)

    result = "incident" if isinstance(outcome, IncidentAssessment) else "general"
    analyses_total.labels(pipeline=engine.pipeline, outcome=result).inc()
    history.add_assistant(outcome.message, is_general_query=outcome.is_general_query)

    return {
        "reply": outcome.model_dump(by_alias=True, mode="json"),
        "history_size": len(history),
    }


@router.get("/history")
async def get_history(request: Request):
    history: ChatHistory = request.app.state.history
    return {"messages": [m.model_dump(by_alias=True, mode="json") for m in history.messages()]}


@router.delete("/history")
async def clear_history(request: Request):
    history: ChatHistory = request.app.state.history
    cleared = len(history)
    history.clear()
    logger.info("Chat history cleared: %d messages", cleared)
    return {"cleared": cleared}
