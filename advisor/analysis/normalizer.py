"""Response normalizer — turns raw generation text into validated outcomes.

Everything returned by the generation service is untrusted. Text is stripped
of code-fence wrappers, parsed as JSON, then validated against the outcome
models. Anything that does not fit raises ``ParseError``; nothing is coerced
into a general reply.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import BaseModel, ValidationError

from advisor.analysis.models import AnalysisOutcome, GeneralReply, IncidentAssessment, TriageDecision
from advisor.errors import ParseError

logger = logging.getLogger("advisor.analysis")

_LEADING_FENCE = re.compile(r"^```[a-zA-Z]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` wrapper. Clean text is returned unchanged."""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_payload(raw: str) -> dict[str, Any]:
    """Parse generation text into a JSON object."""
    cleaned = strip_code_fences(raw)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.warning("Generation payload is not valid JSON (%d chars): %s", len(cleaned), exc)
        raise ParseError(f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ParseError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _resolve_general_flag(data: dict[str, Any]) -> bool:
    """isGeneralQuery if present, else the inverse of isIncident, else "no likelihood"."""
    explicit = data.get("isGeneralQuery")
    if explicit is not None:
        if not isinstance(explicit, bool):
            raise ParseError(f"isGeneralQuery must be a boolean, got {explicit!r}")
        return explicit

    incident = data.get("isIncident")
    if incident is not None:
        if not isinstance(incident, bool):
            raise ParseError(f"isIncident must be a boolean, got {incident!r}")
        return not incident

    return not data.get("likelihood")


def _validate(model: type[BaseModel], payload: dict[str, Any]) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.warning(
            "Generation payload does not match %s: %d error(s)", model.__name__, exc.error_count()
        )
        raise ParseError(f"{model.__name__} contract violated: {exc}") from exc


def normalize_outcome(raw: str) -> AnalysisOutcome:
    """Map a single-pass payload onto GeneralReply or IncidentAssessment."""
    data = parse_payload(raw)
    if _resolve_general_flag(data):
        return _validate(GeneralReply, {"message": data.get("message")})
    return _validate(
        IncidentAssessment,
        {
            "likelihood": data.get("likelihood"),
            "impact": data.get("impact"),
            "message": data.get("message"),
        },
    )


def normalize_triage(raw: str) -> TriageDecision:
    """Map a stage-A payload onto a TriageDecision.

    Accepts ``isGeneralQuery`` as well as ``isIncident`` so either naming
    convention yields the same decision.
    """
    data = parse_payload(raw)
    if "isIncident" not in data and "isGeneralQuery" not in data:
        raise ParseError("triage payload carries neither isIncident nor isGeneralQuery")
    is_incident = not _resolve_general_flag(data)
    return _validate(TriageDecision, {"isIncident": is_incident, "message": data.get("message")})


def normalize_assessment(raw: str) -> IncidentAssessment:
    """Map a stage-B payload onto an IncidentAssessment; the incident tag is implied."""
    data = parse_payload(raw)
    return _validate(
        IncidentAssessment,
        {
            "likelihood": data.get("likelihood"),
            "impact": data.get("impact"),
            "message": data.get("message"),
        },
    )
