"""Two-pass pipeline state — the typed state object that flows through the LangGraph."""

from __future__ import annotations

from typing import TypedDict

from advisor.analysis.models import AnalysisOutcome, TriageDecision


class TwoPassState(TypedDict, total=False):
    # Input
    query: str

    # Stage A
    triage: TriageDecision

    # Output
    outcome: AnalysisOutcome
