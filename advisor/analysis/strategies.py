"""Classification strategies — single-pass and two-pass pipelines over the generation client."""

from __future__ import annotations

import logging
from typing import Literal, Protocol

from langgraph.graph import END, StateGraph

from advisor.analysis.models import AnalysisOutcome
from advisor.analysis.normalizer import normalize_assessment, normalize_outcome, normalize_triage
from advisor.analysis.state import TwoPassState
from advisor.knowledge.matrix import KnowledgeBase
from advisor.prompting.builder import (
    build_assessment_prompt,
    build_single_pass_prompt,
    build_triage_prompt,
)

logger = logging.getLogger("advisor.analysis")


class GenerationBackend(Protocol):
    async def generate(self, prompt: str) -> str: ...


class ClassificationStrategy(Protocol):
    name: str

    async def classify(self, query: str) -> AnalysisOutcome: ...


class SinglePassStrategy:
    """Classify, assess and advise with one generation call."""

    name = "single_pass"

    def __init__(self, client: GenerationBackend, kb: KnowledgeBase, *, event_name: str = "Kala Pola") -> None:
        self._client = client
        self._kb = kb
        self._event_name = event_name

    async def classify(self, query: str) -> AnalysisOutcome:
        prompt = build_single_pass_prompt(self._kb, query, event_name=self._event_name)
        raw = await self._client.generate(prompt)
        return normalize_outcome(raw)


class TwoPassStrategy:
    """Triage first; assess severity with a second call only for incidents."""

    name = "two_pass"

    def __init__(self, client: GenerationBackend, kb: KnowledgeBase, *, event_name: str = "Kala Pola") -> None:
        self._client = client
        self._kb = kb
        self._event_name = event_name
        self._graph = self._build_graph().compile()

    def _build_graph(self) -> StateGraph:
        client, kb, event_name = self._client, self._kb, self._event_name

        async def triage(state: TwoPassState) -> dict:
            prompt = build_triage_prompt(kb, state["query"], event_name=event_name)
            decision = normalize_triage(await client.generate(prompt))
            update: dict = {"triage": decision}
            if not decision.is_incident:
                update["outcome"] = decision.as_general_reply()
            logger.info("Triage decision: incident=%s", decision.is_incident)
            return update

        async def assess(state: TwoPassState) -> dict:
            prompt = build_assessment_prompt(kb, state["query"], event_name=event_name)
            return {"outcome": normalize_assessment(await client.generate(prompt))}

        def route(state: TwoPassState) -> Literal["assess", "done"]:
            return "assess" if state["triage"].is_incident else "done"

        graph = StateGraph(TwoPassState)
        graph.add_node("triage", triage)
        graph.add_node("assess", assess)

        graph.set_entry_point("triage")
        graph.add_conditional_edges("triage", route, {
            "assess": "assess",
            "done": END,
        })
        graph.add_edge("assess", END)
        return graph

    async def classify(self, query: str) -> AnalysisOutcome:
        result = await self._graph.ainvoke({"query": query})
        return result["outcome"]
