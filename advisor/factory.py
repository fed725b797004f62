"""Wiring — build the generation client, strategy and engine from settings."""

from __future__ import annotations

from advisor.analysis.engine import AnalysisEngine
from advisor.analysis.strategies import (
    ClassificationStrategy,
    GenerationBackend,
    SinglePassStrategy,
    TwoPassStrategy,
)
from advisor.config import Settings
from advisor.generation.client import GeminiClient
from advisor.knowledge.matrix import KnowledgeBase

_STRATEGIES: dict[str, type[SinglePassStrategy] | type[TwoPassStrategy]] = {
    SinglePassStrategy.name: SinglePassStrategy,
    TwoPassStrategy.name: TwoPassStrategy,
}


def build_client(config: Settings) -> GeminiClient:
    return GeminiClient(
        config.gemini_api_key,
        model=config.gemini_model,
        base_url=config.gemini_base_url,
        timeout=config.request_timeout_seconds,
    )


def build_strategy(
    pipeline: str,
    client: GenerationBackend,
    kb: KnowledgeBase,
    *,
    event_name: str = "Kala Pola",
) -> ClassificationStrategy:
    try:
        strategy_cls = _STRATEGIES[pipeline]
    except KeyError:
        raise ValueError(f"Unsupported pipeline: {pipeline}") from None
    return strategy_cls(client, kb, event_name=event_name)


def build_engine(config: Settings, kb: KnowledgeBase, client: GenerationBackend) -> AnalysisEngine:
    strategy = build_strategy(config.pipeline, client, kb, event_name=config.event_name)
    return AnalysisEngine(strategy)
