"""Analysis engine — the public entry point for incident advice."""

from __future__ import annotations

import logging
import time

from advisor.analysis.models import AnalysisOutcome, IncidentAssessment
from advisor.analysis.strategies import ClassificationStrategy
from advisor.errors import AdvisoryError

logger = logging.getLogger("advisor.analysis")


class AnalysisEngine:
    """Runs one configured classification strategy per query.

    The engine holds no per-query state, so one instance serves concurrent
    callers. Classified errors propagate unchanged.
    """

    def __init__(self, strategy: ClassificationStrategy) -> None:
        self._strategy = strategy

    @property
    def pipeline(self) -> str:
        return self._strategy.name

    async def analyze(self, query: str) -> AnalysisOutcome:
        started = time.perf_counter()
        try:
            outcome = await self._strategy.classify(query)
        except AdvisoryError as exc:
            logger.warning(
                "Analysis failed: pipeline=%s kind=%s detail=%s",
                self.pipeline, exc.kind.value, exc.detail,
            )
            raise

        elapsed = time.perf_counter() - started
        if isinstance(outcome, IncidentAssessment):
            logger.info(
                "Incident assessed: pipeline=%s likelihood=%s impact=%s duration=%.2fs",
                self.pipeline, outcome.likelihood.value, outcome.impact.value, elapsed,
            )
        else:
            logger.info("General query answered: pipeline=%s duration=%.2fs", self.pipeline, elapsed)
        return outcome
