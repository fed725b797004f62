"""Likelihood x Impact knowledge base — example scenarios and response guidelines.

The knowledge base is reference data: it is built once at process start,
handed by reference to whoever needs it, and never mutated afterwards.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping, Sequence
from itertools import product
from types import MappingProxyType

from advisor.knowledge.models import GuidelineCell, SeverityLevel

logger = logging.getLogger("advisor.knowledge")

Cell = tuple[SeverityLevel, SeverityLevel]

_GUIDELINE_FIELDS = ("objective", "onGround", "digital", "authority")


class KnowledgeBase:
    """Immutable 3x3 scenario grid plus 3x3 response guideline grid.

    Both tables are keyed likelihood first, then impact. Construction fails if
    any of the nine cells is missing or empty in either table, so lookups are
    total afterwards.
    """

    def __init__(
        self,
        scenarios: Mapping[str, Mapping[str, Sequence[str]]],
        guidelines: Mapping[str, Mapping[str, Mapping[str, str]]],
    ) -> None:
        scenario_cells: dict[Cell, tuple[str, ...]] = {}
        guideline_cells: dict[Cell, GuidelineCell] = {}

        for likelihood, impact in _all_cells():
            try:
                examples = scenarios[likelihood.value][impact.value]
                guideline = guidelines[likelihood.value][impact.value]
            except KeyError as exc:
                raise ValueError(
                    f"Knowledge base is missing cell {likelihood.value}/{impact.value}"
                ) from exc

            examples = tuple(examples)
            if not examples or not all(isinstance(e, str) and e.strip() for e in examples):
                raise ValueError(
                    f"Scenario cell {likelihood.value}/{impact.value} must list non-empty examples"
                )
            scenario_cells[(likelihood, impact)] = examples
            guideline_cells[(likelihood, impact)] = GuidelineCell.model_validate(dict(guideline))

        self._scenarios = MappingProxyType(scenario_cells)
        self._guidelines = MappingProxyType(guideline_cells)
        self._serialized = self._render()

    def guideline(self, likelihood: SeverityLevel | str, impact: SeverityLevel | str) -> GuidelineCell:
        return self._guidelines[(SeverityLevel.parse(likelihood), SeverityLevel.parse(impact))]

    def scenarios(self, likelihood: SeverityLevel | str, impact: SeverityLevel | str) -> tuple[str, ...]:
        return self._scenarios[(SeverityLevel.parse(likelihood), SeverityLevel.parse(impact))]

    def cells(self) -> Iterator[Cell]:
        """Yield every (likelihood, impact) pair, Low -> High on both axes."""
        return _all_cells()

    def serialize(self) -> str:
        """JSON rendering of both tables with a fixed key order."""
        return self._serialized

    def _render(self) -> str:
        scenario_table: dict[str, dict[str, list[str]]] = {}
        guideline_table: dict[str, dict[str, dict[str, str]]] = {}
        for likelihood, impact in _all_cells():
            scenario_table.setdefault(likelihood.value, {})[impact.value] = list(
                self._scenarios[(likelihood, impact)]
            )
            dumped = self._guidelines[(likelihood, impact)].model_dump(by_alias=True)
            guideline_table.setdefault(likelihood.value, {})[impact.value] = {
                key: dumped[key] for key in _GUIDELINE_FIELDS
            }

        return json.dumps(
            {"scenarios": scenario_table, "guidelines": guideline_table},
            ensure_ascii=False,
            separators=(",", ":"),
        )


def _all_cells() -> Iterator[Cell]:
    return product(SeverityLevel, SeverityLevel)


# ── Event reference data ──────────────────────────────────────────

SCENARIO_TABLE: dict[str, dict[str, list[str]]] = {
    "Low": {
        "Low": [
            "Artist complains about low sales",
            "Minor signage placement disputes",
            "Single visitor complaint about crowding",
            "Delayed setup affecting one stall only",
        ],
        "Medium": [
            "Artist disputes curatorial guidelines publicly",
            "Influencer records mild criticism",
            "Accessibility complaint raised publicly",
            "Visitor posts negative experience online",
        ],
        "High": [
            "Physical altercation between artists",
            "Threats of vandalism",
            "Safety incident requiring emergency response",
            "Media framing incident as systemic failure",
        ],
    },
    "Medium": {
        "Low": [
            "Artist disputes stall allocation",
            "Power outage at individual stalls",
            "Lighting or space related complaints",
            "Artist disputes confirmation timelines",
        ],
        "Medium": [
            "Raised voices between artist and volunteer",
            "Artist refuses to comply with stall rules",
            "Multiple artists raising similar complaints",
            "Crowd begins to gather around dispute",
        ],
        "High": [
            "Artist goes live on social media during dispute",
            "Grouped artist protest",
            "Media interviews artist mid incident",
            "Sponsor named in negative commentary",
        ],
    },
    "High": {
        "Low": [
            "Artists expressing frustration verbally",
            "Repeat questions about logistics",
            "Emotional but non-aggressive reactions",
        ],
        "Medium": [
            "Misinformation shared in small online circles",
            "Escalated verbal abuse",
            "Recording with intent to post",
            "Multiple negative social media posts",
            "Public questioning of fairness or transparency",
        ],
        "High": [
            "Repeat offender artist raising multiple issues",
            "Coordinated complaints across volunteers",
            "Escalated verbal abuse",
            "Recording with intent to post",
            "Multiple negative social media posts",
            "Public questioning of fairness or transparency",
        ],
    },
}

GUIDELINE_TABLE: dict[str, dict[str, dict[str, str]]] = {
    "Low": {
        "Low": {
            "objective": "Keep the incident small and prevent it from disrupting the event flow.",
            "onGround": "Volunteer acknowledges the issue once, then politely moves away. Only escalate if the same issue is raised again.",
            "digital": "Do not respond publicly. Monitor quietly to see if it becomes a bigger issue.",
            "authority": "Volunteer handles it. Supervisor is only informed if a pattern develops.",
        },
        "Medium": {
            "objective": "Keep the incident contained and stop it from drawing a crowd or going viral online.",
            "onGround": "Supervisor takes over. Provide brief factual information if needed, then disengage.",
            "digital": "Monitor social media passively. Do not respond unless a negative narrative starts forming.",
            "authority": "Supervisor handles it. Foundation teams are notified for awareness.",
        },
        "High": {
            "objective": "Eliminate immediate safety risks and protect the event's reputation.",
            "onGround": "Senior authority and Supervisor step in immediately. Contact security if there's a safety concern.",
            "digital": "Prepare a statement but do not post it unless the content starts spreading widely.",
            "authority": "Senior event leadership handles it. Keells and Keyt Foundations are fully informed.",
        },
    },
    "Medium": {
        "Low": {
            "objective": "Keep the event running smoothly and ensure artists can continue without friction.",
            "onGround": "Volunteer acknowledges the concern. Supervisor provides a solution only if necessary.",
            "digital": "Do not respond. Just listen passively.",
            "authority": "Volunteers and Supervisors handle it.",
        },
        "Medium": {
            "objective": "Reduce tension and prevent crowds from gathering or people from recording the incident.",
            "onGround": "Supervisor takes full control. Volunteer must step back and document the incident.",
            "digital": "Actively monitor social media. Prepare internal notes for potential response.",
            "authority": "Supervisors handle it. Foundation communication teams are informed.",
        },
        "High": {
            "objective": "Protect the reputation and credibility of the partner organizations.",
            "onGround": "Senior authority is present on-site. Security is engaged. Clear chain of command is enforced.",
            "digital": "Coordinate response across teams. Have an approved statement ready to use if needed.",
            "authority": "Kala Pola leadership and Foundation communications handle it.",
        },
    },
    "High": {
        "Low": {
            "objective": "Maintain the organization's reputation while ignoring minor noise.",
            "onGround": "Volunteers handle it routinely. Only escalate if the tone becomes aggressive.",
            "digital": "Do not respond. Ignore isolated negative comments.",
            "authority": "Volunteers handle it.",
        },
        "Medium": {
            "objective": "Stop repeat behaviors and prevent patterns from forming among troublemakers.",
            "onGround": "Supervisor intervention is required. Flag repeat offenders for possible removal or disengagement.",
            "digital": "Actively monitor social media. Ensure all teams are aligned on messaging.",
            "authority": "Supervisors handle it. Foundation representatives are briefed.",
        },
        "High": {
            "objective": "Stop systematic disruption and prevent repeat offenders from causing more problems.",
            "onGround": "Immediate Supervisor intervention required. Track the incident as high-risk behavior.",
            "digital": "Actively monitor. Ensure internal teams agree on a single consistent message.",
            "authority": "Supervisors and Foundation representatives handle it.",
        },
    },
}


def default_knowledge_base() -> KnowledgeBase:
    """Build the knowledge base from the event's reference tables."""
    kb = KnowledgeBase(SCENARIO_TABLE, GUIDELINE_TABLE)
    logger.info("Knowledge base loaded: %d bytes serialized", len(kb.serialize()))
    return kb
