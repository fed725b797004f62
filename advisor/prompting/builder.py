"""Prompt builder — renders generation instructions from the knowledge base and an incident.

All builders are pure: the same knowledge base, incident text and event name
always produce the same instructions. The incident text is appended verbatim
after the ``USER INPUT:`` marker.
"""

from __future__ import annotations

from advisor.knowledge.matrix import KnowledgeBase

_INPUT_MARKER = "USER INPUT:"

_REFERENCE_BLOCK = """\
REFERENCE (internal only, use it to ground your judgement and never quote it verbatim):
Likelihood/Impact scenario grid and response guidelines, keyed likelihood first, then impact:
{knowledge}"""

_SINGLE_PASS_PROMPT = """\
You are a {event_name} assistant and incident advisor.

TASK:
1. Determine if the user's message is an incident (complaints, conflicts, safety, \
operational issues) or a general query (greetings, info).
2. If it's a GENERAL QUERY: return a friendly, helpful conversational message. Mention \
you help analyze incidents at {event_name}.
3. If it's an INCIDENT:
   - Assess likelihood and impact (Low/Medium/High) using the reference below.
   - Provide ONE immediate, flexible and actionable message (2-4 sentences) telling \
them exactly what to do. Synthesize it in your own words.

{reference}

Respond ONLY with valid JSON matching this schema:
{{
  "isGeneralQuery": true | false,
  "likelihood": "Low | Medium | High (only if incident)",
  "impact": "Low | Medium | High (only if incident)",
  "message": "the final response message (general or incident-specific)"
}}"""

_TRIAGE_PROMPT = """\
You are a {event_name} assistant. Decide whether the user's message reports an incident \
(complaints, conflicts, safety or operational issues at the event) or is a general query \
(greetings, questions, small talk).

Typical incidents at this event include:
{examples}

If it is NOT an incident, write a friendly conversational reply and mention you help \
analyze incidents at {event_name}. If it IS an incident, leave the message empty; it \
will be assessed separately.

Respond ONLY with valid JSON matching this schema:
{{
  "isIncident": true | false,
  "message": "conversational reply when not an incident, otherwise empty"
}}"""

_ASSESSMENT_PROMPT = """\
You are a {event_name} incident advisor. The user's message has already been identified \
as an incident.

TASK:
- Assess likelihood and impact (Low/Medium/High) using the reference below.
- Provide ONE immediate, flexible and actionable message (2-4 sentences) telling the \
operator exactly what to do. Synthesize it in your own words.

{reference}

Respond ONLY with valid JSON matching this schema:
{{
  "likelihood": "Low | Medium | High",
  "impact": "Low | Medium | High",
  "message": "the actionable instruction"
}}"""


def _with_input(instructions: str, incident_text: str) -> str:
    return f"{instructions}\n\n{_INPUT_MARKER}\n{incident_text}"


def _reference(kb: KnowledgeBase) -> str:
    return _REFERENCE_BLOCK.format(knowledge=kb.serialize())


def _distinct_scenarios(kb: KnowledgeBase) -> list[str]:
    seen: dict[str, None] = {}
    for likelihood, impact in kb.cells():
        for scenario in kb.scenarios(likelihood, impact):
            seen.setdefault(scenario, None)
    return list(seen)


def build_single_pass_prompt(
    kb: KnowledgeBase, incident_text: str, *, event_name: str = "Kala Pola"
) -> str:
    """Classify, assess and advise in one request."""
    instructions = _SINGLE_PASS_PROMPT.format(event_name=event_name, reference=_reference(kb))
    return _with_input(instructions, incident_text)


def build_triage_prompt(
    kb: KnowledgeBase, incident_text: str, *, event_name: str = "Kala Pola"
) -> str:
    """Stage A of the two-pass pipeline: incident or general query."""
    examples = "\n".join(f"- {s}" for s in _distinct_scenarios(kb))
    instructions = _TRIAGE_PROMPT.format(event_name=event_name, examples=examples)
    return _with_input(instructions, incident_text)


def build_assessment_prompt(
    kb: KnowledgeBase, incident_text: str, *, event_name: str = "Kala Pola"
) -> str:
    """Stage B of the two-pass pipeline: likelihood, impact and one instruction."""
    instructions = _ASSESSMENT_PROMPT.format(event_name=event_name, reference=_reference(kb))
    return _with_input(instructions, incident_text)
