"""Tests for the prompt builder."""

import pytest

from advisor.prompting.builder import (
    build_assessment_prompt,
    build_single_pass_prompt,
    build_triage_prompt,
)

BUILDERS = [build_single_pass_prompt, build_triage_prompt, build_assessment_prompt]


@pytest.mark.parametrize("build", BUILDERS)
def test_pure(build, kb):
    text = "Artist shouting at a volunteer near stall 12"
    assert build(kb, text) == build(kb, text)


@pytest.mark.parametrize("build", BUILDERS)
def test_incident_text_inserted_verbatim(build, kb):
    text = 'He said "{not a template}" \n\n  and left   '
    prompt = build(kb, text)
    assert prompt.endswith("USER INPUT:\n" + text)


def test_single_pass_embeds_knowledge_and_schema(kb):
    prompt = build_single_pass_prompt(kb, "hello")
    assert kb.serialize() in prompt
    assert '"isGeneralQuery"' in prompt
    assert '"likelihood"' in prompt and '"impact"' in prompt and '"message"' in prompt
    assert "never quote it verbatim" in prompt


def test_triage_asks_only_for_decision(kb):
    prompt = build_triage_prompt(kb, "hello")
    assert '"isIncident"' in prompt
    assert '"likelihood"' not in prompt
    assert kb.serialize() not in prompt
    assert "- Grouped artist protest" in prompt
    # duplicated scenarios across cells are listed once
    assert prompt.count("- Escalated verbal abuse\n") == 1


def test_assessment_embeds_knowledge(kb):
    prompt = build_assessment_prompt(kb, "fight at gate")
    assert kb.serialize() in prompt
    assert '"isGeneralQuery"' not in prompt
    assert "already been identified" in prompt


def test_event_name(kb):
    prompt = build_single_pass_prompt(kb, "hi", event_name="Open Studio Week")
    assert "You are a Open Studio Week assistant" in prompt
    assert "Kala Pola assistant" not in prompt
