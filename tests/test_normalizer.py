"""Tests for the response normalizer."""

import json

import pytest

from advisor.analysis.models import GeneralReply, IncidentAssessment, TriageDecision
from advisor.analysis.normalizer import (
    normalize_assessment,
    normalize_outcome,
    normalize_triage,
    parse_payload,
    strip_code_fences,
)
from advisor.errors import ErrorKind, ParseError
from advisor.knowledge.models import SeverityLevel

CLEAN = '{"isGeneralQuery": true, "message": "Hi there"}'


class TestStripCodeFences:
    @pytest.mark.parametrize(
        "wrapped",
        [
            f"```json\n{CLEAN}\n```",
            f"```\n{CLEAN}\n```",
            f"  ```JSON {CLEAN}```  ",
            f"\n{CLEAN}\n",
        ],
    )
    def test_strips_wrappers(self, wrapped):
        assert strip_code_fences(wrapped) == CLEAN

    def test_idempotent(self):
        once = strip_code_fences(f"```json\n{CLEAN}\n```")
        assert strip_code_fences(once) == once == CLEAN


class TestParsePayload:
    def test_not_json(self):
        with pytest.raises(ParseError) as info:
            parse_payload("Sure! Here is what you should do...")
        assert info.value.kind is ErrorKind.PARSE
        assert "rephrasing" in info.value.user_message

    def test_not_an_object(self):
        with pytest.raises(ParseError):
            parse_payload('["Low", "High"]')


class TestNormalizeOutcome:
    def test_general_reply(self):
        outcome = normalize_outcome(CLEAN)
        assert outcome == GeneralReply(message="Hi there")
        assert outcome.model_dump(by_alias=True) == {"isGeneralQuery": True, "message": "Hi there"}

    def test_incident(self):
        raw = json.dumps({"isGeneralQuery": False, "likelihood": "Medium", "impact": "High", "message": "X"})
        outcome = normalize_outcome(raw)
        assert isinstance(outcome, IncidentAssessment)
        assert outcome.model_dump(by_alias=True, mode="json") == {
            "isGeneralQuery": False,
            "likelihood": "Medium",
            "impact": "High",
            "message": "X",
        }

    def test_fenced_incident(self):
        raw = '```json\n{"likelihood": "low", "impact": "medium", "message": "Step in."}\n```'
        outcome = normalize_outcome(raw)
        assert outcome.likelihood is SeverityLevel.LOW
        assert outcome.impact is SeverityLevel.MEDIUM

    def test_missing_flag_without_likelihood_is_general(self):
        assert isinstance(normalize_outcome('{"message": "Hello!"}'), GeneralReply)

    def test_missing_flag_with_likelihood_is_incident(self):
        raw = '{"likelihood": "High", "impact": "Low", "message": "Let volunteers handle it."}'
        assert isinstance(normalize_outcome(raw), IncidentAssessment)

    def test_explicit_flag_wins_over_likelihood(self):
        raw = '{"isGeneralQuery": true, "likelihood": "High", "message": "Hello!"}'
        assert isinstance(normalize_outcome(raw), GeneralReply)

    def test_is_incident_naming(self):
        raw = '{"isIncident": true, "likelihood": "High", "impact": "High", "message": "Intervene now."}'
        assert isinstance(normalize_outcome(raw), IncidentAssessment)

    @pytest.mark.parametrize(
        "raw",
        [
            '{"isGeneralQuery": false, "likelihood": "High", "message": "no impact"}',
            '{"isGeneralQuery": false, "message": "no levels"}',
            '{"isGeneralQuery": false, "likelihood": "Extreme", "impact": "High", "message": "m"}',
            '{"isGeneralQuery": false, "likelihood": "High", "impact": "High", "message": "  "}',
            '{"isGeneralQuery": true}',
            '{"isGeneralQuery": "yes", "message": "m"}',
        ],
    )
    def test_contract_violations(self, raw):
        with pytest.raises(ParseError):
            normalize_outcome(raw)


class TestNormalizeTriage:
    def test_incident(self):
        decision = normalize_triage('{"isIncident": true, "message": ""}')
        assert decision == TriageDecision(is_incident=True)

    def test_general_with_reply(self):
        decision = normalize_triage('{"isIncident": false, "message": "Happy to help!"}')
        assert not decision.is_incident
        assert decision.as_general_reply() == GeneralReply(message="Happy to help!")

    def test_general_query_naming(self):
        decision = normalize_triage('{"isGeneralQuery": true, "message": "Hello"}')
        assert not decision.is_incident

    def test_null_message_for_incident(self):
        assert normalize_triage('{"isIncident": true, "message": null}').is_incident

    def test_general_without_reply(self):
        with pytest.raises(ParseError):
            normalize_triage('{"isIncident": false}')

    def test_no_decision(self):
        with pytest.raises(ParseError):
            normalize_triage('{"message": "hello"}')


class TestNormalizeAssessment:
    def test_valid(self):
        outcome = normalize_assessment('{"likelihood": "Medium", "impact": "High", "message": "X"}')
        assert outcome == IncidentAssessment(
            likelihood=SeverityLevel.MEDIUM, impact=SeverityLevel.HIGH, message="X"
        )

    def test_ignores_general_flag(self):
        raw = '{"isGeneralQuery": true, "likelihood": "Low", "impact": "Low", "message": "Acknowledge once."}'
        assert normalize_assessment(raw).is_general_query is False

    def test_missing_levels(self):
        with pytest.raises(ParseError):
            normalize_assessment('{"message": "Do something"}')
