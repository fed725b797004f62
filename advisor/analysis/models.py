"""Outcome models returned by the analysis engine."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator, model_validator

from advisor.knowledge.models import SeverityLevel

Message = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class _Outcome(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class GeneralReply(_Outcome):
    """The input was not an incident; ``message`` is a conversational reply."""

    is_general_query: Literal[True] = Field(alias="isGeneralQuery", default=True)
    message: Message


class IncidentAssessment(_Outcome):
    """The input was an incident; ``message`` is one synthesized instruction."""

    is_general_query: Literal[False] = Field(alias="isGeneralQuery", default=False)
    likelihood: SeverityLevel
    impact: SeverityLevel
    message: Message

    @field_validator("likelihood", "impact", mode="before")
    @classmethod
    def _parse_level(cls, value: object) -> SeverityLevel:
        return SeverityLevel.parse(value)


AnalysisOutcome = Union[GeneralReply, IncidentAssessment]


class TriageDecision(BaseModel):
    """Stage A result of the two-pass pipeline."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_incident: bool = Field(alias="isIncident")
    message: str = ""

    @field_validator("message", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value

    @model_validator(mode="after")
    def _reply_required_for_general(self) -> TriageDecision:
        if not self.is_incident and not self.message.strip():
            raise ValueError("a conversational reply is required when the input is not an incident")
        return self

    def as_general_reply(self) -> GeneralReply:
        return GeneralReply(message=self.message)
