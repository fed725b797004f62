"""Wire models for the Gemini generateContent endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Part(BaseModel):
    text: str = ""


class Content(BaseModel):
    role: str = "user"
    parts: list[Part] = []


class GenerationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temperature: float
    max_output_tokens: int = Field(alias="maxOutputTokens")
    response_mime_type: str = Field(alias="responseMimeType", default="application/json")


class GenerationRequest(BaseModel):
    """Request body for a single generateContent call."""

    model_config = ConfigDict(populate_by_name=True)

    contents: list[Content]
    generation_config: GenerationConfig = Field(alias="generationConfig")

    @classmethod
    def for_prompt(cls, prompt: str, config: GenerationConfig) -> GenerationRequest:
        return cls(
            contents=[Content(role="user", parts=[Part(text=prompt)])],
            generation_config=config,
        )


class Candidate(BaseModel):
    content: Content | None = None
    finish_reason: str = Field(alias="finishReason", default="")


class GenerationResponse(BaseModel):
    """Response envelope; only the fields the advisor reads are modelled."""

    candidates: list[Candidate] = []

    def first_text(self) -> str:
        """Text of the first candidate's first part, or "" when absent."""
        if not self.candidates:
            return ""
        content = self.candidates[0].content
        if content is None or not content.parts:
            return ""
        return content.parts[0].text
