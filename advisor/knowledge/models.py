"""Data models for the severity matrix."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SeverityLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, value: object) -> SeverityLevel:
        """Case- and whitespace-insensitive lookup ("medium " -> MEDIUM)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for level in cls:
                if level.value.lower() == wanted:
                    return level
        raise ValueError(f"Not a severity level: {value!r}")


class GuidelineCell(BaseModel):
    """Response guideline for one (likelihood, impact) cell."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    objective: str = Field(min_length=1)
    on_ground: str = Field(alias="onGround", min_length=1)
    digital: str = Field(min_length=1)
    authority: str = Field(min_length=1)
