"""
Guide records and per-search result types.

Guides arrive from the external store already validated and sanitized.
Models here are tolerant of missing optional data: absent or null strings
become "", absent or null lists become [].
"""

from dataclasses import dataclass, field
from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Step(BaseModel):
    """One step of a guide. `body_rich` may contain markup."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    title: str = ""
    body_rich: str = Field(
        default="",
        validation_alias=AliasChoices("body_rich", "bodyRich", "bodyHtml"),
        serialization_alias="bodyRich",
    )

    @field_validator("title", "body_rich", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


class Guide(BaseModel):
    """Step-by-step guide as supplied by the store (read-only)."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: str
    title: str = ""
    summary: str = ""
    tags: List[str] = Field(default_factory=list)
    steps: List[Step] = Field(default_factory=list)
    category: Optional[str] = None
    content: str = ""

    @field_validator("title", "summary", "content", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("tags", "steps", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        if value is None:
            return []
        if isinstance(value, list):
            return [item for item in value if item is not None]
        return value


@dataclass
class Highlight:
    """Snippet of matched text for UI highlighting"""
    field: Literal["title", "body"]
    text: str


@dataclass
class ScoredGuide:
    """Guide with its keyword score (lives for one search call only)"""
    guide: Guide
    score: float
    highlights: List[Highlight] = field(default_factory=list)
