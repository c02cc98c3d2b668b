from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _dedupe(values: list[str]) -> list[str]:
    seen: set[str] = set()
    clean: list[str] = []
    for value in values:
        item = value.strip()
        if not item or item.lower() in seen:
            continue
        seen.add(item.lower())
        clean.append(item)
    return clean


class BreakdownItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    criterion: str
    score: float = Field(ge=0, le=10)
    feedback: str


class KeywordAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    foundKeywords: list[str] = Field(default_factory=list)
    missingKeywords: list[str] = Field(default_factory=list)

    @field_validator("foundKeywords", "missingKeywords")
    @classmethod
    def _unique_keywords(cls, value: list[str]) -> list[str]:
        return _dedupe(value)


class AnalysisResult(BaseModel):
    """Scored match of one resume against one job title, as returned by the model."""

    model_config = ConfigDict(frozen=True)

    overallScore: float = Field(ge=0, le=100)
    summary: str
    breakdown: list[BreakdownItem]
    keywordAnalysis: KeywordAnalysis = Field(default_factory=KeywordAnalysis)
