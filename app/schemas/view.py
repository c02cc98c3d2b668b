from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ScoreBand = Literal["high", "medium", "low"]
ResultsPanel = Literal["loading", "placeholder", "result"]


class ControlsView(BaseModel):
    job_options: list[str]
    selected_job: str = ""
    custom_title: str = ""
    show_custom_title: bool = False
    upload_label: str
    file_name: str = ""
    trigger_label: str
    trigger_disabled: bool
    error_message: str | None = None


class BreakdownView(BaseModel):
    criterion: str
    score: str
    score_class: str
    feedback: str


class KeywordListView(BaseModel):
    keywords: list[str] = Field(default_factory=list)
    empty_message: str


class ResultView(BaseModel):
    overall_score: str
    score_band: ScoreBand
    score_class: str
    summary: str
    breakdown: list[BreakdownView]
    found: KeywordListView
    missing: KeywordListView


class SessionView(BaseModel):
    session_id: str
    controls: ControlsView
    panel: ResultsPanel
    result: ResultView | None = None
