from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.schemas.analysis import AnalysisResult

OTHER_JOB_TITLE = "Other"

JOB_TITLES: tuple[str, ...] = (
    "Software Engineer",
    "Frontend Developer",
    "Backend Developer",
    "Full Stack Developer",
    "Data Scientist",
    "Product Manager",
    "UX/UI Designer",
    "DevOps Engineer",
    "Cybersecurity Analyst",
    OTHER_JOB_TITLE,
)

UploadPhase = Literal["idle", "parsing", "resume_ready", "extraction_failed"]
AnalysisPhase = Literal["idle", "analyzing", "result_ready", "analysis_failed"]


class JobSelection(BaseModel):
    predefined_title: str = Field(default="", max_length=120)
    custom_title: str = Field(default="", max_length=200)

    @field_validator("predefined_title")
    @classmethod
    def _validate_predefined_title(cls, value: str) -> str:
        if value and value not in JOB_TITLES:
            raise ValueError(f"predefined_title must be one of: {', '.join(JOB_TITLES)}")
        return value

    @property
    def effective_title(self) -> str:
        if self.predefined_title == OTHER_JOB_TITLE:
            return self.custom_title.strip()
        return self.predefined_title


class ResumeDocument(BaseModel):
    file_name: str = ""
    raw_text: str = ""

    @property
    def is_present(self) -> bool:
        return bool(self.file_name and self.raw_text)


class JobTitlesResponse(BaseModel):
    job_titles: list[str]
    other: str = OTHER_JOB_TITLE


class SessionSnapshot(BaseModel):
    session_id: str
    job: JobSelection
    effective_title: str
    file_name: str
    resume_chars: int = Field(ge=0)
    upload_phase: UploadPhase
    analysis_phase: AnalysisPhase
    is_parsing: bool
    is_analyzing: bool
    can_analyze: bool
    last_error: str | None = None
    result: AnalysisResult | None = None
    created_at: datetime
    updated_at: datetime
