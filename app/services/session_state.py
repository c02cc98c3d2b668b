from __future__ import annotations

import asyncio
import logging
import secrets
from datetime import datetime, timezone
from typing import Callable

from app.core.config import settings
from app.schemas.analysis import AnalysisResult
from app.schemas.session import (
    AnalysisPhase,
    JobSelection,
    ResumeDocument,
    SessionSnapshot,
    UploadPhase,
)
from app.services.analysis_client import AnalysisClient
from app.services.errors import (
    AnalysisValidationError,
    ExtractionError,
    ParseFailure,
    ServiceFailure,
    SessionBusyError,
    user_message,
)
from app.services.extractor import extract_text, is_pdf_mime
from app.services.prompt import build_prompt
from app.services.response_parser import parse_result

logger = logging.getLogger(__name__)

Extractor = Callable[[bytes, str], str]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _clip(value: str) -> str:
    limit = max(0, settings.log_message_max_chars)
    return value if len(value) <= limit else value[:limit] + "..."


class SessionState:
    """State of one analysis session: job choice, resume, last result and flags.

    Upload flow: idle -> parsing -> resume_ready | extraction_failed.
    Analysis flow: idle -> analyzing -> result_ready | analysis_failed, entered only
    with a resume present and a non-empty effective job title.

    Busy flags are checked and set before the first ``await`` of a flow, so a
    second request against the same session is refused instead of interleaving.
    """

    def __init__(
        self,
        *,
        extractor: Extractor = extract_text,
        analysis_client: AnalysisClient | None = None,
        session_id: str | None = None,
    ):
        self.session_id = session_id or secrets.token_urlsafe(12)
        self.job = JobSelection()
        self.resume = ResumeDocument()
        self.result: AnalysisResult | None = None
        self.is_parsing = False
        self.is_analyzing = False
        self.last_error: str | None = None
        self.upload_phase: UploadPhase = "idle"
        self.analysis_phase: AnalysisPhase = "idle"
        self.created_at = _utc_now()
        self.updated_at = self.created_at
        self._extractor = extractor
        self._analysis_client = analysis_client or AnalysisClient()

    @property
    def effective_title(self) -> str:
        return self.job.effective_title

    @property
    def is_busy(self) -> bool:
        return self.is_parsing or self.is_analyzing

    @property
    def can_analyze(self) -> bool:
        return bool(self.effective_title) and self.resume.is_present and not self.is_busy

    def touch(self) -> None:
        self.updated_at = _utc_now()

    def select_job(self, predefined_title: str, custom_title: str = "") -> None:
        self.job = JobSelection(predefined_title=predefined_title, custom_title=custom_title)
        self.touch()

    def _clear_resume(self) -> None:
        self.resume = ResumeDocument()

    async def select_file(self, file_name: str, content: bytes, mime_type: str) -> None:
        if self.is_busy:
            raise SessionBusyError()

        self.touch()
        if not is_pdf_mime(mime_type):
            logger.info("resume_rejected session=%s mime=%s", self.session_id, mime_type)
            self._clear_resume()
            self.last_error = user_message("unsupported_format")
            self.upload_phase = "extraction_failed"
            return

        self.is_parsing = True
        self.upload_phase = "parsing"
        self.last_error = None
        self.result = None
        self.analysis_phase = "idle"
        self._clear_resume()
        try:
            text = await asyncio.to_thread(self._extractor, content, mime_type)
        except ExtractionError as exc:
            logger.warning(
                "resume_extraction_failed session=%s kind=%s: %s", self.session_id, exc.kind, exc
            )
            self._clear_resume()
            self.last_error = exc.user_message
            self.upload_phase = "extraction_failed"
        else:
            self.resume = ResumeDocument(file_name=file_name, raw_text=text)
            self.upload_phase = "resume_ready"
            logger.info("resume_ready session=%s chars=%s", self.session_id, len(text))
        finally:
            self.is_parsing = False
            self.touch()

    async def analyze(self) -> AnalysisResult | None:
        if not self.can_analyze:
            if self.is_busy:
                raise SessionBusyError()
            self.last_error = user_message("validation_error")
            self.touch()
            raise AnalysisValidationError()

        job_title = self.effective_title
        self.is_analyzing = True
        self.analysis_phase = "analyzing"
        self.last_error = None
        self.result = None
        self.touch()
        try:
            prompt = build_prompt(job_title, self.resume.raw_text)
            raw_text = await self._analysis_client.submit(prompt)
            result = parse_result(raw_text)
        except ServiceFailure as exc:
            logger.error("analysis_failed session=%s kind=%s: %s", self.session_id, exc.code, exc)
            self.last_error = exc.user_message
            self.analysis_phase = "analysis_failed"
            return None
        except ParseFailure as exc:
            logger.error("analysis_failed session=%s kind=%s: %s", self.session_id, exc.code, exc)
            logger.debug("analysis_raw_response session=%s raw=%s", self.session_id, _clip(exc.raw_text))
            self.last_error = exc.user_message
            self.analysis_phase = "analysis_failed"
            return None
        except Exception as exc:  # noqa: BLE001 - the session must stay usable after any stage failure
            logger.exception("analysis_failed session=%s kind=unexpected: %s", self.session_id, exc)
            self.last_error = user_message("service_failure")
            self.analysis_phase = "analysis_failed"
            return None
        else:
            self.result = result
            self.analysis_phase = "result_ready"
            logger.info(
                "analysis_complete session=%s job=%s score=%s",
                self.session_id,
                job_title,
                result.overallScore,
            )
            return result
        finally:
            self.is_analyzing = False
            self.touch()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            job=self.job,
            effective_title=self.effective_title,
            file_name=self.resume.file_name,
            resume_chars=len(self.resume.raw_text),
            upload_phase=self.upload_phase,
            analysis_phase=self.analysis_phase,
            is_parsing=self.is_parsing,
            is_analyzing=self.is_analyzing,
            can_analyze=self.can_analyze,
            last_error=self.last_error,
            result=self.result,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
