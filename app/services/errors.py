from __future__ import annotations

from typing import Literal

ExtractionKind = Literal[
    "unsupported_format",
    "no_readable_text",
    "password_protected",
    "corrupt_or_unreadable",
]

USER_MESSAGES: dict[str, str] = {
    "unsupported_format": "Please upload a PDF file.",
    "no_readable_text": (
        "This appears to be an image-based PDF with no readable text. Please upload a text-based PDF."
    ),
    "password_protected": "This PDF is password-protected. Please upload an unprotected version.",
    "corrupt_or_unreadable": "Could not read resume from PDF. The file might be corrupt or unreadable.",
    "service_failure": "Failed to get ranking. Please check your inputs and try again.",
    "parse_failure": "Failed to analyze resume. The model returned an unexpected format.",
    "validation_error": "Please select/specify a job title and upload a resume.",
    "session_busy": "Please wait for the current step to finish.",
    "session_not_found": "Session not found or expired. Please start again.",
}


def user_message(code: str) -> str:
    return USER_MESSAGES[code]


class AnalyzerError(RuntimeError):
    """Base error; ``code`` selects the message shown to the end user."""

    code = "analyzer_error"

    def __init__(self, detail: str | None = None, *, code: str | None = None):
        if code is not None:
            self.code = code
        super().__init__(detail or USER_MESSAGES.get(self.code, self.code))

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, str(self))


class ExtractionError(AnalyzerError):
    def __init__(self, kind: ExtractionKind, detail: str | None = None):
        super().__init__(detail, code=kind)
        self.kind = kind


class ServiceFailure(AnalyzerError):
    code = "service_failure"


class ParseFailure(AnalyzerError):
    code = "parse_failure"

    def __init__(self, raw_text: str, detail: str | None = None):
        super().__init__(detail)
        self.raw_text = raw_text


class AnalysisValidationError(AnalyzerError):
    code = "validation_error"


class SessionBusyError(AnalyzerError):
    code = "session_busy"


class SessionNotFoundError(AnalyzerError):
    code = "session_not_found"
