from __future__ import annotations

import json

from pydantic import ValidationError

from app.schemas.analysis import AnalysisResult
from app.services.errors import ParseFailure

_JSON_FENCE = "```json"
_FENCE = "```"


def strip_code_fence(raw_text: str) -> str:
    text = (raw_text or "").strip()
    if text.startswith(_JSON_FENCE):
        text = text[len(_JSON_FENCE) : len(text) - len(_FENCE)].strip()
    elif text.startswith(_FENCE):
        text = text[len(_FENCE) : len(text) - len(_FENCE)].strip()
    return text


def parse_result(raw_text: str) -> AnalysisResult:
    text = strip_code_fence(raw_text)
    try:
        payload = json.loads(text)
    except (ValueError, TypeError, RecursionError) as exc:
        raise ParseFailure(raw_text, f"Model output is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise ParseFailure(raw_text, f"Model output is a JSON {type(payload).__name__}, not an object.")

    try:
        return AnalysisResult.model_validate(payload)
    except ValidationError as exc:
        raise ParseFailure(raw_text, f"Model output does not match the result schema: {exc}") from exc
