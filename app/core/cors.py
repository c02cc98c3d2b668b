from __future__ import annotations

from app.core.config import settings


def normalize_origins(origins: tuple[str, ...] | list[str]) -> list[str]:
    clean: list[str] = []
    for origin in origins:
        value = origin.strip().rstrip("/")
        if value and value not in clean:
            clean.append(value)
    return clean


def cors_allowed_origins() -> list[str]:
    return normalize_origins(settings.cors_allowed_origins)


def cors_allow_origin_regex() -> str | None:
    regex = (settings.cors_allow_origin_regex or "").strip()
    return regex or None
