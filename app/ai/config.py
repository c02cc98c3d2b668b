from dataclasses import dataclass

from app.core.config import settings

DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    web_search: bool
    api_key: str | None


def load_ai_config() -> AIConfig:
    provider = settings.ai_provider
    api_key = settings.openai_api_key if provider == "openai" else settings.gemini_api_key
    return AIConfig(
        provider=provider,
        model=settings.ai_model or DEFAULT_MODELS.get(provider, ""),
        web_search=settings.ai_web_search,
        api_key=api_key,
    )
