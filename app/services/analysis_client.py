from __future__ import annotations

import logging
import time
from typing import Callable

from app.ai.config import load_ai_config
from app.ai.factory import get_ai_client
from app.ai.types import AIClient
from app.services.errors import ServiceFailure

logger = logging.getLogger(__name__)


class AnalysisClient:
    """Sends one prompt to the configured model and hands back its raw text.

    Every failure, whether building the provider, transport, auth or the service
    itself, is reported as a single ``ServiceFailure``. Nothing is retried.
    """

    def __init__(
        self,
        client_factory: Callable[[], AIClient] = get_ai_client,
        *,
        web_search: bool | None = None,
    ):
        self._client_factory = client_factory
        self._web_search = load_ai_config().web_search if web_search is None else web_search

    async def submit(self, prompt: str) -> str:
        started = time.perf_counter()
        try:
            client = self._client_factory()
            text = await client.generate(prompt, web_search=self._web_search)
        except Exception as exc:  # noqa: BLE001 - the service boundary is opaque
            logger.warning(
                "analysis_service_failed prompt_len=%s latency_ms=%s: %s",
                len(prompt),
                int((time.perf_counter() - started) * 1000),
                exc,
            )
            raise ServiceFailure(f"AI service call failed: {exc}") from exc

        if not text or not text.strip():
            logger.warning("analysis_service_empty model=%s prompt_len=%s", client.model, len(prompt))
            raise ServiceFailure("AI service returned an empty response.")

        logger.info(
            "analysis_service_ok model=%s prompt_len=%s response_len=%s latency_ms=%s",
            client.model,
            len(prompt),
            len(text),
            int((time.perf_counter() - started) * 1000),
        )
        return text
