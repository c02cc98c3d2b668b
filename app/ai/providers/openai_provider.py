from __future__ import annotations

from typing import Optional

from openai import AsyncOpenAI


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        self.model = model
        key = (api_key or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        # Failures surface on the first attempt.
        self._client = AsyncOpenAI(api_key=key, base_url=base_url, max_retries=0)

    async def generate(self, prompt: str, *, web_search: bool = True) -> str:
        create_kwargs = {
            "model": self.model,
            "input": prompt,
        }
        if web_search:
            create_kwargs["tools"] = [{"type": "web_search_preview"}]

        response = await self._client.responses.create(**create_kwargs)
        return response.output_text or ""
