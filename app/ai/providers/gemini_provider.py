from __future__ import annotations

from typing import Optional

from google import genai
from google.genai import types


class GeminiProvider:
    def __init__(self, model: str, api_key: Optional[str] = None):
        self.model = model
        key = (api_key or "").strip()
        if not key:
            raise RuntimeError("GEMINI_API_KEY is missing")
        self._client = genai.Client(api_key=key)

    async def generate(self, prompt: str, *, web_search: bool = True) -> str:
        tools = [types.Tool(google_search=types.GoogleSearch())] if web_search else None
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(tools=tools),
        )
        return response.text or ""
