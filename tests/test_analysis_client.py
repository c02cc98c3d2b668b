import dataclasses
import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

from app.ai.config import AIConfig, load_ai_config
from app.core.config import settings
from app.ai.factory import get_ai_client
from app.ai.providers.gemini_provider import GeminiProvider
from app.ai.providers.openai_provider import OpenAIProvider
from app.services.analysis_client import AnalysisClient
from app.services.errors import ServiceFailure


class _StubAI:
    model = "stub-model"

    def __init__(self, text="{}", error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate(self, prompt, *, web_search=True):
        self.calls.append((prompt, web_search))
        if self.error is not None:
            raise self.error
        return self.text


class AIConfigTests(unittest.TestCase):
    def _load(self, **overrides):
        with patch("app.ai.config.settings", dataclasses.replace(settings, **overrides)):
            return load_ai_config()

    def test_openai_defaults_to_openai_model(self):
        cfg = self._load(ai_provider="openai", ai_model=None, openai_api_key="sk-test")
        self.assertEqual(cfg.model, "gpt-4o-mini")
        self.assertEqual(cfg.api_key, "sk-test")

    def test_gemini_defaults_to_gemini_model(self):
        cfg = self._load(ai_provider="gemini", ai_model=None, gemini_api_key="g-test")
        self.assertEqual(cfg.model, "gemini-2.5-flash")
        self.assertEqual(cfg.api_key, "g-test")

    def test_explicit_model_wins(self):
        cfg = self._load(ai_provider="openai", ai_model="gpt-4.1")
        self.assertEqual(cfg.model, "gpt-4.1")


class ProviderFactoryTests(unittest.TestCase):
    def test_gemini_is_selected(self):
        client = get_ai_client(AIConfig(provider="gemini", model="gemini-2.5-flash", web_search=True, api_key="k"))
        self.assertIsInstance(client, GeminiProvider)
        self.assertEqual(client.model, "gemini-2.5-flash")

    def test_openai_is_selected(self):
        client = get_ai_client(AIConfig(provider="openai", model="gpt-4o-mini", web_search=True, api_key="k"))
        self.assertIsInstance(client, OpenAIProvider)

    def test_unknown_provider_is_rejected(self):
        with self.assertRaises(ValueError):
            get_ai_client(AIConfig(provider="claude", model="x", web_search=True, api_key="k"))

    def test_missing_key_is_rejected(self):
        with self.assertRaises(RuntimeError):
            get_ai_client(AIConfig(provider="gemini", model="gemini-2.5-flash", web_search=True, api_key=None))


class GeminiProviderTests(unittest.IsolatedAsyncioTestCase):
    async def test_generate_enables_google_search_tool(self):
        fake_client = MagicMock()
        fake_client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text="raw"))
        with patch("app.ai.providers.gemini_provider.genai.Client", return_value=fake_client):
            provider = GeminiProvider(model="gemini-2.5-flash", api_key="k")
            text = await provider.generate("prompt", web_search=True)

        self.assertEqual(text, "raw")
        kwargs = fake_client.aio.models.generate_content.await_args.kwargs
        self.assertEqual(kwargs["model"], "gemini-2.5-flash")
        self.assertEqual(kwargs["contents"], "prompt")
        self.assertIsNotNone(kwargs["config"].tools[0].google_search)

    async def test_generate_without_search_sends_no_tools(self):
        fake_client = MagicMock()
        fake_client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text=None))
        with patch("app.ai.providers.gemini_provider.genai.Client", return_value=fake_client):
            provider = GeminiProvider(model="gemini-2.5-flash", api_key="k")
            text = await provider.generate("prompt", web_search=False)

        self.assertEqual(text, "")
        kwargs = fake_client.aio.models.generate_content.await_args.kwargs
        self.assertFalse(kwargs["config"].tools)


class AnalysisClientTests(unittest.IsolatedAsyncioTestCase):
    async def test_returns_raw_text_verbatim(self):
        stub = _StubAI(text="```json\n{}\n```")
        client = AnalysisClient(lambda: stub, web_search=True)
        self.assertEqual(await client.submit("prompt"), "```json\n{}\n```")
        self.assertEqual(stub.calls, [("prompt", True)])

    async def test_service_error_becomes_service_failure(self):
        stub = _StubAI(error=ConnectionError("network down"))
        client = AnalysisClient(lambda: stub, web_search=True)
        with self.assertRaises(ServiceFailure) as ctx:
            await client.submit("prompt")
        self.assertIsInstance(ctx.exception.__cause__, ConnectionError)
        self.assertEqual(len(stub.calls), 1)

    async def test_missing_credential_becomes_service_failure(self):
        def factory():
            raise RuntimeError("GEMINI_API_KEY is missing")

        client = AnalysisClient(factory, web_search=True)
        with self.assertRaises(ServiceFailure):
            await client.submit("prompt")

    async def test_empty_response_is_service_failure(self):
        client = AnalysisClient(lambda: _StubAI(text="   "), web_search=False)
        with self.assertRaises(ServiceFailure):
            await client.submit("prompt")


if __name__ == "__main__":
    unittest.main()
