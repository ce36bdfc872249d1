# tests/unit/test_lm_studio_provider.py
"""Unit tests for LMStudioProvider and the provider factory."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from notesynth.config.schema import NoteSynthConfig
from notesynth.errors import ProviderError
from notesynth.llm.factory import create_provider
from notesynth.llm.lm_studio import LMStudioProvider, LMStudioSession
from notesynth.llm.ollama import OllamaProvider
from notesynth.llm.provider import CapabilityStatus


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_provider(**kwargs):
    """Create LMStudioProvider with openai patched out."""
    with patch("notesynth.llm.lm_studio.AsyncOpenAI"):
        provider = LMStudioProvider(**kwargs)
    return provider


def _mock_http(status_code=200, payload=None, error=None):
    """Build a patched httpx.AsyncClient class returning one canned response."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {"data": []}

    http = MagicMock()
    http.get = AsyncMock(return_value=response, side_effect=error)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=http)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context)


class _FakeStream:
    """Async-iterable completion stream with the close() of openai.AsyncStream."""

    def __init__(self, contents):
        self._chunks = [_chunk(c) for c in contents]
        self.close = AsyncMock()

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk


def _chunk(content):
    delta = MagicMock()
    delta.content = content
    choice = MagicMock()
    choice.delta = delta
    chunk = MagicMock()
    chunk.choices = [choice]
    return chunk


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestCheckCapabilities:
    @pytest.mark.asyncio
    async def test_default_model_ready_when_server_up(self):
        provider = _make_provider()

        with patch("notesynth.llm.lm_studio.httpx.AsyncClient", _mock_http()):
            capabilities = await provider.check_capabilities()

        assert capabilities.status is CapabilityStatus.READY

    @pytest.mark.asyncio
    async def test_named_model_must_be_listed(self):
        provider = _make_provider(model="qwen2.5-7b")
        payload = {"data": [{"id": "llama-3-8b"}]}

        with patch("notesynth.llm.lm_studio.httpx.AsyncClient", _mock_http(payload=payload)):
            capabilities = await provider.check_capabilities()

        assert capabilities.status is CapabilityStatus.UNAVAILABLE
        assert "qwen2.5-7b" in capabilities.detail

    @pytest.mark.asyncio
    async def test_named_model_listed(self):
        provider = _make_provider(model="qwen2.5-7b")
        payload = {"data": [{"id": "qwen2.5-7b"}]}

        with patch("notesynth.llm.lm_studio.httpx.AsyncClient", _mock_http(payload=payload)):
            capabilities = await provider.check_capabilities()

        assert capabilities.status is CapabilityStatus.READY

    @pytest.mark.asyncio
    async def test_bad_status_is_unavailable(self):
        provider = _make_provider()

        with patch("notesynth.llm.lm_studio.httpx.AsyncClient", _mock_http(status_code=503)):
            capabilities = await provider.check_capabilities()

        assert capabilities.status is CapabilityStatus.UNAVAILABLE

    @pytest.mark.asyncio
    async def test_unreachable_raises_provider_error(self):
        provider = _make_provider()
        error = httpx.ConnectError("refused")

        with patch("notesynth.llm.lm_studio.httpx.AsyncClient", _mock_http(error=error)):
            with pytest.raises(ProviderError, match="unreachable"):
                await provider.check_capabilities()


class TestStreaming:
    @pytest.mark.asyncio
    async def test_stream_relays_delta_content(self):
        provider = _make_provider()
        session = await provider.create_session("be brief")

        completion = _FakeStream(["Hel", None, "lo"])
        provider._client.chat.completions.create = AsyncMock(return_value=completion)

        stream = await provider.stream_prompt(session, "Explain")

        assert [c async for c in stream] == ["Hel", "lo"]
        completion.close.assert_awaited_once()
        kwargs = provider._client.chat.completions.create.call_args.kwargs
        assert kwargs["stream"] is True
        assert kwargs["messages"][0] == {"role": "system", "content": "be brief"}

    @pytest.mark.asyncio
    async def test_stream_closed_when_consumer_stops_early(self):
        provider = _make_provider()
        session = await provider.create_session("x")
        completion = _FakeStream(["a", "b", "c"])
        provider._client.chat.completions.create = AsyncMock(return_value=completion)

        stream = await provider.stream_prompt(session, "Explain")
        assert await anext(stream) == "a"
        await stream.aclose()

        completion.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_rejected_request_raises_provider_error(self):
        provider = _make_provider()
        session = LMStudioSession(model="local-model", system_prompt="x")
        provider._client.chat.completions.create = AsyncMock(side_effect=RuntimeError("no model loaded"))

        with pytest.raises(ProviderError, match="no model loaded"):
            await provider.stream_prompt(session, "Explain")

    @pytest.mark.asyncio
    async def test_destroy_session_is_noop(self):
        provider = _make_provider()
        session = await provider.create_session("x")
        await provider.destroy_session(session)


class TestInit:
    def test_missing_openai_raises_import_error(self):
        with patch("notesynth.llm.lm_studio.AsyncOpenAI", None):
            with pytest.raises(ImportError, match="lm-studio"):
                LMStudioProvider()


class TestFactory:
    def test_default_is_ollama(self):
        provider = create_provider(NoteSynthConfig())
        assert isinstance(provider, OllamaProvider)
        assert provider.model == NoteSynthConfig().ollama.model

    def test_lm_studio(self):
        config = NoteSynthConfig(provider="lm_studio", lm_studio={"model": "qwen2.5-7b"})
        with patch("notesynth.llm.lm_studio.AsyncOpenAI"):
            provider = create_provider(config)
        assert isinstance(provider, LMStudioProvider)
        assert provider.model == "qwen2.5-7b"
