# notesynth/llm/ollama.py
"""Ollama provider: model preloading as sessions, streaming chat generation."""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from uuid import uuid4

import httpx
from ollama import AsyncClient, ResponseError

from notesynth.errors import ProviderError

from .provider import Capabilities, CapabilityStatus, ModelProvider

logger = logging.getLogger(__name__)

# Errors the ollama client raises for an unreachable server or a failed request
_OLLAMA_ERRORS = (ResponseError, httpx.HTTPError, ConnectionError)


@dataclass
class OllamaSession:
    """
    Client-side session record.

    Ollama has no server-side sessions; a session pins the model in memory
    (via keep_alive) and carries the system prompt sent with every chat call.
    """

    model: str
    system_prompt: str
    keep_alive: str
    session_id: str = field(default_factory=lambda: uuid4().hex[:12])


def _chunk_content(chunk) -> str:
    """Extract text content from a streamed chat chunk."""
    return chunk.get("message", {}).get("content") or ""


class OllamaProvider(ModelProvider):
    """
    Async Ollama provider.

    Handles:
    - Capability probing (server reachable + model installed)
    - Session creation by preloading the model
    - Streaming chat generation
    - Session teardown by unloading the model (keep_alive=0)
    """

    name = "ollama"

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: int = 120,
        keep_alive: str = "10m",
    ):
        """
        Initialize Ollama provider.

        Args:
            base_url: Ollama API base URL (e.g., "http://localhost:11434")
            model: Model name (e.g., "gemma3:4b")
            timeout: Request timeout in seconds (generous for model loading)
            keep_alive: How long Ollama keeps the model loaded between requests
        """
        self.base_url = base_url
        self.model = model
        self.keep_alive = keep_alive
        self.client = AsyncClient(host=base_url, timeout=httpx.Timeout(timeout))

    async def check_capabilities(self) -> Capabilities:
        """
        Check Ollama server health and model availability.

        Returns:
            READY if the model is installed, DOWNLOADABLE if the server is up
            but the model must be pulled first.

        Raises:
            ProviderError: If the server is down or unreachable
        """
        try:
            models_response = await self.client.list()
        except _OLLAMA_ERRORS as e:
            raise ProviderError(f"Ollama server unreachable at {self.base_url}: {e}") from e

        available_models = [
            m.get("model") or m.get("name") for m in models_response.get("models", [])
        ]
        if self.model in available_models or f"{self.model}:latest" in available_models:
            return Capabilities(CapabilityStatus.READY)

        logger.warning(
            f"Model {self.model} not found in available models. "
            f"It will be pulled on first use."
        )
        return Capabilities(
            CapabilityStatus.DOWNLOADABLE,
            detail=f"model {self.model} is not installed yet",
        )

    async def create_session(self, system_prompt: str) -> OllamaSession:
        """
        Preload the model and return a session bound to system_prompt.

        Raises:
            ProviderError: If the model cannot be loaded
        """
        logger.info(f"Loading model={self.model} (keep_alive={self.keep_alive})")
        try:
            await self.client.generate(model=self.model, prompt="", keep_alive=self.keep_alive)
        except _OLLAMA_ERRORS as e:
            raise ProviderError(f"Failed to load model {self.model}: {e}") from e

        return OllamaSession(
            model=self.model,
            system_prompt=system_prompt,
            keep_alive=self.keep_alive,
        )

    async def stream_prompt(self, session: OllamaSession, prompt: str) -> AsyncIterator[str]:
        """
        Start a streaming chat generation.

        Waits for the first chunk so connection and model errors are raised
        here rather than on the consumer's first read.

        Raises:
            ProviderError: On API errors before the first chunk arrives
        """
        messages = [
            {"role": "system", "content": session.system_prompt},
            {"role": "user", "content": prompt},
        ]
        logger.info(f"Streaming with model={session.model}, prompt={len(prompt)} chars")

        try:
            response = await self.client.chat(
                model=session.model,
                messages=messages,
                stream=True,
                keep_alive=session.keep_alive,
            )
            chunks = response.__aiter__()
            first = await anext(chunks, None)
        except _OLLAMA_ERRORS as e:
            raise ProviderError(f"Ollama generation failed: {e}") from e

        return self._relay(first, chunks)

    async def _relay(self, first, chunks) -> AsyncIterator[str]:
        try:
            if first is None:
                return
            if content := _chunk_content(first):
                yield content
            async for chunk in chunks:
                if content := _chunk_content(chunk):
                    yield content
        except _OLLAMA_ERRORS as e:
            raise ProviderError(f"Ollama stream interrupted: {e}") from e
        finally:
            # Consumer may stop early; release the HTTP response
            await chunks.aclose()

    async def destroy_session(self, session: OllamaSession) -> None:
        """
        Unload the session's model from memory.

        Raises:
            ProviderError: If the unload request fails
        """
        try:
            await self.client.generate(model=session.model, prompt="", keep_alive=0)
        except _OLLAMA_ERRORS as e:
            raise ProviderError(f"Failed to unload model {session.model}: {e}") from e
        logger.info(f"Unloaded model={session.model} (session {session.session_id})")
