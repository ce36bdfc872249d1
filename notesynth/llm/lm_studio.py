# notesynth/llm/lm_studio.py
"""LM Studio provider using the OpenAI-compatible API."""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from uuid import uuid4

import httpx

from notesynth.errors import ProviderError

from .provider import Capabilities, CapabilityStatus, ModelProvider

try:
    from openai import AsyncOpenAI
except ImportError:
    AsyncOpenAI = None  # type: ignore[assignment,misc]

logger = logging.getLogger(__name__)

# LM Studio answers to any model name with whatever model is loaded
_DEFAULT_MODEL = "local-model"


@dataclass
class LMStudioSession:
    """Client-side session record (LM Studio manages model memory itself)."""

    model: str
    system_prompt: str
    session_id: str = field(default_factory=lambda: uuid4().hex[:12])


class LMStudioProvider(ModelProvider):
    """
    Async LM Studio provider using the OpenAI-compatible API.

    LM Studio exposes an OpenAI-compatible endpoint at http://localhost:1234/v1.
    Requires: pip install notesynth[lm-studio]
    """

    name = "lm_studio"

    def __init__(
        self,
        base_url: str = "http://localhost:1234/v1",
        model: str = _DEFAULT_MODEL,
        timeout: int = 120,
    ):
        """
        Initialize LM Studio provider.

        Args:
            base_url: LM Studio API base URL
            model:    Model name
            timeout:  Request timeout in seconds
        """
        if AsyncOpenAI is None:
            raise ImportError(
                "openai package required for LM Studio support. "
                "Install with: pip install notesynth[lm-studio]"
            )

        self.base_url = base_url
        self.model = model
        self._timeout = timeout
        self._client = AsyncOpenAI(base_url=base_url, api_key="lm-studio", timeout=timeout)

    async def check_capabilities(self) -> Capabilities:
        """
        Check LM Studio server health by listing available models.

        Raises:
            ProviderError: If the server is unreachable
        """
        try:
            async with httpx.AsyncClient(timeout=5.0) as http:
                response = await http.get(f"{self.base_url}/models")
        except httpx.HTTPError as e:
            raise ProviderError(f"LM Studio unreachable at {self.base_url}: {e}") from e

        if response.status_code != 200:
            return Capabilities(
                CapabilityStatus.UNAVAILABLE,
                detail=f"GET /models returned {response.status_code}",
            )

        model_ids = [m.get("id") for m in response.json().get("data", [])]
        if self.model == _DEFAULT_MODEL or self.model in model_ids:
            return Capabilities(CapabilityStatus.READY)
        return Capabilities(
            CapabilityStatus.UNAVAILABLE,
            detail=f"model {self.model} is not loaded in LM Studio",
        )

    async def create_session(self, system_prompt: str) -> LMStudioSession:
        """Return a client-side session; LM Studio loads models on request."""
        return LMStudioSession(model=self.model, system_prompt=system_prompt)

    async def stream_prompt(self, session: LMStudioSession, prompt: str) -> AsyncIterator[str]:
        """
        Start a streaming chat completion.

        Raises:
            ProviderError: If the request is rejected
        """
        logger.info(f"LMStudio.stream_prompt: model={session.model}, prompt={len(prompt)} chars")
        try:
            stream = await self._client.chat.completions.create(
                model=session.model,
                messages=[
                    {"role": "system", "content": session.system_prompt},
                    {"role": "user", "content": prompt},
                ],
                stream=True,
            )
        except Exception as e:
            raise ProviderError(f"LM Studio generation failed: {e}") from e

        return self._relay(stream)

    async def _relay(self, stream) -> AsyncIterator[str]:
        try:
            async for chunk in stream:
                delta = chunk.choices[0].delta if chunk.choices else None
                if delta and delta.content:
                    yield delta.content
        except Exception as e:
            raise ProviderError(f"LM Studio stream interrupted: {e}") from e
        finally:
            await stream.close()

    async def destroy_session(self, session: LMStudioSession) -> None:
        """Nothing to release server-side."""
        logger.info(f"Released LM Studio session {session.session_id}")
