# notesynth/llm/provider.py
"""
Model provider protocol definition.

Defines the abstract interface that OllamaProvider and LMStudioProvider implement.
The synthesis core only talks to providers through this interface.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

# Opaque to the core; each provider returns its own session type.
SessionHandle = Any


class CapabilityStatus(Enum):
    """Provider readiness as reported by the model backend."""

    READY = "ready"
    DOWNLOADABLE = "downloadable"
    UNAVAILABLE = "unavailable"


@dataclass
class Capabilities:
    """Result of a provider capability probe."""

    status: CapabilityStatus
    detail: str | None = None  # human-readable reason, shown by `notesynth status`


class ModelProvider(ABC):
    """
    Abstract base class for model providers.

    Implementations wrap one local model backend. They raise ProviderError
    for backend failures and leave error policy to the synthesis core.
    """

    name: str = "provider"
    model: str = ""

    @abstractmethod
    async def check_capabilities(self) -> Capabilities:
        """
        Probe the backend for model readiness.

        Returns:
            Capabilities with READY, DOWNLOADABLE or UNAVAILABLE status

        Raises:
            ProviderError: If the backend cannot be queried at all
        """
        pass

    @abstractmethod
    async def create_session(self, system_prompt: str) -> SessionHandle:
        """
        Create a model session bound to a fixed system prompt.

        Args:
            system_prompt: System instruction every prompt in the session uses

        Returns:
            Opaque session handle

        Raises:
            ProviderError: If the session cannot be created
        """
        pass

    @abstractmethod
    async def stream_prompt(self, session: SessionHandle, prompt: str) -> AsyncIterator[str]:
        """
        Start a streaming generation for one prompt.

        Args:
            session: Handle returned by create_session()
            prompt: User prompt text

        Returns:
            Lazy, forward-only async iterator of text chunks

        Raises:
            ProviderError: If generation cannot be started
        """
        pass

    @abstractmethod
    async def destroy_session(self, session: SessionHandle) -> None:
        """
        Release a session and any backend resources it holds.

        Args:
            session: Handle returned by create_session()
        """
        pass
