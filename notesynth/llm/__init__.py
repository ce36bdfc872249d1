# notesynth/llm/__init__.py
"""Model provider integrations: provider protocol, Ollama and LM Studio."""

from .factory import create_provider
from .lm_studio import LMStudioProvider, LMStudioSession
from .ollama import OllamaProvider, OllamaSession
from .provider import Capabilities, CapabilityStatus, ModelProvider, SessionHandle

__all__ = [
    "ModelProvider",
    "SessionHandle",
    "Capabilities",
    "CapabilityStatus",
    "OllamaProvider",
    "OllamaSession",
    "LMStudioProvider",
    "LMStudioSession",
    "create_provider",
]
