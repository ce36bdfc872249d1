# notesynth/llm/factory.py
"""Factory for creating the configured model provider."""

from notesynth.config.schema import NoteSynthConfig

from .lm_studio import LMStudioProvider
from .ollama import OllamaProvider


def create_provider(config: NoteSynthConfig) -> OllamaProvider | LMStudioProvider:
    """
    Create the appropriate provider based on config.provider.

    Args:
        config: Root NoteSynthConfig

    Returns:
        OllamaProvider for provider="ollama", LMStudioProvider for provider="lm_studio"
    """
    if config.provider == "lm_studio":
        return LMStudioProvider(
            base_url=config.lm_studio.base_url,
            model=config.lm_studio.model,
            timeout=config.lm_studio.timeout,
        )
    return OllamaProvider(
        base_url=config.ollama.base_url,
        model=config.ollama.model,
        timeout=config.ollama.timeout,
        keep_alive=config.ollama.keep_alive,
    )
