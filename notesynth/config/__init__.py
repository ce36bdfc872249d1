# notesynth/config/__init__.py
"""Configuration system for notesynth."""

from .loader import get_config_path, load_config
from .schema import (
    LMStudioConfig,
    NoteSynthConfig,
    OllamaConfig,
    OutputConfig,
    SynthesisConfig,
)

__all__ = [
    "NoteSynthConfig",
    "OllamaConfig",
    "LMStudioConfig",
    "SynthesisConfig",
    "OutputConfig",
    "load_config",
    "get_config_path",
]
