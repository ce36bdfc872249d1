# notesynth/config/schema.py
"""
Pydantic configuration models for notesynth.

All models use extra="ignore" to allow unknown YAML keys without crashing.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class OllamaConfig(BaseModel):
    """Ollama server configuration."""

    model_config = ConfigDict(extra="ignore")

    base_url: str = Field(
        default="http://localhost:11434", description="Ollama API base URL"
    )
    model: str = Field(
        default="gemma3:4b",
        description="Ollama model used for synthesis",
    )
    timeout: int = Field(
        default=120, description="Request timeout in seconds (generous for model loading)"
    )
    keep_alive: str = Field(
        default="10m",
        description="How long Ollama keeps the model loaded while a session is active",
    )


class LMStudioConfig(BaseModel):
    """LM Studio server configuration."""

    model_config = ConfigDict(extra="ignore")

    base_url: str = Field(
        default="http://localhost:1234/v1", description="LM Studio API base URL"
    )
    model: str = Field(default="local-model", description="LM Studio model used for synthesis")
    timeout: int = Field(
        default=120, description="Request timeout in seconds"
    )


class SynthesisConfig(BaseModel):
    """Synthesis queue and prompt configuration."""

    model_config = ConfigDict(extra="ignore")

    job_timeout: float | None = Field(
        default=None,
        gt=0.0,
        description="Seconds a queued job may run before it fails (None = wait forever)",
    )
    max_notes: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Maximum related notes included in a prompt",
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    model_config = ConfigDict(extra="ignore")

    verbosity: Literal["quiet", "normal", "verbose"] = Field(
        default="normal", description="Logging verbosity level"
    )
    log_format: Literal["text", "json"] = Field(
        default="text", description="stderr log format: human-readable text or JSON lines"
    )


class NoteSynthConfig(BaseModel):
    """Root configuration for notesynth."""

    model_config = ConfigDict(extra="ignore")

    provider: Literal["ollama", "lm_studio"] = Field(
        default="ollama", description="LLM provider to use"
    )
    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    lm_studio: LMStudioConfig = Field(default_factory=LMStudioConfig)
    synthesis: SynthesisConfig = Field(default_factory=SynthesisConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @property
    def active_model(self) -> str:
        """Model name of the configured provider."""
        if self.provider == "lm_studio":
            return self.lm_studio.model
        return self.ollama.model
