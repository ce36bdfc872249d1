# notesynth/models/responses.py
"""Response models returned by the tools layer."""

from pydantic import BaseModel, Field


class AvailabilityResponse(BaseModel):
    """Result of an availability probe."""

    provider: str = Field(..., description="Configured provider name")
    model: str = Field(..., description="Configured model name")
    availability: str = Field(..., description="available, unavailable or error")
    detail: str | None = Field(default=None, description="Reason when not available")


class SynthesisResponse(BaseModel):
    """A completed synthesis, for --json output."""

    title: str = Field(..., description="Page title the synthesis is about")
    notes_used: int = Field(..., description="Number of notes included in the prompt")
    text: str = Field(..., description="Full generated text")
