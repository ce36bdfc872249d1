# notesynth/models/__init__.py
"""Data models for jobs, synthesis requests and tool responses."""

from .jobs import ActiveJob, Job, JobState, generate_job_id
from .notes import PageContext, RelatedNote, SynthesisRequest
from .responses import AvailabilityResponse, SynthesisResponse

__all__ = [
    "Job",
    "JobState",
    "ActiveJob",
    "generate_job_id",
    "PageContext",
    "RelatedNote",
    "SynthesisRequest",
    "AvailabilityResponse",
    "SynthesisResponse",
]
