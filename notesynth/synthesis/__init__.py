# notesynth/synthesis/__init__.py
"""
Synthesis core.

Exports:
    - JobQueue: Sequential FIFO job queue
    - ModelSessionManager: Lazy model session lifecycle
    - SynthesisService: Validation + queued generation entry point
    - construct_prompt: Prompt builder
"""

from .prompts import MAX_PROMPT_NOTES, SYSTEM_PROMPT, construct_prompt
from .queue import JobQueue
from .service import SynthesisService
from .session import Availability, ModelSessionManager

__all__ = [
    "JobQueue",
    "ModelSessionManager",
    "Availability",
    "SynthesisService",
    "construct_prompt",
    "MAX_PROMPT_NOTES",
    "SYSTEM_PROMPT",
]
