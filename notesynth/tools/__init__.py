# notesynth/tools/__init__.py
"""Service-layer functions shared by the CLI and embedding applications."""

from .check_availability import check_availability
from .synthesize import load_request, rank_notes, read_request_file, synthesize, synthesize_text

__all__ = [
    "check_availability",
    "load_request",
    "rank_notes",
    "read_request_file",
    "synthesize",
    "synthesize_text",
]
