# notesynth/validation/__init__.py
"""Input validation utilities."""

from .request import validate_context, validate_notes, validate_request

__all__ = [
    "validate_context",
    "validate_notes",
    "validate_request",
]
