# notesynth/validation/request.py
"""
Synthesis request validation.

Runs before a request is queued; every failure raises ValidationError.
"""

import logging
from collections.abc import Mapping
from typing import Any

import pydantic

from notesynth.errors import ValidationError
from notesynth.models.notes import PageContext, RelatedNote, SynthesisRequest

logger = logging.getLogger(__name__)


def _describe(error: pydantic.ValidationError) -> str:
    """First pydantic error as 'field: message'."""
    first = error.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ())) or "value"
    return f"{loc}: {first.get('msg', 'invalid')}"


def validate_context(context: Any) -> PageContext:
    """
    Validate the current page context.

    Args:
        context: PageContext or mapping with "title" and optional "url"

    Returns:
        PageContext

    Raises:
        ValidationError: If context is missing or has no title
    """
    if isinstance(context, PageContext):
        return context

    if not isinstance(context, Mapping):
        raise ValidationError("Invalid current context provided")

    try:
        return PageContext.model_validate(dict(context))
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid current context provided ({_describe(e)})") from e


def validate_notes(notes: Any) -> list[RelatedNote]:
    """
    Validate the related notes list.

    Order is preserved; ranking is the caller's job.

    Args:
        notes: List or tuple of RelatedNote / note mappings

    Returns:
        List of RelatedNote in input order

    Raises:
        ValidationError: If notes is missing, not a list, empty, or holds a bad entry
    """
    if not isinstance(notes, (list, tuple)):
        raise ValidationError("Related notes must be a list")

    if not notes:
        raise ValidationError("No related notes provided for synthesis")

    validated: list[RelatedNote] = []
    for index, item in enumerate(notes, 1):
        if isinstance(item, RelatedNote):
            validated.append(item)
            continue
        if not isinstance(item, Mapping):
            raise ValidationError(f"Note {index} must be a mapping, got {type(item).__name__}")
        try:
            validated.append(RelatedNote.model_validate(dict(item)))
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid note {index} ({_describe(e)})") from e

    return validated


def validate_request(context: Any, notes: Any) -> SynthesisRequest:
    """
    Validate a full synthesis request.

    Raises:
        ValidationError: On the first invalid field
    """
    request = SynthesisRequest(
        context=validate_context(context),
        notes=validate_notes(notes),
    )
    logger.debug(
        f"Validated synthesis request for '{request.context.title}' "
        f"({len(request.notes)} notes)"
    )
    return request
