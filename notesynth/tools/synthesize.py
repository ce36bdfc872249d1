# notesynth/tools/synthesize.py
"""
synthesize tool implementation.

Loads a request file, ranks notes, and runs a synthesis through the service.
"""

import json
import logging
import sys
from collections.abc import AsyncIterator, Mapping
from pathlib import Path
from typing import Any

from notesynth.errors import ValidationError
from notesynth.models.notes import RelatedNote
from notesynth.models.responses import SynthesisResponse
from notesynth.synthesis.service import SynthesisService

logger = logging.getLogger(__name__)


def load_request(text: str) -> tuple[Any, Any]:
    """
    Parse a JSON synthesis request.

    Expected shape: {"context": {"title": ..., "url": ...}, "notes": [...]}

    Args:
        text: JSON document

    Returns:
        (context, notes) as loaded; the service validates them

    Raises:
        ValidationError: If the document is not JSON or not an object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Request is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError("Request must be a JSON object with 'context' and 'notes'")

    return data.get("context"), data.get("notes")


def read_request_file(path: str) -> tuple[Any, Any]:
    """Read and parse a request file; "-" reads stdin."""
    if path == "-":
        return load_request(sys.stdin.read())

    request_path = Path(path)
    if not request_path.is_file():
        raise ValidationError(f"Request file not found: {request_path}")
    return load_request(request_path.read_text(encoding="utf-8"))


def _similarity(item: Any) -> float | None:
    if isinstance(item, RelatedNote):
        return item.similarity
    if isinstance(item, Mapping):
        value = item.get("similarity")
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    return None


def rank_notes(notes: list) -> list:
    """
    Order notes by descending similarity.

    Notes without a score follow the scored ones; ties keep input order.
    """
    return sorted(notes, key=lambda item: (_similarity(item) is None, -(_similarity(item) or 0.0)))


async def synthesize(
    context: Any,
    notes: Any,
    service: SynthesisService,
    rank: bool = True,
) -> AsyncIterator[str]:
    """
    Start a synthesis and return its stream.

    Args:
        context: Page context mapping
        notes: Related notes
        service: Synthesis service
        rank: Sort notes by similarity before the prompt keeps the top entries

    Returns:
        Async iterator of text chunks

    Raises:
        ValidationError: If the request is malformed
    """
    if rank and isinstance(notes, (list, tuple)):
        notes = rank_notes(list(notes))
    return await service.generate_synthesis(context, notes)


async def synthesize_text(
    context: Any,
    notes: Any,
    service: SynthesisService,
    rank: bool = True,
) -> dict:
    """
    Run a synthesis and collect the full text.

    Returns:
        SynthesisResponse as dict
    """
    stream = await synthesize(context, notes, service, rank=rank)
    chunks = [chunk async for chunk in stream]

    response = SynthesisResponse(
        title=context["title"] if isinstance(context, Mapping) else context.title,
        notes_used=min(len(notes), service.max_notes),
        text="".join(chunks),
    )
    logger.info(f"Synthesis for '{response.title}' produced {len(response.text)} chars")
    return response.model_dump()
