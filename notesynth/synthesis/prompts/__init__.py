# notesynth/synthesis/prompts/__init__.py
"""Prompt templates and synthesis prompt construction."""

import math
from pathlib import Path

from notesynth.models.notes import PageContext, RelatedNote

MAX_PROMPT_NOTES = 5


def load_prompt(name: str) -> str:
    """Load a prompt template by name.

    Args:
        name: Prompt filename without .txt extension (e.g., 'system', 'synthesis')

    Returns:
        Prompt content as string

    Raises:
        FileNotFoundError: If prompt file doesn't exist
    """
    prompt_path = Path(__file__).parent / f"{name}.txt"
    if not prompt_path.exists():
        raise FileNotFoundError(f"Prompt not found: {prompt_path}")

    return prompt_path.read_text(encoding="utf-8")


SYSTEM_PROMPT = load_prompt("system").strip()
_SYNTHESIS_TEMPLATE = load_prompt("synthesis").strip()


def _relevance(similarity: float | None) -> str:
    if similarity is None:
        return ""
    # Half-up, so 0.125 shows as 13%
    percent = math.floor(similarity * 100 + 0.5)
    return f" ({percent}% relevant)"


def format_note(index: int, note: RelatedNote) -> str:
    """Render one numbered note entry."""
    title = note.title or "Untitled"
    body = note.text or "No content"
    return f"{index}. **{title}**{_relevance(note.similarity)}\n   {body}"


def format_context(context: PageContext) -> str:
    """Render the current page section; the URL line only appears when known."""
    lines = [f"Current Page: **{context.title}**"]
    if context.url:
        lines.append(f"URL: {context.url}")
    return "\n".join(lines)


def construct_prompt(
    context: PageContext,
    notes: list[RelatedNote],
    max_notes: int = MAX_PROMPT_NOTES,
) -> str:
    """
    Build the synthesis prompt.

    Keeps the first max_notes notes in the order given; the caller ranks them.

    Args:
        context: Current page
        notes: Related notes, most relevant first
        max_notes: How many notes to include

    Returns:
        Markdown-flavored prompt text
    """
    entries = [format_note(i, note) for i, note in enumerate(notes[:max_notes], 1)]
    return _SYNTHESIS_TEMPLATE.format(
        context=format_context(context),
        notes="\n\n".join(entries),
    )


__all__ = [
    "MAX_PROMPT_NOTES",
    "SYSTEM_PROMPT",
    "construct_prompt",
    "format_context",
    "format_note",
    "load_prompt",
]
