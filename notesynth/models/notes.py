# notesynth/models/notes.py
"""
Synthesis request models.

Page context and related notes arrive from the note library as loosely shaped
dicts; these models normalize them before prompt construction.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PageContext(BaseModel):
    """The page the user is currently looking at."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(description="Page title")
    url: str | None = Field(default=None, description="Page URL")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title cannot be blank")
        return value

    @field_validator("url")
    @classmethod
    def empty_url_is_none(cls, value: str | None) -> str | None:
        return value or None


class RelatedNote(BaseModel):
    """
    A saved note ranked as related to the current page.

    Accepts the library's two shapes: a flat note dict, or a search hit
    {"note": {...}, "similarity": 0.8}. A body stored under "content" is
    read as text.
    """

    model_config = ConfigDict(extra="allow")

    title: str | None = Field(default=None, description="Note title")
    text: str | None = Field(default=None, description="Note body")
    similarity: float | None = Field(
        default=None, ge=0.0, le=1.0, description="Relevance to the page (0-1)"
    )

    @model_validator(mode="before")
    @classmethod
    def normalize_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        note = data.get("note")
        if isinstance(note, dict):
            merged = {**note}
            if data.get("similarity") is not None:
                merged["similarity"] = data["similarity"]
            data = merged

        if not data.get("text") and data.get("content"):
            data = {**data, "text": data["content"]}
        return data


class SynthesisRequest(BaseModel):
    """A validated request: page context plus a non-empty, ordered note list."""

    context: PageContext
    notes: list[RelatedNote] = Field(min_length=1)
