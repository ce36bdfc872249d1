# tests/unit/test_validation.py
"""Tests for synthesis request validation and note normalization."""

import pytest

from notesynth.errors import ValidationError
from notesynth.models.notes import PageContext, RelatedNote
from notesynth.validation import validate_context, validate_notes, validate_request


class TestValidateContext:
    def test_valid_mapping(self):
        context = validate_context({"title": "Page", "url": "https://x"})
        assert context == PageContext(title="Page", url="https://x")

    def test_page_context_passes_through(self):
        context = PageContext(title="Page")
        assert validate_context(context) is context

    def test_empty_url_becomes_none(self):
        assert validate_context({"title": "Page", "url": ""}).url is None

    @pytest.mark.parametrize(
        "context",
        [None, {}, {"url": "https://x"}, {"title": ""}, {"title": "   "}, "Page", ["Page"]],
    )
    def test_invalid_context(self, context):
        with pytest.raises(ValidationError, match="Invalid current context"):
            validate_context(context)


class TestValidateNotes:
    def test_preserves_order(self):
        notes = validate_notes([{"title": "b"}, {"title": "a"}])
        assert [n.title for n in notes] == ["b", "a"]

    def test_tuple_accepted(self):
        assert len(validate_notes(({"title": "a"},))) == 1

    @pytest.mark.parametrize("notes", [None, "notes", {"title": "a"}, 3])
    def test_not_a_list(self, notes):
        with pytest.raises(ValidationError, match="must be a list"):
            validate_notes(notes)

    def test_empty_list(self):
        with pytest.raises(ValidationError, match="No related notes"):
            validate_notes([])

    def test_non_mapping_entry(self):
        with pytest.raises(ValidationError, match="Note 2 must be a mapping"):
            validate_notes([{"title": "a"}, "b"])

    def test_similarity_out_of_range(self):
        with pytest.raises(ValidationError, match="Invalid note 1"):
            validate_notes([{"title": "a", "similarity": 1.5}])


class TestNoteShapes:
    def test_search_hit_shape_is_unwrapped(self):
        note = RelatedNote.model_validate(
            {"note": {"title": "Saved", "text": "body"}, "similarity": 0.8}
        )
        assert note.title == "Saved"
        assert note.text == "body"
        assert note.similarity == 0.8

    def test_content_becomes_text(self):
        note = RelatedNote.model_validate({"title": "T", "content": "body"})
        assert note.text == "body"

    def test_text_wins_over_content(self):
        note = RelatedNote.model_validate({"text": "text", "content": "content"})
        assert note.text == "text"

    def test_extra_fields_kept(self):
        note = RelatedNote.model_validate({"title": "T", "url": "https://saved", "tags": ["a"]})
        assert note.model_extra["url"] == "https://saved"


class TestValidateRequest:
    def test_builds_request(self):
        request = validate_request({"title": "Page"}, [{"title": "n"}])
        assert request.context.title == "Page"
        assert request.notes[0].title == "n"

    def test_context_checked_before_notes(self):
        with pytest.raises(ValidationError, match="context"):
            validate_request({"url": "https://x"}, [])
