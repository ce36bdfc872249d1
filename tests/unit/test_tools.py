# tests/unit/test_tools.py
"""Tests for the tools service layer."""

import pytest

from notesynth.background.lifecycle import SynthesisLifecycle
from notesynth.errors import ValidationError
from notesynth.llm.provider import CapabilityStatus
from notesynth.models.notes import RelatedNote
from notesynth.synthesis.service import SynthesisService
from notesynth.tools.check_availability import check_availability
from notesynth.tools.synthesize import (
    load_request,
    rank_notes,
    read_request_file,
    synthesize,
    synthesize_text,
)


class TestRankNotes:
    def test_descending_similarity(self):
        notes = [
            {"title": "low", "similarity": 0.2},
            {"title": "high", "similarity": 0.9},
            {"title": "mid", "similarity": 0.5},
        ]
        assert [n["title"] for n in rank_notes(notes)] == ["high", "mid", "low"]

    def test_unscored_notes_last_in_input_order(self):
        notes = [
            {"title": "a"},
            {"title": "scored", "similarity": 0.1},
            {"title": "b", "similarity": None},
        ]
        assert [n["title"] for n in rank_notes(notes)] == ["scored", "a", "b"]

    def test_ties_keep_input_order(self):
        notes = [RelatedNote(title="x", similarity=0.5), RelatedNote(title="y", similarity=0.5)]
        assert [n.title for n in rank_notes(notes)] == ["x", "y"]


class TestLoadRequest:
    def test_parses_context_and_notes(self):
        context, notes = load_request('{"context": {"title": "P"}, "notes": [{"title": "n"}]}')
        assert context == {"title": "P"}
        assert notes == [{"title": "n"}]

    def test_invalid_json(self):
        with pytest.raises(ValidationError, match="not valid JSON"):
            load_request("{nope")

    def test_not_an_object(self):
        with pytest.raises(ValidationError, match="JSON object"):
            load_request("[1, 2]")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="not found"):
            read_request_file(str(tmp_path / "missing.json"))

    def test_reads_file(self, tmp_path):
        path = tmp_path / "request.json"
        path.write_text('{"context": {"title": "P"}, "notes": []}')
        assert read_request_file(str(path)) == ({"title": "P"}, [])


class TestSynthesize:
    @pytest.mark.asyncio
    async def test_ranks_before_prompting(self, provider):
        service = SynthesisService(provider)
        notes = [{"title": "low", "similarity": 0.1}, {"title": "high", "similarity": 0.8}]

        stream = await synthesize({"title": "P"}, notes, service)
        [c async for c in stream]

        assert provider.prompts[0].index("**high**") < provider.prompts[0].index("**low**")

    @pytest.mark.asyncio
    async def test_no_rank_keeps_order(self, provider):
        service = SynthesisService(provider)
        notes = [{"title": "low", "similarity": 0.1}, {"title": "high", "similarity": 0.8}]

        await synthesize({"title": "P"}, notes, service, rank=False)

        assert provider.prompts[0].index("**low**") < provider.prompts[0].index("**high**")

    @pytest.mark.asyncio
    async def test_synthesize_text_collects_stream(self, provider):
        service = SynthesisService(provider)
        notes = [{"title": f"n{i}"} for i in range(7)]

        result = await synthesize_text({"title": "P"}, notes, service)

        assert result == {"title": "P", "notes_used": 5, "text": "Hello world"}


class TestCheckAvailability:
    @pytest.mark.asyncio
    async def test_available(self, provider):
        result = await check_availability(SynthesisLifecycle(provider=provider))
        assert result == {
            "provider": "fake",
            "model": "fake-model",
            "availability": "available",
            "detail": None,
        }

    @pytest.mark.asyncio
    async def test_unavailable(self, provider):
        provider.status = CapabilityStatus.UNAVAILABLE
        result = await check_availability(SynthesisLifecycle(provider=provider))
        assert result["availability"] == "unavailable"
