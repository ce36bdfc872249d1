# tests/unit/conftest.py
"""Shared fixtures: an in-process fake model provider."""

import asyncio

import pytest

from notesynth.llm.provider import Capabilities, CapabilityStatus, ModelProvider


class FakeProvider(ModelProvider):
    """
    Scriptable provider that records every call.

    Set *_error attributes to make the matching call raise, or gate to make
    create_session wait until the test releases it.
    """

    name = "fake"
    model = "fake-model"

    def __init__(self, status=CapabilityStatus.READY, chunks=("Hello ", "world")):
        self.status = status
        self.chunks = list(chunks)
        self.capability_error: Exception | None = None
        self.create_error: Exception | None = None
        self.stream_error: Exception | None = None
        self.destroy_error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.capability_calls = 0
        self.created: list[dict] = []
        self.destroyed: list[dict] = []
        self.prompts: list[str] = []

    async def check_capabilities(self) -> Capabilities:
        self.capability_calls += 1
        if self.capability_error:
            raise self.capability_error
        return Capabilities(self.status)

    async def create_session(self, system_prompt: str) -> dict:
        if self.gate is not None:
            await self.gate.wait()
        if self.create_error:
            raise self.create_error
        session = {"id": len(self.created) + 1, "system_prompt": system_prompt}
        self.created.append(session)
        return session

    async def stream_prompt(self, session, prompt: str):
        if self.stream_error:
            raise self.stream_error
        self.prompts.append(prompt)
        return self._stream()

    async def _stream(self):
        for chunk in self.chunks:
            yield chunk

    async def destroy_session(self, session) -> None:
        self.destroyed.append(session)
        if self.destroy_error:
            raise self.destroy_error


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()
