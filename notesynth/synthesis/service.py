# notesynth/synthesis/service.py
"""
Synthesis service: the public entry point of the synthesis core.

Validates requests, queues one job per request, and hands back the model's
token stream.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from notesynth.errors import GenerationError
from notesynth.llm.provider import ModelProvider
from notesynth.models.notes import SynthesisRequest
from notesynth.validation.request import validate_request

from .prompts import MAX_PROMPT_NOTES, construct_prompt
from .queue import JobQueue
from .session import Availability, ModelSessionManager

logger = logging.getLogger(__name__)


class SynthesisService:
    """
    Generates syntheses between a page and related notes.

    The provider, session manager and queue are passed in (or built from the
    provider), so independent instances never share state.
    """

    def __init__(
        self,
        provider: ModelProvider,
        queue: JobQueue | None = None,
        sessions: ModelSessionManager | None = None,
        max_notes: int = MAX_PROMPT_NOTES,
    ) -> None:
        """
        Initialize the service.

        Args:
            provider: Model provider used for generation
            queue: Job queue (default: a new JobQueue without timeout)
            sessions: Session manager (default: one bound to provider)
            max_notes: Maximum notes included in each prompt
        """
        self._provider = provider
        self._queue = queue if queue is not None else JobQueue()
        self._sessions = sessions if sessions is not None else ModelSessionManager(provider)
        self._max_notes = max_notes

    @property
    def queue(self) -> JobQueue:
        return self._queue

    @property
    def max_notes(self) -> int:
        return self._max_notes

    @property
    def sessions(self) -> ModelSessionManager:
        return self._sessions

    @property
    def is_synthesizing(self) -> bool:
        """True while a synthesis job is running (for UI throttling)."""
        return self._queue.is_active

    async def check_availability(self) -> Availability:
        return await self._sessions.check_availability()

    async def destroy_session(self) -> None:
        await self._sessions.destroy_session()

    async def generate_synthesis(self, context: Any, notes: Any) -> AsyncIterator[str]:
        """
        Generate a synthesis of how notes relate to the current page.

        Validation happens before the request is queued, so invalid input
        never touches the queue.

        Args:
            context: PageContext or mapping with "title" and optional "url"
            notes: Related notes, most relevant first

        Returns:
            Async iterator of generated text chunks (not yet consumed)

        Raises:
            ValidationError: If the request is malformed
            AvailabilityError: If the model is not available
            SessionCreationError: If the model session cannot be created
            GenerationError: If the streaming call fails
            JobTimeoutError: If the job exceeds the queue's timeout
        """
        request = validate_request(context, notes)
        logger.info(
            f"Starting synthesis for '{request.context.title}' "
            f"({len(request.notes)} related notes)"
        )

        return await self._queue.enqueue(lambda: self._synthesize(request))

    async def _synthesize(self, request: SynthesisRequest) -> AsyncIterator[str]:
        session = await self._sessions.get_or_create_session()

        prompt = construct_prompt(request.context, request.notes, self._max_notes)
        logger.debug(f"Constructed prompt:\n{prompt}")

        try:
            stream = await self._provider.stream_prompt(session, prompt)
        except Exception as e:
            logger.error(f"Synthesis generation failed: {e}")
            raise GenerationError(str(e)) from e

        logger.info("Streaming synthesis started")
        return stream
