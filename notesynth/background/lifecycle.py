# notesynth/background/lifecycle.py
"""
Synthesis lifecycle management.

Builds the provider, session manager, queue and service once from config and
coordinates startup and shutdown.
"""

import logging

from notesynth.config.schema import NoteSynthConfig
from notesynth.llm.factory import create_provider
from notesynth.llm.provider import ModelProvider
from notesynth.synthesis.queue import JobQueue
from notesynth.synthesis.service import SynthesisService
from notesynth.synthesis.session import Availability, ModelSessionManager

logger = logging.getLogger(__name__)


class SynthesisLifecycle:
    """
    Synthesis lifecycle coordinator.

    Manages:
        - Provider creation from config
        - Availability probe on startup
        - Queue shutdown and session teardown
    """

    def __init__(
        self,
        config: NoteSynthConfig | None = None,
        provider: ModelProvider | None = None,
    ) -> None:
        """
        Initialize lifecycle manager.

        Args:
            config: NoteSynthConfig (defaults used if None)
            provider: Provider override (default: built from config)
        """
        self._config = config or NoteSynthConfig()
        self._provider = provider if provider is not None else create_provider(self._config)
        self._queue = JobQueue(job_timeout=self._config.synthesis.job_timeout)
        self._sessions = ModelSessionManager(self._provider)
        self._service = SynthesisService(
            self._provider,
            queue=self._queue,
            sessions=self._sessions,
            max_notes=self._config.synthesis.max_notes,
        )
        logger.info(
            f"Created SynthesisLifecycle (provider={self._provider.name}, "
            f"model={self._provider.model}, job_timeout={self._config.synthesis.job_timeout})"
        )

    @property
    def config(self) -> NoteSynthConfig:
        return self._config

    @property
    def provider(self) -> ModelProvider:
        return self._provider

    @property
    def service(self) -> SynthesisService:
        """Get the synthesis service (the only thing callers should talk to)."""
        return self._service

    async def startup(self) -> Availability:
        """
        Probe the provider so the first request can create a session.

        Returns:
            Availability from the probe
        """
        logger.info("Starting synthesis lifecycle...")
        availability = await self._service.check_availability()
        if availability is not Availability.AVAILABLE:
            logger.warning(
                f"{self._provider.name} not available at startup: "
                f"{self._sessions.availability_detail or availability.value}"
            )
        return availability

    async def shutdown(self) -> None:
        """
        Shut down gracefully.

        Steps:
            1. Stop the queue (pending jobs fail with QueueClosedError)
            2. Destroy the model session (errors are logged, not raised)
        """
        logger.info("Shutting down synthesis lifecycle...")
        await self._queue.shutdown()
        await self._service.destroy_session()
        logger.info("Synthesis lifecycle shutdown complete")

    async def __aenter__(self) -> "SynthesisLifecycle":
        await self.startup()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()
