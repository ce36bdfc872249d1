# notesynth/synthesis/session.py
"""
Model session lifecycle.

Owns the single model session: probes availability, creates the session on
first use, and tears it down on request.
"""

import logging
from enum import Enum

from notesynth.errors import AvailabilityError, SessionCreationError
from notesynth.llm.provider import CapabilityStatus, ModelProvider, SessionHandle

from .prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class Availability(Enum):
    """Provider readiness as seen by the synthesis core."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


# A downloadable model is fetched by the backend on first use
_STATUS_TO_AVAILABILITY = {
    CapabilityStatus.READY: Availability.AVAILABLE,
    CapabilityStatus.DOWNLOADABLE: Availability.AVAILABLE,
    CapabilityStatus.UNAVAILABLE: Availability.UNAVAILABLE,
}


class ModelSessionManager:
    """
    Lazily creates and caches at most one model session.

    Session creation is not locked here; callers serialize it through the
    job queue.
    """

    def __init__(self, provider: ModelProvider, system_prompt: str = SYSTEM_PROMPT) -> None:
        self._provider = provider
        self._system_prompt = system_prompt
        self._session: SessionHandle | None = None
        self._availability: Availability | None = None
        self._availability_detail: str | None = None

    @property
    def availability(self) -> Availability | None:
        """Last probe result (None until check_availability() runs)."""
        return self._availability

    @property
    def availability_detail(self) -> str | None:
        """Reason reported with the last probe, if any."""
        return self._availability_detail

    @property
    def session(self) -> SessionHandle | None:
        return self._session

    @property
    def has_session(self) -> bool:
        return self._session is not None

    async def check_availability(self) -> Availability:
        """
        Probe the provider and memoize the result.

        Never raises: provider errors are reported as Availability.ERROR.
        """
        try:
            capabilities = await self._provider.check_capabilities()
        except Exception as e:
            logger.error(f"Error checking {self._provider.name} availability: {e}")
            self._availability = Availability.ERROR
            self._availability_detail = str(e)
            return self._availability

        self._availability = _STATUS_TO_AVAILABILITY[capabilities.status]
        self._availability_detail = capabilities.detail
        if self._availability is Availability.AVAILABLE:
            logger.info(f"{self._provider.name} is available ({capabilities.status.value})")
        else:
            logger.warning(
                f"{self._provider.name} is not available: {capabilities.detail or capabilities.status.value}"
            )
        return self._availability

    async def create_session(self) -> SessionHandle:
        """
        Create a new session and cache it.

        Probes availability first if it has never been checked.

        Returns:
            The new session handle

        Raises:
            AvailabilityError: If the provider is not available (create is not attempted)
            SessionCreationError: If the provider fails to create the session
        """
        if self._availability is None:
            await self.check_availability()

        if self._availability is not Availability.AVAILABLE:
            raise AvailabilityError(
                f"{self._provider.name} is not available "
                f"({self._availability.value}). Cannot create session."
            )

        logger.info(f"Creating {self._provider.name} session...")
        try:
            session = await self._provider.create_session(self._system_prompt)
        except Exception as e:
            logger.error(f"Failed to create session: {e}")
            raise SessionCreationError(str(e)) from e

        self._session = session
        logger.info("Session created successfully")
        return session

    async def get_or_create_session(self) -> SessionHandle:
        """Return the cached session, creating it on first use."""
        if self._session is None:
            return await self.create_session()
        return self._session

    async def destroy_session(self) -> None:
        """
        Release the active session, if any.

        Teardown errors are logged and swallowed; the cache is cleared either way.
        """
        if self._session is None:
            return

        session, self._session = self._session, None
        try:
            await self._provider.destroy_session(session)
            logger.info("Session destroyed")
        except Exception as e:
            logger.error(f"Error destroying session: {e}")
