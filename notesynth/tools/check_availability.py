# notesynth/tools/check_availability.py
"""
check_availability tool implementation.

Probes the configured provider and reports whether synthesis can run.
"""

import logging

from notesynth.background.lifecycle import SynthesisLifecycle
from notesynth.models.responses import AvailabilityResponse

logger = logging.getLogger(__name__)


async def check_availability(lifecycle: SynthesisLifecycle) -> dict:
    """
    Check whether the configured model can be used.

    Args:
        lifecycle: Lifecycle owning the provider and service

    Returns:
        AvailabilityResponse as dict
    """
    availability = await lifecycle.service.check_availability()
    response = AvailabilityResponse(
        provider=lifecycle.provider.name,
        model=lifecycle.provider.model,
        availability=availability.value,
        detail=lifecycle.service.sessions.availability_detail,
    )
    logger.info(f"Availability: {response.availability} ({response.provider}/{response.model})")
    return response.model_dump()
