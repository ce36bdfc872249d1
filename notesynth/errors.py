# notesynth/errors.py
"""
Error taxonomy for notesynth.

Validation errors are raised before a request reaches the job queue. Every
other error is raised inside a queued job and settles only that job.
"""


class NoteSynthError(Exception):
    """Base class for all notesynth errors."""


class ValidationError(NoteSynthError):
    """Malformed synthesis request (missing title, empty notes, ...)."""


class SessionCreationError(NoteSynthError):
    """Provider failed to create a model session."""


class AvailabilityError(SessionCreationError):
    """Model provider is not ready, so no session can be created."""


class GenerationError(NoteSynthError):
    """Provider streaming call failed."""


class JobTimeoutError(NoteSynthError):
    """A queued job did not settle within the configured deadline."""


class QueueClosedError(NoteSynthError):
    """The job queue was shut down before the job could run."""


class ProviderError(NoteSynthError):
    """Raised by provider implementations; the core wraps it in a more specific error."""
