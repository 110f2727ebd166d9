"""Error taxonomy shared by the scheduling core.

Every failure raised by the core is a ``SchedulingError`` subclass so
callers (HTTP handlers, the console demo) can map them in one place.
"""


class SchedulingError(Exception):
    """Base class for all scheduling-core failures."""

    retryable: bool = False


class ValidationError(SchedulingError, ValueError):
    """Malformed input: bad date, naive datetime, non-positive duration."""


class ConflictError(SchedulingError):
    """The requested slot overlaps a confirmed booking at commit time."""

    def __init__(self, message: str = "slot unavailable", conflicting_ids: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.conflicting_ids = conflicting_ids


class NotFoundError(SchedulingError, LookupError):
    """Provider, service, availability or booking document is absent."""


class StoreUnavailableError(SchedulingError):
    """Transient document-store failure. Safe for the caller to retry."""

    retryable = True


class PermissionDeniedError(SchedulingError):
    """Caller is unauthenticated or lacks the admin flag."""
