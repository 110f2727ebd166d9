"""Request ID logging context for tracing a booking across modules.

Each public scheduling call (slot listing, booking, cancellation) runs
under a correlation id. A caller may pass its own id, for example one
taken from an HTTP header; otherwise one is generated the first time the
current async context needs it. Every record that passes through the
root handlers carries ``request_id`` so one client's listing and booking
attempt can be followed through slot generation, conflict checks and the
store write.

Usage:
    from barber_booking.logging_context import bind_request_id, get_request_logger

    bind_request_id("REQ-abc123")
    logger = get_request_logger(__name__)
    logger.info("Booking committed")  # "... [REQ-abc123] Booking committed"
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Optional

NO_REQUEST_ID = "NO_REQUEST_ID"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)


def set_request_id(request_id: str) -> None:
    """Set the correlation ID for the current async context."""
    _request_id.set(request_id)


def get_request_id() -> str:
    """Retrieve the current correlation ID."""
    return _request_id.get()


def new_request_id() -> str:
    return f"REQ-{uuid.uuid4().hex[:12]}"


def bind_request_id(request_id: Optional[str] = None) -> str:
    """Make sure the current context has a correlation ID and return it.

    An explicit ``request_id`` always wins. Without one, an id already
    bound by an outer call is kept, so nested calls (cancel re-reading
    the agenda, a booking made right after a listing) share it.
    """
    if request_id:
        _request_id.set(request_id)
        return request_id
    current = _request_id.get()
    if current == NO_REQUEST_ID:
        current = new_request_id()
        _request_id.set(current)
    return current


class RequestIdFilter(logging.Filter):
    """Injects request_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def install_request_id_filter(handlers: list[logging.Handler]) -> None:
    """Attach RequestIdFilter to each handler that does not have one yet.

    Handler-level filters also cover records from third-party loggers,
    which never pass through get_request_logger.
    """
    for handler in handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())


def get_request_logger(name: str) -> logging.Logger:
    """Return a logger with the RequestIdFilter attached.

    Records keep ``request_id`` when they reach handlers configured
    outside load_config, such as pytest's caplog.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, RequestIdFilter) for f in logger.filters):
        logger.addFilter(RequestIdFilter())
    return logger
