"""
Conflict detection between a candidate range and confirmed bookings.

Ranges are half-open: ``[start, end)``. Two ranges touching at a
boundary do not conflict. The lookup scans every confirmed booking that
starts on the candidate's provider-local calendar day and filters for
overlap in Python.
"""

import logging
from datetime import datetime, tzinfo

from barber_booking.schemas.booking_schema import Booking, BookingStatus
from barber_booking.store.repository import SchedulingRepository
from barber_booking.utils import day_bounds

logger = logging.getLogger(__name__)


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open interval intersection."""
    return a_start < b_end and b_start < a_end


class ConflictChecker:
    """Answers whether a provider is already booked for a range.

    On its own this is advisory: another request may write between the
    check and the caller's own write. BookingTransaction runs it under
    the provider lock.
    """

    def __init__(self, repository: SchedulingRepository, tz: tzinfo) -> None:
        self._repository = repository
        self._tz = tz

    async def find_conflicts(
        self,
        provider_id: str,
        start: datetime,
        end: datetime,
        first_only: bool = False,
    ) -> list[Booking]:
        day_start, day_end = day_bounds(start.astimezone(self._tz).date(), self._tz)
        bookings = await self._repository.bookings_starting_between(
            provider_id, day_start, day_end, status=BookingStatus.CONFIRMED
        )
        conflicts = []
        for booking in bookings:
            if overlaps(start, end, booking.start, booking.end):
                conflicts.append(booking)
                if first_only:
                    break
        return conflicts

    async def has_conflict(self, provider_id: str, start: datetime, end: datetime) -> bool:
        conflicts = await self.find_conflicts(provider_id, start, end, first_only=True)
        if conflicts:
            logger.debug(
                "Range %s-%s for provider %s overlaps booking %s",
                start.isoformat(), end.isoformat(), provider_id, conflicts[0].id,
            )
        return bool(conflicts)
