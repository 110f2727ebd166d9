"""
Public scheduling surface: availability, slot listing, booking, agenda.

Wires SlotGenerator, ConflictChecker and BookingTransaction together
from one SchedulingContext.

Usage:
    service = SchedulingService(ctx)
    slots = await service.list_available_slots("uid-1", date(2025, 3, 17), "svc-1")
    booking = await service.book("uid-1", "svc-1", slots[0].start, ClientInfo(name="Ana"))
"""

from datetime import date, datetime
from typing import Optional

from barber_booking.context import SchedulingContext
from barber_booking.errors import NotFoundError, ValidationError
from barber_booking.logging_context import bind_request_id, get_request_logger
from barber_booking.scheduling.booking import BookingTransaction
from barber_booking.scheduling.conflicts import ConflictChecker
from barber_booking.scheduling.slot_generator import SlotGenerator
from barber_booking.schemas.availability_schema import AvailabilitySpec
from barber_booking.schemas.booking_schema import (
    Booking,
    BookingStatus,
    CandidateSlot,
    ClientInfo,
    Service,
)
from barber_booking.utils import day_bounds

logger = get_request_logger(__name__)


class SchedulingService:
    """Entry point used by request handlers and the console demo."""

    def __init__(self, context: SchedulingContext) -> None:
        self._context = context
        self._tz = context.config.scheduling.tzinfo
        self._repository = context.repository()
        self.generator = SlotGenerator(self._tz)
        self.checker = ConflictChecker(self._repository, self._tz)
        self.transaction = BookingTransaction(
            self._repository, self.checker, context.locks, context.identity
        )

    # ------------------------------------------------------------------ #
    # Availability and services
    # ------------------------------------------------------------------ #

    async def get_availability(self, provider_id: str) -> AvailabilitySpec:
        return await self._repository.get_availability(provider_id)

    async def save_availability(self, provider_id: str, spec: AvailabilitySpec) -> None:
        await self._repository.save_availability(provider_id, spec)
        logger.info("Availability saved for provider %s", provider_id)

    async def list_services(self, provider_id: str) -> list[Service]:
        return await self._repository.list_services(provider_id)

    # ------------------------------------------------------------------ #
    # Slots and booking
    # ------------------------------------------------------------------ #

    async def list_available_slots(
        self,
        provider_id: str,
        day: date,
        service_id: str,
        request_id: Optional[str] = None,
    ) -> list[CandidateSlot]:
        """Candidate slots for ``day`` that do not overlap a confirmed booking.

        A missing provider, schedule or service means nothing is bookable
        and yields an empty list. Store failures propagate.
        """
        bind_request_id(request_id)
        try:
            spec = await self._repository.get_availability(provider_id)
            service = await self._repository.get_service(provider_id, service_id)
        except NotFoundError as exc:
            logger.info("No bookable slots for provider %s: %s", provider_id, exc)
            return []

        candidates = self.generator.generate(spec, day, service.duration_minutes)
        available = []
        for slot in candidates:
            if not await self.checker.has_conflict(provider_id, slot.start, slot.end):
                available.append(slot)
        logger.debug(
            "Provider %s on %s: %d of %d candidates free",
            provider_id, day.isoformat(), len(available), len(candidates),
        )
        return available

    async def book(
        self,
        provider_id: str,
        service_id: str,
        start: datetime,
        client_info: Optional[ClientInfo] = None,
        request_id: Optional[str] = None,
    ) -> Booking:
        bind_request_id(request_id)
        return await self.transaction.book(provider_id, service_id, start, client_info)

    # ------------------------------------------------------------------ #
    # Agenda management
    # ------------------------------------------------------------------ #

    async def bookings_for_day(self, provider_id: str, day: date) -> list[Booking]:
        """The provider's agenda for ``day`` in start order, any status."""
        day_start, day_end = day_bounds(day, self._tz)
        return await self._repository.bookings_starting_between(provider_id, day_start, day_end)

    async def cancel_booking(self, booking_id: str, request_id: Optional[str] = None) -> Booking:
        """Move a confirmed booking to cancelled. The time range is kept.

        Raises:
            NotFoundError: unknown booking id.
            ValidationError: the booking is already cancelled.
        """
        bind_request_id(request_id)
        booking = await self._repository.get_booking(booking_id)
        async with self._context.locks.hold(booking.provider_id):
            booking = await self._repository.get_booking(booking_id)
            if booking.status == BookingStatus.CANCELLED:
                raise ValidationError(f"Booking {booking_id} is already cancelled")
            await self._repository.update_booking_status(booking_id, BookingStatus.CANCELLED)
        logger.info("Booking %s cancelled", booking_id)
        return booking.model_copy(update={"status": BookingStatus.CANCELLED})

    async def delete_booking(self, booking_id: str, request_id: Optional[str] = None) -> None:
        """Remove a booking document outright, freeing its range.

        Raises:
            NotFoundError: unknown booking id.
        """
        bind_request_id(request_id)
        booking = await self._repository.get_booking(booking_id)
        async with self._context.locks.hold(booking.provider_id):
            await self._repository.delete_booking(booking_id)
        logger.info("Booking %s deleted (provider %s)", booking_id, booking.provider_id)
