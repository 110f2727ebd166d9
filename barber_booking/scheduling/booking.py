"""
Transactional booking: conflict check and write as one logical unit.

Reading existing bookings, deciding there is no overlap and then writing
leaves a window in which a concurrent request for an overlapping range
can pass the same check. Both would commit and the provider would be
double-booked. The check and the write therefore run while holding the
provider's lock from ProviderLockRegistry, so requests for one provider
commit one at a time and the second sees the first's booking.
"""

from datetime import datetime, timedelta
from typing import Optional

from barber_booking.context import IdentityProvider
from barber_booking.errors import ConflictError, ValidationError
from barber_booking.logging_context import get_request_logger
from barber_booking.scheduling.conflicts import ConflictChecker
from barber_booking.scheduling.locks import ProviderLockRegistry
from barber_booking.schemas.booking_schema import (
    ANONYMOUS_CLIENT_ID,
    ANONYMOUS_CLIENT_NAME,
    Booking,
    BookingStatus,
    ClientInfo,
)
from barber_booking.store.repository import SchedulingRepository

logger = get_request_logger(__name__)


class BookingTransaction:
    """Validates, conflict-checks and persists a confirmed booking."""

    def __init__(
        self,
        repository: SchedulingRepository,
        checker: ConflictChecker,
        locks: ProviderLockRegistry,
        identity: IdentityProvider,
    ) -> None:
        self._repository = repository
        self._checker = checker
        self._locks = locks
        self._identity = identity

    async def book(
        self,
        provider_id: str,
        service_id: str,
        requested_start: datetime,
        client_info: Optional[ClientInfo] = None,
    ) -> Booking:
        """Create a confirmed booking or fail with no side effect.

        Raises:
            ValidationError: ``requested_start`` is naive or ids are empty.
            NotFoundError: the service no longer exists for the provider.
            ConflictError: the range overlaps a confirmed booking.
            StoreUnavailableError: the store failed; nothing was written.
        """
        if not provider_id or not service_id:
            raise ValidationError("provider_id and service_id are required")
        if requested_start.tzinfo is None or requested_start.utcoffset() is None:
            raise ValidationError("requested_start must be timezone-aware")

        service = await self._repository.get_service(provider_id, service_id)
        requested_end = requested_start + timedelta(minutes=service.duration_minutes)
        client = client_info or ClientInfo()

        async with self._locks.hold(provider_id):
            conflicts = await self._checker.find_conflicts(
                provider_id, requested_start, requested_end, first_only=True
            )
            if conflicts:
                logger.warning(
                    "Booking rejected for provider %s at %s: overlaps %s",
                    provider_id, requested_start.isoformat(), conflicts[0].id,
                )
                raise ConflictError(
                    "slot unavailable", conflicting_ids=tuple(b.id for b in conflicts if b.id)
                )

            booking = await self._repository.create_booking(
                Booking(
                    provider_id=provider_id,
                    client_id=self._identity.current_uid() or client.id or ANONYMOUS_CLIENT_ID,
                    client_name=(
                        client.name or self._identity.current_display_name() or ANONYMOUS_CLIENT_NAME
                    ),
                    client_phone=client.phone,
                    service_id=service.id,
                    service_name=service.name,
                    start=requested_start,
                    end=requested_end,
                    status=BookingStatus.CONFIRMED,
                )
            )

        logger.info(
            "Booking %s confirmed: provider %s, %s at %s",
            booking.id, provider_id, service.name, requested_start.isoformat(),
        )
        return booking
