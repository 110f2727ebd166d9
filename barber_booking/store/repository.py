"""
Typed access to the scheduling documents.

Maps the document layout onto the pydantic models:

    barbeiros/{uid}                     provider profile (plan flags, isAdmin)
    barbeiros/{uid}/agenda/horarios     weekly availability
    servicos/{id}                       services, filtered by barbeiroId
    agendamentos/{id}                   bookings, filtered by barbeiroId
"""

import logging
from datetime import datetime
from typing import Optional

from barber_booking.errors import NotFoundError, ValidationError
from barber_booking.schemas.availability_schema import AvailabilitySpec
from barber_booking.schemas.booking_schema import Booking, BookingStatus, Service
from barber_booking.store.base import Document, DocumentStore, RangeFilter, join_path

logger = logging.getLogger(__name__)

PROVIDERS_COLLECTION = "barbeiros"
SERVICES_COLLECTION = "servicos"
BOOKINGS_COLLECTION = "agendamentos"
AVAILABILITY_DOCUMENT = "agenda/horarios"
PROFILE_AVAILABILITY_FIELD = "horarios"
KNOWN_STATUSES = frozenset(status.value for status in BookingStatus)


def availability_path(provider_id: str) -> str:
    return join_path(PROVIDERS_COLLECTION, provider_id, AVAILABILITY_DOCUMENT)


def profile_path(provider_id: str) -> str:
    return join_path(PROVIDERS_COLLECTION, provider_id)


class SchedulingRepository:
    """Reads and writes scheduling documents through a DocumentStore."""

    def __init__(
        self,
        store: DocumentStore,
        default_interval_minutes: int = 30,
        default_duration_minutes: int = 30,
    ) -> None:
        self._store = store
        self._default_interval = default_interval_minutes
        self._default_duration = default_duration_minutes

    # ------------------------------------------------------------------ #
    # Providers and availability
    # ------------------------------------------------------------------ #

    async def get_profile(self, provider_id: str) -> Optional[Document]:
        return await self._store.get_document(profile_path(provider_id))

    async def get_availability(self, provider_id: str) -> AvailabilitySpec:
        """Load the weekly schedule, falling back to the profile's ``horarios``.

        Raises:
            NotFoundError: neither document holds a schedule.
        """
        document = await self._store.get_document(availability_path(provider_id))
        if document is None:
            profile = await self.get_profile(provider_id)
            document = (profile or {}).get(PROFILE_AVAILABILITY_FIELD)
            if document:
                logger.debug("Using profile availability for provider %s", provider_id)
        if not document:
            raise NotFoundError(f"No availability configured for provider {provider_id}")
        return AvailabilitySpec.from_document(document, default_interval=self._default_interval)

    async def save_availability(self, provider_id: str, spec: AvailabilitySpec) -> None:
        await self._store.write_document(availability_path(provider_id), spec.to_document(), merge=True)

    # ------------------------------------------------------------------ #
    # Services
    # ------------------------------------------------------------------ #

    async def get_service(self, provider_id: str, service_id: str) -> Service:
        document = await self._store.get_document(join_path(SERVICES_COLLECTION, service_id))
        if document is None or document.get("barbeiroId") != provider_id:
            raise NotFoundError(f"Service {service_id} not found for provider {provider_id}")
        return Service.from_document(document, default_duration=self._default_duration)

    async def list_services(self, provider_id: str) -> list[Service]:
        documents = await self._store.query(SERVICES_COLLECTION, equals={"barbeiroId": provider_id})
        services = [Service.from_document(d, default_duration=self._default_duration) for d in documents]
        return sorted(services, key=lambda s: s.name)

    # ------------------------------------------------------------------ #
    # Bookings
    # ------------------------------------------------------------------ #

    async def bookings_starting_between(
        self,
        provider_id: str,
        start: datetime,
        end: datetime,
        status: Optional[BookingStatus] = None,
    ) -> list[Booking]:
        """Bookings for ``provider_id`` whose start lies in ``[start, end)``."""
        equals: dict = {"barbeiroId": provider_id}
        if status is not None:
            equals["status"] = status.value
        documents = await self._store.query(
            BOOKINGS_COLLECTION,
            equals=equals,
            ranges=[
                RangeFilter("dataHoraInicio", ">=", start),
                RangeFilter("dataHoraInicio", "<", end),
            ],
        )
        bookings = []
        for document in documents:
            try:
                bookings.append(Booking.from_document(document))
            except ValidationError:
                # Admin tools may write statuses this core does not model.
                if document.get("status", BookingStatus.CONFIRMED.value) in KNOWN_STATUSES:
                    raise
                logger.warning(
                    "Skipping booking %s with unknown status %r", document.get("id"), document.get("status")
                )
        return sorted(bookings, key=lambda b: b.start)

    async def create_booking(self, booking: Booking) -> Booking:
        booking_id = await self._store.add_document(BOOKINGS_COLLECTION, booking.to_document())
        return booking.model_copy(update={"id": booking_id})

    async def get_booking(self, booking_id: str) -> Booking:
        document = await self._store.get_document(join_path(BOOKINGS_COLLECTION, booking_id))
        if document is None:
            raise NotFoundError(f"Booking {booking_id} not found")
        return Booking.from_document(document)

    async def update_booking_status(self, booking_id: str, status: BookingStatus) -> None:
        await self._store.update_document(
            join_path(BOOKINGS_COLLECTION, booking_id), {"status": status.value}
        )

    async def delete_booking(self, booking_id: str) -> None:
        await self._store.delete_document(join_path(BOOKINGS_COLLECTION, booking_id))
