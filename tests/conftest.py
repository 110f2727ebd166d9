"""Shared test fixtures and helpers."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from barber_booking.config import AppConfig, PlanConfig, SchedulingConfig
from barber_booking.context import SchedulingContext
from barber_booking.scheduling.service import SchedulingService
from barber_booking.schemas.availability_schema import AvailabilitySpec, DaySchedule, Weekday
from barber_booking.schemas.booking_schema import Booking, BookingStatus
from barber_booking.store.base import join_path
from barber_booking.store.memory import InMemoryDocumentStore
from barber_booking.store.repository import SERVICES_COLLECTION, availability_path, profile_path
from barber_booking.utils import parse_clock

TZ_NAME = "America/Sao_Paulo"
TZ = ZoneInfo(TZ_NAME)

PROVIDER = "barber-1"
SERVICE_30 = "corte"
SERVICE_45 = "barba"

MONDAY = date(2025, 3, 17)
TUESDAY = date(2025, 3, 18)
SUNDAY = date(2025, 3, 16)


def at(day: date, clock: str) -> datetime:
    """Aware datetime for ``HH:MM`` on ``day`` in the test timezone."""
    return datetime.combine(day, parse_clock(clock), tzinfo=TZ)


def make_spec(
    open_clock: str = "09:00",
    close_clock: str = "12:00",
    interval: int = 30,
    days: tuple[Weekday, ...] = (Weekday.MONDAY,),
) -> AvailabilitySpec:
    """Spec with the same hours on every weekday in ``days``."""
    schedule = DaySchedule(
        active=True, open_time=parse_clock(open_clock), close_time=parse_clock(close_clock)
    )
    return AvailabilitySpec(
        slot_interval_minutes=interval, weekdays={day: schedule for day in days}
    )


def make_booking(
    start: datetime,
    end: datetime,
    provider_id: str = PROVIDER,
    status: BookingStatus = BookingStatus.CONFIRMED,
) -> Booking:
    return Booking(
        provider_id=provider_id,
        client_name="Existing Client",
        service_id=SERVICE_30,
        service_name="Corte",
        start=start,
        end=end,
        status=status,
    )


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        scheduling=SchedulingConfig(
            timezone=TZ_NAME,
            default_slot_interval_minutes=30,
            default_service_duration_minutes=30,
        ),
        plans=PlanConfig(trial_days=14),
        log_level="INFO",
        app_name="test",
    )


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def context(store, config) -> SchedulingContext:
    return SchedulingContext(store=store, config=config)


@pytest.fixture
def repository(context):
    return context.repository()


@pytest.fixture
def scheduling(context) -> SchedulingService:
    return SchedulingService(context)


@pytest.fixture
async def seeded_store(store) -> InMemoryDocumentStore:
    """Provider open Monday 09:00-12:00, 30 minute interval, two services."""
    await store.write_document(profile_path(PROVIDER), {"nome": "Barbearia Teste", "plan": "free"})
    await store.write_document(availability_path(PROVIDER), make_spec().to_document())
    await store.write_document(
        join_path(SERVICES_COLLECTION, SERVICE_30),
        {"barbeiroId": PROVIDER, "nome": "Corte", "duracao": 30, "valor": 45.0},
    )
    await store.write_document(
        join_path(SERVICES_COLLECTION, SERVICE_45),
        {"barbeiroId": PROVIDER, "nome": "Barba", "duracao": 45, "preco": 35.0},
    )
    return store
