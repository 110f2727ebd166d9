"""
Candidate slot generation from a weekly availability schedule.

For a calendar date the weekday's opening range is walked from open to
close in steps of the provider's slot interval. A candidate
``[t, t + duration)`` is kept only while it ends at or before closing
time; an overrunning trailing slot is dropped, never truncated.

Usage:
    generator = SlotGenerator(ZoneInfo("America/Sao_Paulo"))
    slots = generator.generate(spec, date(2025, 3, 17), 30)
"""

from datetime import date, datetime, timedelta, tzinfo

from barber_booking.errors import ValidationError
from barber_booking.schemas.availability_schema import AvailabilitySpec, Weekday
from barber_booking.schemas.booking_schema import CandidateSlot


def generate_slots(
    spec: AvailabilitySpec,
    day: date,
    service_duration_minutes: int,
    tz: tzinfo,
) -> list[CandidateSlot]:
    """Return the ordered candidate slots for ``day``.

    An empty list means the provider is closed that weekday or the
    service does not fit inside the opening range.
    """
    if service_duration_minutes <= 0:
        raise ValidationError(
            f"Service duration must be positive, got {service_duration_minutes}"
        )

    schedule = spec.day(Weekday(day.weekday()))
    if not schedule.active:
        return []

    opens_at = datetime.combine(day, schedule.open_time, tzinfo=tz)
    closes_at = datetime.combine(day, schedule.close_time, tzinfo=tz)
    step = timedelta(minutes=spec.slot_interval_minutes)
    duration = timedelta(minutes=service_duration_minutes)

    slots: list[CandidateSlot] = []
    current = opens_at
    while current < closes_at:
        slot_end = current + duration
        if slot_end > closes_at:
            # Later starts only end later.
            break
        slots.append(CandidateSlot(start=current, end=slot_end))
        current += step
    return slots


class SlotGenerator:
    """Binds slot generation to the provider's local timezone."""

    def __init__(self, tz: tzinfo) -> None:
        self._tz = tz

    def generate(
        self, spec: AvailabilitySpec, day: date, service_duration_minutes: int
    ) -> list[CandidateSlot]:
        return generate_slots(spec, day, service_duration_minutes, self._tz)
