"""Weekly availability models and their store document mapping.

The stored document is keyed by Portuguese weekday names, each entry
shaped ``{"ativo": bool, "inicio": "HH:MM", "fim": "HH:MM"}``, with the
default slot interval under ``intervalo``. Keys the scheduling core does
not understand are carried through untouched in ``extra_fields``.
"""

from datetime import time
from enum import IntEnum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from barber_booking.errors import ValidationError
from barber_booking.utils import format_clock, parse_clock

CLOSED_CLOCK = "00:00"
INTERVAL_KEY = "intervalo"


class Weekday(IntEnum):
    """Day of week numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


WEEKDAY_DOCUMENT_KEYS: dict[Weekday, str] = {
    Weekday.SUNDAY: "Domingo",
    Weekday.MONDAY: "Segunda",
    Weekday.TUESDAY: "Terça",
    Weekday.WEDNESDAY: "Quarta",
    Weekday.THURSDAY: "Quinta",
    Weekday.FRIDAY: "Sexta",
    Weekday.SATURDAY: "Sábado",
}


class DaySchedule(BaseModel):
    """Opening hours for one weekday. Inactive days carry no range."""

    active: bool = False
    open_time: Optional[time] = None
    close_time: Optional[time] = None

    @model_validator(mode="after")
    def _check_range(self) -> "DaySchedule":
        if not self.active:
            return self
        if self.open_time is None or self.close_time is None:
            raise ValueError("active day needs both open_time and close_time")
        if self.open_time >= self.close_time:
            raise ValueError(
                f"open_time {format_clock(self.open_time)} must be before "
                f"close_time {format_clock(self.close_time)}"
            )
        return self


class AvailabilitySpec(BaseModel):
    """A provider's recurring weekly schedule."""

    slot_interval_minutes: int = Field(default=30, ge=1)
    weekdays: dict[Weekday, DaySchedule] = Field(default_factory=dict)
    extra_fields: dict[str, Any] = Field(default_factory=dict)

    def day(self, weekday: Weekday) -> DaySchedule:
        """Schedule for ``weekday``; a missing entry means closed."""
        return self.weekdays.get(weekday, DaySchedule())

    @classmethod
    def from_document(cls, document: dict[str, Any], default_interval: int = 30) -> "AvailabilitySpec":
        """Build a spec from a stored ``horarios`` document.

        Raises:
            ValidationError: if an entry is malformed or an active day has
                ``inicio >= fim``.
        """
        data = dict(document)
        data.pop("id", None)
        interval = data.pop(INTERVAL_KEY, None) or default_interval
        weekdays: dict[Weekday, DaySchedule] = {}
        try:
            for weekday, key in WEEKDAY_DOCUMENT_KEYS.items():
                raw = data.pop(key, None)
                if raw is None:
                    continue
                if not raw.get("ativo"):
                    weekdays[weekday] = DaySchedule(active=False)
                    continue
                weekdays[weekday] = DaySchedule(
                    active=True,
                    open_time=parse_clock(raw["inicio"]),
                    close_time=parse_clock(raw["fim"]),
                )
            return cls(slot_interval_minutes=interval, weekdays=weekdays, extra_fields=data)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise ValidationError(f"Invalid availability document: {exc}") from exc

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = dict(self.extra_fields)
        document[INTERVAL_KEY] = self.slot_interval_minutes
        for weekday, key in WEEKDAY_DOCUMENT_KEYS.items():
            schedule = self.day(weekday)
            if schedule.active:
                document[key] = {
                    "ativo": True,
                    "inicio": format_clock(schedule.open_time),
                    "fim": format_clock(schedule.close_time),
                }
            else:
                document[key] = {"ativo": False, "inicio": CLOSED_CLOCK, "fim": CLOSED_CLOCK}
        return document
