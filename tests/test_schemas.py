"""Tests for pydantic models and their document mapping."""

from datetime import time
from decimal import Decimal

import pydantic
import pytest

from barber_booking.errors import ValidationError
from barber_booking.schemas.availability_schema import (
    WEEKDAY_DOCUMENT_KEYS,
    AvailabilitySpec,
    DaySchedule,
    Weekday,
)
from barber_booking.schemas.booking_schema import Booking, BookingStatus, ClientInfo, Service
from tests.conftest import MONDAY, PROVIDER, at, make_booking, make_spec


class TestDaySchedule:
    def test_inactive_day_needs_no_times(self):
        assert not DaySchedule(active=False).active

    def test_active_day_requires_open_before_close(self):
        with pytest.raises(pydantic.ValidationError):
            DaySchedule(active=True, open_time=time(18, 0), close_time=time(9, 0))

    def test_active_day_equal_times_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            DaySchedule(active=True, open_time=time(9, 0), close_time=time(9, 0))

    def test_active_day_missing_close_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            DaySchedule(active=True, open_time=time(9, 0))


class TestAvailabilitySpecDocument:
    def test_parses_stored_document(self):
        spec = AvailabilitySpec.from_document(
            {
                "id": "horarios",
                "intervalo": 20,
                "Segunda": {"ativo": True, "inicio": "09:00", "fim": "18:00"},
                "Domingo": {"ativo": False, "inicio": "00:00", "fim": "00:00"},
            }
        )
        assert spec.slot_interval_minutes == 20
        assert spec.day(Weekday.MONDAY) == DaySchedule(active=True, open_time=time(9), close_time=time(18))
        assert not spec.day(Weekday.SUNDAY).active
        assert not spec.day(Weekday.FRIDAY).active
        assert "id" not in spec.extra_fields

    def test_missing_interval_uses_default(self):
        assert AvailabilitySpec.from_document({}, default_interval=45).slot_interval_minutes == 45

    def test_negative_interval_rejected(self):
        spec = {"intervalo": -5, "Segunda": {"ativo": True, "inicio": "09:00", "fim": "10:00"}}
        with pytest.raises(ValidationError):
            AvailabilitySpec.from_document(spec)

    def test_bad_clock_rejected(self):
        with pytest.raises(ValidationError):
            AvailabilitySpec.from_document({"Terça": {"ativo": True, "inicio": "nine", "fim": "18:00"}})

    def test_unknown_fields_survive_round_trip(self):
        document = make_spec().to_document()
        document["atualizadoPor"] = "admin"
        assert AvailabilitySpec.from_document(document).to_document()["atualizadoPor"] == "admin"

    def test_to_document_writes_all_weekdays(self):
        document = make_spec().to_document()
        assert set(WEEKDAY_DOCUMENT_KEYS.values()) <= set(document)
        assert document["Segunda"] == {"ativo": True, "inicio": "09:00", "fim": "12:00"}
        assert document["Sábado"] == {"ativo": False, "inicio": "00:00", "fim": "00:00"}


class TestService:
    def test_from_document_reads_valor(self):
        service = Service.from_document(
            {"id": "s1", "barbeiroId": PROVIDER, "nome": "Corte", "duracao": 40, "valor": 50.5}
        )
        assert service.duration_minutes == 40
        assert service.price == Decimal("50.5")

    def test_from_document_reads_preco(self):
        service = Service.from_document({"id": "s1", "barbeiroId": PROVIDER, "preco": 20})
        assert service.price == Decimal("20")

    def test_missing_duration_uses_default(self):
        service = Service.from_document({"id": "s1", "barbeiroId": PROVIDER}, default_duration=25)
        assert service.duration_minutes == 25

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Service.from_document({"id": "s1", "barbeiroId": PROVIDER, "valor": -1})

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            Service.from_document({"id": "s1", "barbeiroId": PROVIDER, "duracao": -30})


class TestClientInfo:
    def test_blank_name_becomes_none(self):
        assert ClientInfo(name="   ").name is None

    def test_phone_normalized(self):
        assert ClientInfo(phone="+55 (11) 98765-4321").phone == "+5511987654321"


class TestBookingDocument:
    def test_round_trip_preserves_fields(self):
        booking = make_booking(at(MONDAY, "10:00"), at(MONDAY, "10:30")).model_copy(update={"id": "b1"})
        restored = Booking.from_document({"id": "b1", **booking.to_document()})
        assert restored == booking

    def test_status_stored_as_portuguese_value(self):
        booking = make_booking(at(MONDAY, "10:00"), at(MONDAY, "10:30"), status=BookingStatus.CANCELLED)
        assert booking.to_document()["status"] == "cancelado"
        assert not booking.is_confirmed

    def test_admin_added_fields_are_kept(self):
        document = make_booking(at(MONDAY, "10:00"), at(MONDAY, "10:30")).to_document()
        document["observacaoAdmin"] = "cliente VIP"
        booking = Booking.from_document({"id": "b1", **document})
        assert booking.to_document()["observacaoAdmin"] == "cliente VIP"

    def test_missing_times_rejected(self):
        with pytest.raises(ValidationError):
            Booking.from_document({"id": "b1", "barbeiroId": PROVIDER, "servicoId": "s1"})
