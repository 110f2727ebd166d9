"""Service, booking and slot data models."""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from barber_booking.errors import ValidationError
from barber_booking.utils import normalize_phone

ANONYMOUS_CLIENT_ID = "anonimo"
ANONYMOUS_CLIENT_NAME = "Anonimo"


class BookingStatus(str, Enum):
    """Stored status values. Only confirmed bookings block slots."""

    CONFIRMED = "confirmado"
    CANCELLED = "cancelado"


class Service(BaseModel):
    """A bookable service offered by one provider."""

    id: str
    provider_id: str
    name: str
    duration_minutes: int = Field(gt=0)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    description: str = ""

    @classmethod
    def from_document(cls, document: dict[str, Any], default_duration: int = 30) -> "Service":
        try:
            return cls(
                id=document["id"],
                provider_id=document["barbeiroId"],
                name=document.get("nome") or "",
                duration_minutes=document.get("duracao") or default_duration,
                price=document.get("valor", document.get("preco")) or 0,
                description=document.get("descricao") or "",
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise ValidationError(f"Invalid service document: {exc}") from exc


class ClientInfo(BaseModel):
    """Who is booking. Every field is optional for anonymous clients."""

    id: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("phone")
    @classmethod
    def _normalize_phone(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        return normalize_phone(value) or None


class CandidateSlot(BaseModel):
    """A computed, not-yet-reserved ``[start, end)`` range."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime


class Booking(BaseModel):
    """A client's reservation of one service with one provider."""

    id: Optional[str] = None
    provider_id: str
    client_id: str = ANONYMOUS_CLIENT_ID
    client_name: str = ANONYMOUS_CLIENT_NAME
    client_phone: Optional[str] = None
    service_id: str
    service_name: str = ""
    start: datetime
    end: datetime
    status: BookingStatus = BookingStatus.CONFIRMED
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    extra_fields: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_confirmed(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Booking":
        known = {
            "id", "barbeiroId", "clienteId", "clienteNome", "clienteTelefone",
            "servicoId", "servicoNome", "dataHoraInicio", "dataHoraFim",
            "status", "criadoEm",
        }
        try:
            fields: dict[str, Any] = dict(
                id=document.get("id"),
                provider_id=document["barbeiroId"],
                client_id=document.get("clienteId") or ANONYMOUS_CLIENT_ID,
                client_name=document.get("clienteNome") or ANONYMOUS_CLIENT_NAME,
                client_phone=document.get("clienteTelefone"),
                service_id=document["servicoId"],
                service_name=document.get("servicoNome") or "",
                start=document["dataHoraInicio"],
                end=document["dataHoraFim"],
                status=document.get("status", BookingStatus.CONFIRMED),
                extra_fields={k: v for k, v in document.items() if k not in known},
            )
            if document.get("criadoEm") is not None:
                fields["created_at"] = document["criadoEm"]
            return cls(**fields)
        except (ValueError, KeyError, TypeError) as exc:
            raise ValidationError(f"Invalid booking document: {exc}") from exc

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = dict(self.extra_fields)
        document.update(
            {
                "barbeiroId": self.provider_id,
                "clienteId": self.client_id,
                "clienteNome": self.client_name,
                "servicoId": self.service_id,
                "servicoNome": self.service_name,
                "dataHoraInicio": self.start,
                "dataHoraFim": self.end,
                "status": self.status.value,
                "criadoEm": self.created_at,
            }
        )
        if self.client_phone:
            document["clienteTelefone"] = self.client_phone
        return document
