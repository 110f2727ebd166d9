"""
Explicitly constructed dependencies for the scheduling components.

Instead of module-level store and auth handles, callers build one
SchedulingContext per process (sharing the store and lock registry)
and derive a per-request copy carrying the caller's identity.

The lock registry serializes bookings only among coroutines on one
event loop. Serving one context from several loops at the same time
(threads each running a loop, several worker processes) needs a
registry backed by a shared lock or a store transaction.

Usage:
    base = SchedulingContext(store=InMemoryDocumentStore())
    request_ctx = base.with_identity(StaticIdentity("uid-123"))
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Protocol

from barber_booking.config import AppConfig, settings
from barber_booking.scheduling.locks import ProviderLockRegistry
from barber_booking.store.base import DocumentStore
from barber_booking.store.repository import SchedulingRepository


class IdentityProvider(Protocol):
    """Supplies the authenticated caller, or None for anonymous clients."""

    def current_uid(self) -> Optional[str]:
        ...

    def current_display_name(self) -> Optional[str]:
        """Name to store when the client gave none: display name, else email."""
        ...


@dataclass(frozen=True)
class StaticIdentity:
    """Identity fixed at construction. Anonymous when ``uid`` is None."""

    uid: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None

    def current_uid(self) -> Optional[str]:
        return self.uid

    def current_display_name(self) -> Optional[str]:
        return self.display_name or self.email


@dataclass(frozen=True)
class SchedulingContext:
    """Store, identity, lock registry and config handed to every component."""

    store: DocumentStore
    identity: IdentityProvider = field(default_factory=StaticIdentity)
    locks: ProviderLockRegistry = field(default_factory=ProviderLockRegistry)
    config: AppConfig = field(default_factory=lambda: settings)

    def with_identity(self, identity: IdentityProvider) -> "SchedulingContext":
        """Copy sharing the same store and locks, for one caller."""
        return replace(self, identity=identity)

    def repository(self) -> SchedulingRepository:
        return SchedulingRepository(
            self.store,
            default_interval_minutes=self.config.scheduling.default_slot_interval_minutes,
            default_duration_minutes=self.config.scheduling.default_service_duration_minutes,
        )
