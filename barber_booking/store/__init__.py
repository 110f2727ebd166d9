from barber_booking.store.base import DocumentStore, RangeFilter
from barber_booking.store.memory import InMemoryDocumentStore
from barber_booking.store.repository import SchedulingRepository

__all__ = ["DocumentStore", "RangeFilter", "InMemoryDocumentStore", "SchedulingRepository"]
