"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestPackageImports:
    def test_version(self):
        import barber_booking

        assert barber_booking.__version__

    def test_store_reexports(self):
        from barber_booking.store import DocumentStore, InMemoryDocumentStore, RangeFilter, SchedulingRepository

        assert issubclass(InMemoryDocumentStore, DocumentStore)
        assert RangeFilter is not None
        assert SchedulingRepository is not None

    def test_error_hierarchy(self):
        from barber_booking.errors import (
            ConflictError, NotFoundError, PermissionDeniedError,
            SchedulingError, StoreUnavailableError, ValidationError,
        )

        for cls in (ConflictError, NotFoundError, PermissionDeniedError, StoreUnavailableError, ValidationError):
            assert issubclass(cls, SchedulingError)
        assert issubclass(ValidationError, ValueError)
        assert issubclass(NotFoundError, LookupError)


class TestSchedulingImports:
    def test_import_scheduling_modules(self):
        from barber_booking.scheduling.booking import BookingTransaction
        from barber_booking.scheduling.conflicts import ConflictChecker, overlaps
        from barber_booking.scheduling.locks import ProviderLockRegistry
        from barber_booking.scheduling.service import SchedulingService
        from barber_booking.scheduling.slot_generator import SlotGenerator, generate_slots

        assert callable(generate_slots)
        assert callable(overlaps)
        assert all(c is not None for c in (
            BookingTransaction, ConflictChecker, ProviderLockRegistry, SchedulingService, SlotGenerator,
        ))

    def test_import_plans(self):
        from barber_booking.plans import expire_trials, has_premium_access, start_trial

        assert not has_premium_access(None)
        assert callable(start_trial)
        assert callable(expire_trials)


class TestConfigImport:
    def test_import_config(self):
        from barber_booking.config import settings

        assert settings.scheduling.timezone
        assert settings.scheduling.default_slot_interval_minutes >= 1
        assert settings.plans.trial_days >= 1


class TestConsoleDemo:
    def test_console_session_imports(self):
        from console_demo import ConsoleSession

        session = ConsoleSession()
        assert session.store is session.context.store
        assert set(ConsoleSession.SCENARIOS) == {"booking", "race"}
