"""Tests for configuration loading and validation."""

import pytest

from barber_booking.config import AppConfig, PlanConfig, SchedulingConfig, _safe_int, _validate_config


def _config(scheduling: SchedulingConfig = None, plans: PlanConfig = None) -> AppConfig:
    config = AppConfig.__new__(AppConfig)
    object.__setattr__(config, "scheduling", scheduling or SchedulingConfig())
    object.__setattr__(config, "plans", plans or PlanConfig())
    object.__setattr__(config, "log_level", "INFO")
    object.__setattr__(config, "app_name", "test")
    return config


def _scheduling(timezone="America/Sao_Paulo", interval=30, duration=30) -> SchedulingConfig:
    scheduling = SchedulingConfig.__new__(SchedulingConfig)
    object.__setattr__(scheduling, "timezone", timezone)
    object.__setattr__(scheduling, "default_slot_interval_minutes", interval)
    object.__setattr__(scheduling, "default_service_duration_minutes", duration)
    return scheduling


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        _validate_config(AppConfig())  # should not raise

    def test_unknown_timezone(self):
        with pytest.raises(ValueError, match="SCHEDULING_TIMEZONE"):
            _validate_config(_config(scheduling=_scheduling(timezone="Mars/Olympus_Mons")))

    def test_zero_slot_interval(self):
        with pytest.raises(ValueError, match="DEFAULT_SLOT_INTERVAL_MINUTES"):
            _validate_config(_config(scheduling=_scheduling(interval=0)))

    def test_negative_service_duration(self):
        with pytest.raises(ValueError, match="DEFAULT_SERVICE_DURATION_MINUTES"):
            _validate_config(_config(scheduling=_scheduling(duration=-15)))

    def test_zero_trial_days(self):
        plans = PlanConfig.__new__(PlanConfig)
        object.__setattr__(plans, "trial_days", 0)
        with pytest.raises(ValueError, match="TRIAL_DAYS"):
            _validate_config(_config(plans=plans))

    def test_tzinfo_property(self):
        assert _scheduling(timezone="UTC").tzinfo.key == "UTC"

    def test_safe_int_parsing(self):
        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_int_rejects_garbage(self, monkeypatch):
        monkeypatch.setenv("BARBER_TEST_INT", "thirty")
        with pytest.raises(ValueError, match="BARBER_TEST_INT"):
            _safe_int("BARBER_TEST_INT", "30")
