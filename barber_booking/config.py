"""
Centralized configuration with environment variable overrides.

Timezone, slot defaults and plan settings are configurable here.
Nothing is hardcoded in scheduling or store logic.
"""

import logging
import os
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from barber_booking.logging_context import install_request_id_filter

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s"


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class SchedulingConfig:
    """Slot generation and calendar settings."""

    timezone: str = os.getenv("SCHEDULING_TIMEZONE", "America/Sao_Paulo")
    default_slot_interval_minutes: int = _safe_int("DEFAULT_SLOT_INTERVAL_MINUTES", "30")
    default_service_duration_minutes: int = _safe_int("DEFAULT_SERVICE_DURATION_MINUTES", "30")

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@dataclass(frozen=True)
class PlanConfig:
    """Trial and premium plan settings."""

    trial_days: int = _safe_int("TRIAL_DAYS", "14")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    plans: PlanConfig = field(default_factory=PlanConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "barber-booking")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    try:
        ZoneInfo(config.scheduling.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(
            f"SCHEDULING_TIMEZONE is not a known IANA zone: {config.scheduling.timezone!r}"
        ) from None
    if config.scheduling.default_slot_interval_minutes < 1:
        raise ValueError(
            "DEFAULT_SLOT_INTERVAL_MINUTES must be >= 1, "
            f"got {config.scheduling.default_slot_interval_minutes}"
        )
    if config.scheduling.default_service_duration_minutes < 1:
        raise ValueError(
            "DEFAULT_SERVICE_DURATION_MINUTES must be >= 1, "
            f"got {config.scheduling.default_service_duration_minutes}"
        )
    if config.plans.trial_days < 1:
        raise ValueError(f"TRIAL_DAYS must be >= 1, got {config.plans.trial_days}")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    install_request_id_filter(logging.getLogger().handlers)
    logger.info("Configuration loaded for '%s' (%s)", config.app_name, config.scheduling.timezone)
    return config


# Singleton instance
settings = load_config()
