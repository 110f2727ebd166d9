"""
Plan and capability helpers for provider profiles.

Premium access is a capability read from the provider profile document
and handed to the UI layer. None of these functions touch bookings.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from barber_booking.config import settings
from barber_booking.errors import PermissionDeniedError, ValidationError
from barber_booking.store.base import DocumentStore, RangeFilter
from barber_booking.store.repository import PROVIDERS_COLLECTION, profile_path

logger = logging.getLogger(__name__)

PLAN_FREE = "free"
PLAN_TRIAL = "trial"
PLAN_PREMIUM = "premium"

FREE_PLAN_FIELDS: dict[str, Any] = {
    "plan": PLAN_FREE,
    "isPremium": False,
    "trialStart": None,
    "trialEnd": None,
}
PREMIUM_PLAN_FIELDS: dict[str, Any] = {"plan": PLAN_PREMIUM, "isPremium": True}


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def has_premium_access(profile: Optional[dict[str, Any]], now: Optional[datetime] = None) -> bool:
    """True for premium profiles and for trials that have not ended."""
    if not profile:
        return False
    if profile.get("plan") == PLAN_PREMIUM:
        return True
    if profile.get("plan") == PLAN_TRIAL:
        trial_end = profile.get("trialEnd")
        return trial_end is not None and trial_end > _now(now)
    return bool(profile.get("isPremium"))


async def start_trial(
    store: DocumentStore, uid: str, days: Optional[int] = None, now: Optional[datetime] = None
) -> dict[str, datetime]:
    """Put a provider on a trial of ``days`` (TRIAL_DAYS when omitted)."""
    if days is None:
        days = settings.plans.trial_days
    if days < 1:
        raise ValidationError(f"Trial length must be at least one day, got {days}")
    trial_start = _now(now)
    trial_end = trial_start + timedelta(days=days)
    await store.write_document(
        profile_path(uid),
        {"plan": PLAN_TRIAL, "trialStart": trial_start, "trialEnd": trial_end, "isPremium": True},
        merge=True,
    )
    logger.info("Trial started for %s until %s", uid, trial_end.isoformat())
    return {"trialStart": trial_start, "trialEnd": trial_end}


async def end_trial(store: DocumentStore, uid: str) -> None:
    await store.write_document(profile_path(uid), FREE_PLAN_FIELDS, merge=True)
    logger.info("Trial ended for %s", uid)


async def expire_trials(store: DocumentStore, now: Optional[datetime] = None) -> int:
    """Demote every trial whose end has passed. Returns how many were expired."""
    expired = await store.query(
        PROVIDERS_COLLECTION,
        equals={"plan": PLAN_TRIAL},
        ranges=[RangeFilter("trialEnd", "<=", _now(now))],
    )
    if not expired:
        logger.info("No trials to expire.")
        return 0
    for profile in expired:
        await store.write_document(profile_path(profile["id"]), FREE_PLAN_FIELDS, merge=True)
    logger.info("Expired %d trials.", len(expired))
    return len(expired)


async def _require_admin(store: DocumentStore, caller_uid: Optional[str]) -> None:
    if not caller_uid:
        raise PermissionDeniedError("Request has no authenticated caller")
    caller = await store.get_document(profile_path(caller_uid))
    if not caller or not caller.get("isAdmin"):
        raise PermissionDeniedError("Caller is not admin")


async def promote_user(store: DocumentStore, caller_uid: Optional[str], target_uid: str) -> None:
    """Admin-only: grant the premium plan."""
    await _require_admin(store, caller_uid)
    if not target_uid:
        raise ValidationError("Missing target_uid")
    await store.write_document(profile_path(target_uid), PREMIUM_PLAN_FIELDS, merge=True)
    logger.info("Provider %s promoted to premium by %s", target_uid, caller_uid)


async def demote_user(store: DocumentStore, caller_uid: Optional[str], target_uid: str) -> None:
    """Admin-only: return a provider to the free plan and clear trial dates."""
    await _require_admin(store, caller_uid)
    if not target_uid:
        raise ValidationError("Missing target_uid")
    await store.write_document(profile_path(target_uid), FREE_PLAN_FIELDS, merge=True)
    logger.info("Provider %s demoted to free by %s", target_uid, caller_uid)
