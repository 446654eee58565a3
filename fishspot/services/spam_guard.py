"""
spam_guard.py — Per-user quotas on spot creation.

SpamGuard.can_user_create_spot checks, first failure wins:
  1. Account age >= min_account_age_hours
  2. spots_created_today < spots_per_day          (only if a record exists)
  3. spots_created_this_week < spots_per_week     (only if a record exists)
  4. >= min_spot_interval_minutes since last spot (only if a record exists)

A user without an activity record is only subject to the account-age rule.
The clock reading is normalised to UTC first, so "today" is always the UTC
date whatever timezone the injected clock reports in.
Any store error fails OPEN (allowed): a backend hiccup must not block
legitimate posts. See core/guard.py.

SpamGuard.update_user_activity runs after a spot is persisted. It is a
read-modify-write with a full replace and no lock: two submissions from
the same user in the same instant can undercount. ActivityStore.save is the
seam to swap in an atomic implementation.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Optional, Sequence

from fishspot.core.clock import Clock, to_instant, utc_now
from fishspot.core.guard import FailurePolicy, guarded
from fishspot.core.store import USER_ACTIVITY, DocumentStore
from fishspot.models.moderation import SpamCheckResult, SpotContentCheck, UserActivity
from fishspot.models.policy import DEFAULT_SPAM_LIMITS, SpamLimits

logger = logging.getLogger(__name__)

ROLLING_WEEK = timedelta(days=7)


# ── Counter store ─────────────────────────────────────────────────────────────

class ActivityStore:
    """UserActivity records in the `user_activity` collection, keyed by user id."""

    def __init__(self, store: DocumentStore):
        self._store = store

    async def get(self, user_id: str) -> Optional[UserActivity]:
        doc = await self._store.get(USER_ACTIVITY, user_id)
        if doc is None:
            return None
        return UserActivity(
            user_id=doc.get("user_id", user_id),
            last_spot_created=to_instant(doc.get("last_spot_created")),
            spots_created_today=doc.get("spots_created_today") or 0,
            spots_created_this_week=doc.get("spots_created_this_week") or 0,
            total_reports=doc.get("total_reports") or 0,
        )

    async def save(self, activity: UserActivity) -> None:
        """Full replace of the user's record."""
        await self._store.replace(USER_ACTIVITY, activity.user_id, activity.model_dump())

    async def increment_total_reports(self, user_id: str) -> None:
        """Atomic $inc; creates the record if the user never posted."""
        await self._store.increment(USER_ACTIVITY, user_id, "total_reports", 1, upsert=True)


# ── Guard ─────────────────────────────────────────────────────────────────────

class SpamGuard:
    def __init__(
        self,
        activity: ActivityStore,
        limits: SpamLimits = DEFAULT_SPAM_LIMITS,
        clock: Clock = utc_now,
    ):
        self.activity = activity
        self.limits = limits
        self.clock = clock

    @guarded(FailurePolicy.FAIL_OPEN, SpamCheckResult)
    async def can_user_create_spot(self, user_id: str, account_created_at: datetime) -> SpamCheckResult:
        now = to_instant(self.clock())
        limits = self.limits

        created = to_instant(account_created_at) or now
        account_age_hours = (now - created).total_seconds() / 3600
        if account_age_hours < limits.min_account_age_hours:
            return SpamCheckResult(
                allowed=False,
                reason=(
                    f"Account must be at least {limits.min_account_age_hours:g} hours old "
                    "to create spots"
                ),
            )

        activity = await self.activity.get(user_id)
        if activity is None:
            return SpamCheckResult(allowed=True)

        if activity.spots_created_today >= limits.spots_per_day:
            return SpamCheckResult(
                allowed=False,
                reason=f"Daily limit reached. You can create {limits.spots_per_day} spots per day",
            )

        if activity.spots_created_this_week >= limits.spots_per_week:
            return SpamCheckResult(
                allowed=False,
                reason=f"Weekly limit reached. You can create {limits.spots_per_week} spots per week",
            )

        if activity.last_spot_created is not None:
            minutes_since = (now - activity.last_spot_created).total_seconds() / 60
            if minutes_since < limits.min_spot_interval_minutes:
                wait = math.ceil(limits.min_spot_interval_minutes - minutes_since)
                return SpamCheckResult(
                    allowed=False,
                    reason=f"Please wait {wait} more minute(s) before creating another spot",
                )

        return SpamCheckResult(allowed=True)

    async def update_user_activity(self, user_id: str) -> UserActivity:
        """Count one more spot for *user_id*. Raises StoreError on failure."""
        now = to_instant(self.clock())
        week_start = now - ROLLING_WEEK

        current = await self.activity.get(user_id)
        if current is None or current.last_spot_created is None:
            today_count = week_count = 1
            total_reports = current.total_reports if current else 0
        else:
            last = current.last_spot_created
            same_day = last.date() == now.date()
            in_week = last >= week_start
            today_count = current.spots_created_today + 1 if same_day else 1
            week_count = current.spots_created_this_week + 1 if in_week else 1
            total_reports = current.total_reports

        updated = UserActivity(
            user_id=user_id,
            last_spot_created=now,
            spots_created_today=today_count,
            spots_created_this_week=week_count,
            total_reports=total_reports,
        )
        await self.activity.save(updated)
        logger.debug(
            "Activity for %s: today=%d week=%d", user_id, today_count, week_count,
        )
        return updated

    def validate_spot_content(
        self,
        name: Optional[str],
        description: Optional[str],
        images: Sequence[str],
    ) -> SpotContentCheck:
        """Pre-flight gate: name, description and at least one photo."""
        limits = self.limits
        if len((name or "").strip()) < limits.min_name_length:
            return SpotContentCheck(
                valid=False,
                reason=f"Spot name must be at least {limits.min_name_length} characters",
            )
        if len((description or "").strip()) < limits.min_description_length:
            return SpotContentCheck(
                valid=False,
                reason=f"Description must be at least {limits.min_description_length} characters",
            )
        if not images:
            return SpotContentCheck(valid=False, reason="At least one photo is required")
        return SpotContentCheck(valid=True)
