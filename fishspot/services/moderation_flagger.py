"""
moderation_flagger.py — User reports and auto-flagging.

report_content():
  1. Insert a Report (status "pending", created_at = now).
  2. Spot / catch report target: if it exists, in ONE update push the new
     report id onto report_ids, $inc flag_count by 1 and set
     is_flagged = new_count >= auto_flag_threshold.
  3. User target: $inc total_reports on the user's activity record instead
     (users have no flag_count / is_flagged).

Unlike the pre-submission checks this path fails CLOSED: any store error
returns success=False so the reporter knows to retry, rather than the
report silently disappearing.

The target is read before it is updated, so concurrent reports against the
same target can compute is_flagged from a stale count. flag_count itself
stays exact because it is an $inc.
"""

from __future__ import annotations

import logging

from fishspot.core.clock import Clock, utc_now
from fishspot.core.guard import FailurePolicy, guarded
from fishspot.core.store import CATCH_REPORTS, FISHING_SPOTS, REPORTS, DocumentStore
from fishspot.models.moderation import (
    FAILED_MESSAGE,
    FLAGGED_MESSAGE,
    SUBMITTED_MESSAGE,
    PriorReportCheck,
    ReportOutcome,
    ReportReason,
    TargetType,
)
from fishspot.models.policy import DEFAULT_SPAM_LIMITS, SpamLimits
from fishspot.services.spam_guard import ActivityStore

logger = logging.getLogger(__name__)

# Which collection holds each flaggable target type
_TARGET_COLLECTIONS = {
    "spot": FISHING_SPOTS,
    "report": CATCH_REPORTS,
}


class ModerationFlagger:
    def __init__(
        self,
        store: DocumentStore,
        activity: ActivityStore,
        limits: SpamLimits = DEFAULT_SPAM_LIMITS,
        clock: Clock = utc_now,
    ):
        self.store = store
        self.activity = activity
        self.limits = limits
        self.clock = clock

    @guarded(FailurePolicy.FAIL_CLOSED, ReportOutcome, message=FAILED_MESSAGE)
    async def report_content(
        self,
        reporter_id: str,
        reporter_name: str,
        target_type: TargetType,
        target_id: str,
        reason: ReportReason,
        description: str = "",
    ) -> ReportOutcome:
        report_id = await self.store.insert(REPORTS, {
            "reporter_id": reporter_id,
            "reporter_name": reporter_name,
            "target_type": target_type,
            "target_id": target_id,
            "reason": reason,
            "description": description,
            "status": "pending",
            "created_at": self.clock(),
        })
        logger.info("Report %s filed on %s %s (%s)", report_id, target_type, target_id, reason)

        if target_type == "user":
            await self.activity.increment_total_reports(target_id)
            return ReportOutcome(success=True, message=SUBMITTED_MESSAGE)

        collection = _TARGET_COLLECTIONS[target_type]
        target = await self.store.get(collection, target_id)
        if target is None:
            # Report is kept for moderators even if the content is gone
            logger.warning("Reported %s %s not found", target_type, target_id)
            return ReportOutcome(success=True, message=SUBMITTED_MESSAGE)

        new_flag_count = len(target.get("report_ids") or []) + 1
        is_flagged = new_flag_count >= self.limits.auto_flag_threshold
        await self.store.update(
            collection,
            target_id,
            push={"report_ids": report_id},
            inc={"flag_count": 1},
            set_fields={"is_flagged": is_flagged},
        )

        if is_flagged:
            logger.info("%s %s auto-flagged (%d reports)", target_type, target_id, new_flag_count)
            return ReportOutcome(success=True, message=FLAGGED_MESSAGE)
        return ReportOutcome(success=True, message=SUBMITTED_MESSAGE)

    @guarded(FailurePolicy.FAIL_OPEN, PriorReportCheck)
    async def check_prior_report(self, reporter_id: str, target_id: str) -> PriorReportCheck:
        """Whether *reporter_id* already filed a report on *target_id*."""
        existing = await self.store.find_by(
            REPORTS, limit=1, reporter_id=reporter_id, target_id=target_id,
        )
        return PriorReportCheck(reported=bool(existing))

    async def has_user_reported(self, reporter_id: str, target_id: str) -> bool:
        return (await self.check_prior_report(reporter_id, target_id)).reported
