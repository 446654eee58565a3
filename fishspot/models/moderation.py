"""
moderation.py — Pydantic schemas for the moderation & anti-spam core.

UserActivity          — per-user creation counters (user_activity collection)
SpamCheckResult       — SpamGuard.can_user_create_spot outcome
SpotContentCheck      — SpamGuard.validate_spot_content outcome
DuplicateCheckResult  — DuplicateDetector.check_duplicate_spot outcome
Report                — a stored user report against a spot / catch / user
ReportCreate          — what the client sends to file a report
ReportOutcome         — ModerationFlagger.report_content outcome
PriorReportCheck      — ModerationFlagger.check_prior_report outcome

The *Result / Outcome types expose permissive() and restrictive(message)
so core/guard.py can pick a fallback by policy.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

TargetType = Literal["spot", "report", "user"]
ReportReason = Literal["spam", "inappropriate", "fake", "other"]
ReportStatus = Literal["pending", "reviewed", "resolved", "dismissed"]

# User-facing outcomes of a report submission
FLAGGED_MESSAGE = "Report submitted. Content has been flagged for review."
SUBMITTED_MESSAGE = "Report submitted successfully. Our team will review it."
FAILED_MESSAGE = "Failed to submit report. Please try again."


# ── Activity counters ─────────────────────────────────────────────────────────

class UserActivity(BaseModel):
    """
    One record per user, created lazily on first spot.

    spots_created_today resets at the calendar day while
    spots_created_this_week is a rolling 7-day window, so today <= week
    is NOT guaranteed.
    """
    user_id: str
    last_spot_created: Optional[datetime] = None
    spots_created_today: int = Field(default=0, ge=0)
    spots_created_this_week: int = Field(default=0, ge=0)
    total_reports: int = Field(default=0, ge=0)


# ── Pre-submission checks ─────────────────────────────────────────────────────

class SpamCheckResult(BaseModel):
    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def permissive(cls) -> "SpamCheckResult":
        return cls(allowed=True)

    @classmethod
    def restrictive(cls, message: str) -> "SpamCheckResult":
        return cls(allowed=False, reason=message or None)


class SpotContentCheck(BaseModel):
    valid: bool
    reason: Optional[str] = None


class DuplicateCheckResult(BaseModel):
    is_duplicate: bool
    reason: Optional[str] = None

    @classmethod
    def permissive(cls) -> "DuplicateCheckResult":
        return cls(is_duplicate=False)

    @classmethod
    def restrictive(cls, message: str) -> "DuplicateCheckResult":
        return cls(is_duplicate=True, reason=message or None)


# ── Reports ───────────────────────────────────────────────────────────────────

class Report(BaseModel):
    """A user report as stored in the `reports` collection."""
    id: str
    reporter_id: str
    reporter_name: str
    target_type: TargetType
    target_id: str
    reason: ReportReason
    description: str = ""
    status: ReportStatus = "pending"
    created_at: datetime
    # Written by admin tooling only
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None


class ReportCreate(BaseModel):
    """Payload for POST /api/v1/moderation/reports."""
    target_type: TargetType
    target_id: str = Field(..., min_length=1, max_length=64)
    reason: ReportReason
    description: str = Field(default="", max_length=500)


class ReportOutcome(BaseModel):
    success: bool
    message: str

    # Never reached while report_content is fail-closed; kept for the guard protocol
    @classmethod
    def permissive(cls) -> "ReportOutcome":
        return cls(success=True, message=SUBMITTED_MESSAGE)

    @classmethod
    def restrictive(cls, message: str) -> "ReportOutcome":
        return cls(success=False, message=message)


class PriorReportCheck(BaseModel):
    reported: bool

    @classmethod
    def permissive(cls) -> "PriorReportCheck":
        return cls(reported=False)

    @classmethod
    def restrictive(cls, message: str) -> "PriorReportCheck":
        return cls(reported=True)


class ReportStatusResponse(BaseModel):
    """Response for GET /api/v1/moderation/reports/status."""
    target_id: str
    reported: bool
