"""
moderation.py — User reports against spots, catch reports and users.

Routes:
  POST /api/v1/moderation/reports         — file a report (rate limited per IP)
  GET  /api/v1/moderation/reports/status  — has the current user already
                                            reported ?target_id= ?

Report submission fails CLOSED: a store error comes back as 503 with the
"Failed to submit report..." message so the app can prompt a retry.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from fishspot.core.config import settings
from fishspot.core.rate_limit import limiter
from fishspot.models.moderation import ReportCreate, ReportOutcome, ReportStatusResponse
from fishspot.routes.auth import CurrentUser
from fishspot.routes.deps import get_flagger
from fishspot.services.moderation_flagger import ModerationFlagger

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/moderation", tags=["moderation"])


@router.post("/reports", response_model=ReportOutcome, status_code=201)
@limiter.limit(settings.report_rate_limit)
async def submit_report(
    request: Request,
    payload: ReportCreate,
    current_user: CurrentUser,
    flagger: ModerationFlagger = Depends(get_flagger),
):
    """Record a report and auto-flag the target once it crosses the threshold."""
    outcome = await flagger.report_content(
        reporter_id=current_user.id,
        reporter_name=current_user.display_name,
        target_type=payload.target_type,
        target_id=payload.target_id,
        reason=payload.reason,
        description=payload.description.strip(),
    )
    if not outcome.success:
        raise HTTPException(status_code=503, detail=outcome.message)
    return outcome


@router.get("/reports/status", response_model=ReportStatusResponse)
async def report_status(
    current_user: CurrentUser,
    target_id: str = Query(..., min_length=1),
    flagger: ModerationFlagger = Depends(get_flagger),
):
    """Lets the app grey out the "Report" button for content already reported."""
    reported = await flagger.has_user_reported(current_user.id, target_id)
    return ReportStatusResponse(target_id=target_id, reported=reported)
