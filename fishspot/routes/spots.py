"""
spots.py — Fishing spot and catch report routes.

Routes:
  POST /api/v1/spots              — submit a spot (full moderation pipeline)
  GET  /api/v1/spots              — list visible spots (optional ?user_id=)
  GET  /api/v1/spots/eligibility  — can the current user post a spot right now?
  GET  /api/v1/spots/{id}         — one spot
  POST /api/v1/catches            — post a catch report
  GET  /api/v1/catches            — list visible catch reports (?user_id=, ?spot_id=)

Pipeline rejections map to HTTP status by stage; the detail is the
user-facing reason, shown verbatim by the app in a dismissible alert:

  content / species / location → 422
  rate_limit                   → 429
  duplicate                    → 409
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from fishspot.core.store import CATCH_REPORTS, FISHING_SPOTS, DocumentStore
from fishspot.models.moderation import SpamCheckResult
from fishspot.models.spot import CatchReport, CatchReportCreate, FishingSpot, SpotCreate
from fishspot.routes.auth import CurrentUser
from fishspot.routes.deps import get_catch_submission, get_spam_guard, get_spot_submission, get_store
from fishspot.services.spam_guard import SpamGuard
from fishspot.services.submission import (
    CatchSubmission,
    SpotSubmission,
    SubmissionRejected,
    doc_to_catch,
    doc_to_spot,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["spots"])

_STAGE_STATUS = {
    "content": 422,
    "species": 422,
    "location": 422,
    "rate_limit": 429,
    "duplicate": 409,
}


def _reject(exc: SubmissionRejected) -> HTTPException:
    logger.info("Submission rejected at %s: %s", exc.stage, exc.reason)
    return HTTPException(status_code=_STAGE_STATUS.get(exc.stage, 422), detail=exc.reason)



# ── Spots ─────────────────────────────────────────────────────────────────────

@router.post("/spots", response_model=FishingSpot, status_code=201)
async def create_spot(
    payload: SpotCreate,
    current_user: CurrentUser,
    pipeline: SpotSubmission = Depends(get_spot_submission),
):
    """Validate, spam-check, duplicate-check and persist a new fishing spot."""
    try:
        return await pipeline.submit(current_user, payload)
    except SubmissionRejected as exc:
        raise _reject(exc)


@router.get("/spots", response_model=list[FishingSpot])
async def list_spots(
    user_id: Optional[str] = Query(default=None),
    limit: int = Query(default=100, ge=1, le=500),
    store: DocumentStore = Depends(get_store),
):
    """Spots for the map, newest first. Hidden spots are never returned."""
    filters = {"user_id": user_id} if user_id else {}
    docs = await store.find_by(
        FISHING_SPOTS, sort="created_at", limit=limit, exclude={"is_hidden": True}, **filters,
    )

    spots = []
    for doc in docs:
        try:
            spots.append(doc_to_spot(doc))
        except Exception as exc:
            logger.warning("Skipping malformed spot doc: %s", exc)
    return spots


@router.get("/spots/eligibility", response_model=SpamCheckResult)
async def spot_eligibility(
    current_user: CurrentUser,
    guard: SpamGuard = Depends(get_spam_guard),
):
    """Let the app disable the "Add spot" button before the user fills the form."""
    return await guard.can_user_create_spot(current_user.id, current_user.created_at)


@router.get("/spots/{spot_id}", response_model=FishingSpot)
async def get_spot(spot_id: str, store: DocumentStore = Depends(get_store)):
    doc = await store.get(FISHING_SPOTS, spot_id)
    if not doc or doc.get("is_hidden", False):
        raise HTTPException(status_code=404, detail="Spot not found")
    return doc_to_spot(doc)


# ── Catch reports ─────────────────────────────────────────────────────────────

@router.post("/catches", response_model=CatchReport, status_code=201)
async def create_catch(
    payload: CatchReportCreate,
    current_user: CurrentUser,
    pipeline: CatchSubmission = Depends(get_catch_submission),
):
    try:
        return await pipeline.submit(current_user, payload)
    except SubmissionRejected as exc:
        raise _reject(exc)


@router.get("/catches", response_model=list[CatchReport])
async def list_catches(
    user_id: Optional[str] = Query(default=None),
    spot_id: Optional[str] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    store: DocumentStore = Depends(get_store),
):
    """Feed of catch reports, newest first."""
    filters = {}
    if user_id:
        filters["user_id"] = user_id
    if spot_id:
        filters["spot_id"] = spot_id
    docs = await store.find_by(
        CATCH_REPORTS, sort="created_at", limit=limit, exclude={"is_hidden": True}, **filters,
    )

    catches = []
    for doc in docs:
        try:
            catches.append(doc_to_catch(doc))
        except Exception as exc:
            logger.warning("Skipping malformed catch report doc: %s", exc)
    return catches
