"""
submission.py — The create-content pipelines behind POST /spots and /catches.

Spot pipeline (strictly sequential, first failure raises SubmissionRejected):

  content    validate_fishing_spot_content(name, description)
  species    validate_species(fish_types)
  location   coordinates inside the serviced region
  content    SpamGuard.validate_spot_content (at least one photo)
  rate_limit SpamGuard.can_user_create_spot        (fail-open)
  duplicate  DuplicateDetector.check_duplicate_spot (fail-open)
  persist    insert into fishing_spots             (StoreError propagates)
  activity   SpamGuard.update_user_activity

A failed activity update is logged and does not undo the spot: the spot is
already visible and the next submission simply sees a stale counter.

Catch reports only go through content + species validation; they are not
rate-limited.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fishspot.core.clock import Clock, to_instant, utc_now
from fishspot.core.store import CATCH_REPORTS, FISHING_SPOTS, DocumentStore, StoreError
from fishspot.models.spot import CatchReport, CatchReportCreate, FishingSpot, SpotCreate
from fishspot.models.user import UserOut
from fishspot.services.content_validator import (
    validate_catch_report_content,
    validate_fishing_spot_content,
)
from fishspot.services.duplicate_detector import DuplicateDetector
from fishspot.services.geo_bounds import GeoBoundsClamp
from fishspot.services.spam_guard import SpamGuard
from fishspot.services.species_parser import parse_species, validate_species

logger = logging.getLogger(__name__)

OUTSIDE_REGION_MESSAGE = "Please select a location within Leyte and Samar region only."


class SubmissionRejected(Exception):
    """A pipeline stage refused the submission; `reason` is user-facing."""

    def __init__(self, stage: str, reason: str):
        super().__init__(reason)
        self.stage = stage
        self.reason = reason


# ── Document → model ──────────────────────────────────────────────────────────

def _moderation_fields(doc: dict) -> dict:
    return {
        "is_hidden": doc.get("is_hidden", False),
        "is_flagged": doc.get("is_flagged", False),
        "flag_count": doc.get("flag_count", 0),
        "report_ids": doc.get("report_ids") or [],
        "likes": doc.get("likes") or [],
        "images": doc.get("images") or [],
        "created_at": to_instant(doc.get("created_at")) or datetime.now(tz=timezone.utc),
        "updated_at": to_instant(doc.get("updated_at")),
    }


def doc_to_spot(doc: dict) -> FishingSpot:
    return FishingSpot(
        id=str(doc["_id"]),
        user_id=doc["user_id"],
        user_name=doc.get("user_name", ""),
        name=doc.get("name", ""),
        description=doc.get("description", ""),
        latitude=doc["latitude"],
        longitude=doc["longitude"],
        fish_types=doc.get("fish_types") or [],
        best_time=doc.get("best_time", ""),
        **_moderation_fields(doc),
    )


def doc_to_catch(doc: dict) -> CatchReport:
    return CatchReport(
        id=str(doc["_id"]),
        user_id=doc["user_id"],
        user_name=doc.get("user_name", ""),
        spot_id=doc.get("spot_id"),
        spot_name=doc.get("spot_name"),
        title=doc.get("title", ""),
        description=doc.get("description", ""),
        fish_type=doc.get("fish_type", ""),
        weight=doc.get("weight"),
        length=doc.get("length"),
        **_moderation_fields(doc),
    )


def _new_target_fields(now: datetime) -> dict:
    """Fields every fresh moderation target starts with."""
    return {
        "likes": [],
        "is_hidden": False,
        "is_flagged": False,
        "flag_count": 0,
        "report_ids": [],
        "created_at": now,
        "updated_at": now,
    }


# ── Pipelines ─────────────────────────────────────────────────────────────────

class SpotSubmission:
    def __init__(
        self,
        store: DocumentStore,
        guard: SpamGuard,
        detector: DuplicateDetector,
        bounds: Optional[GeoBoundsClamp] = None,
        clock: Clock = utc_now,
    ):
        self.store = store
        self.guard = guard
        self.detector = detector
        self.bounds = bounds or GeoBoundsClamp()
        self.clock = clock

    async def submit(self, user: UserOut, payload: SpotCreate) -> FishingSpot:
        content = validate_fishing_spot_content(payload.name, payload.description)
        if not content.valid:
            raise SubmissionRejected("content", content.error)

        species = validate_species(payload.fish_types)
        if not species.valid:
            raise SubmissionRejected("species", species.error)

        if not self.bounds.is_within_bounds(payload.latitude, payload.longitude):
            raise SubmissionRejected("location", OUTSIDE_REGION_MESSAGE)

        preflight = self.guard.validate_spot_content(payload.name, payload.description, payload.images)
        if not preflight.valid:
            raise SubmissionRejected("content", preflight.reason)

        spam = await self.guard.can_user_create_spot(user.id, user.created_at)
        if not spam.allowed:
            raise SubmissionRejected("rate_limit", spam.reason)

        name = payload.name.strip()
        duplicate = await self.detector.check_duplicate_spot(
            user.id, name, payload.latitude, payload.longitude,
        )
        if duplicate.is_duplicate:
            raise SubmissionRejected("duplicate", duplicate.reason)

        doc = {
            "user_id": user.id,
            "user_name": user.display_name,
            "name": name,
            "description": payload.description.strip(),
            "latitude": payload.latitude,
            "longitude": payload.longitude,
            "fish_types": parse_species(payload.fish_types),
            "best_time": payload.best_time,
            "images": list(payload.images),
            **_new_target_fields(self.clock()),
        }
        doc["_id"] = await self.store.insert(FISHING_SPOTS, doc)
        logger.info("Spot %s created by %s", doc["_id"], user.id)

        try:
            await self.guard.update_user_activity(user.id)
        except StoreError as exc:
            logger.warning("Activity update failed for %s after spot %s: %s", user.id, doc["_id"], exc)

        return doc_to_spot(doc)


class CatchSubmission:
    def __init__(self, store: DocumentStore, clock: Clock = utc_now):
        self.store = store
        self.clock = clock

    async def submit(self, user: UserOut, payload: CatchReportCreate) -> CatchReport:
        content = validate_catch_report_content(payload.title, payload.description)
        if not content.valid:
            raise SubmissionRejected("content", content.error)

        species = validate_species(payload.fish_type)
        if not species.valid:
            raise SubmissionRejected("species", species.error)

        spot_name = None
        if payload.spot_id:
            spot = await self.store.get(FISHING_SPOTS, payload.spot_id)
            if spot is None:
                raise SubmissionRejected("content", "The selected fishing spot no longer exists")
            spot_name = spot.get("name")

        doc = {
            "user_id": user.id,
            "user_name": user.display_name,
            "spot_id": payload.spot_id,
            "spot_name": spot_name,
            "title": payload.title.strip(),
            "description": payload.description.strip(),
            "fish_type": payload.fish_type.strip(),
            "weight": payload.weight or None,
            "length": payload.length or None,
            "images": list(payload.images),
            **_new_target_fields(self.clock()),
        }
        doc["_id"] = await self.store.insert(CATCH_REPORTS, doc)
        logger.info("Catch report %s posted by %s", doc["_id"], user.id)
        return doc_to_catch(doc)
