"""
duplicate_detector.py — Reject a user's near-duplicate spot submissions.

Two store queries, both scoped to the submitting user's own spots:
  1. exact name match                → "You already have a spot with this name"
  2. any spot within duplicate_radius_km (100 m) of the new coordinates
                                     → "You already have a spot at this location"

Distance is the great-circle haversine distance on a 6371 km sphere.
Store errors fail OPEN (not a duplicate), same as SpamGuard.
"""

from __future__ import annotations

import logging
import math

from fishspot.core.guard import FailurePolicy, guarded
from fishspot.core.store import FISHING_SPOTS, DocumentStore
from fishspot.models.moderation import DuplicateCheckResult
from fishspot.models.policy import DEFAULT_SPAM_LIMITS, SpamLimits

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two lat/lng points."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    a = min(1.0, a)  # rounding can push near-antipodal points past 1
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


class DuplicateDetector:
    def __init__(self, store: DocumentStore, limits: SpamLimits = DEFAULT_SPAM_LIMITS):
        self.store = store
        self.limits = limits

    @guarded(FailurePolicy.FAIL_OPEN, DuplicateCheckResult)
    async def check_duplicate_spot(
        self,
        user_id: str,
        name: str,
        latitude: float,
        longitude: float,
    ) -> DuplicateCheckResult:
        same_name = await self.store.find_by(FISHING_SPOTS, user_id=user_id, name=name)
        if same_name:
            return DuplicateCheckResult(
                is_duplicate=True,
                reason="You already have a spot with this name",
            )

        for spot in await self.store.find_by(FISHING_SPOTS, user_id=user_id):
            spot_lat, spot_lng = spot.get("latitude"), spot.get("longitude")
            if spot_lat is None or spot_lng is None:
                continue
            distance = haversine_km(latitude, longitude, spot_lat, spot_lng)
            if distance < self.limits.duplicate_radius_km:
                logger.info(
                    "Duplicate location for user %s: %.0f m from spot %s",
                    user_id, distance * 1000, spot.get("_id"),
                )
                return DuplicateCheckResult(
                    is_duplicate=True,
                    reason="You already have a spot at this location",
                )

        return DuplicateCheckResult(is_duplicate=False)
