"""
spot.py — Pydantic schemas for user-submitted content.

SpotCreate / FishingSpot        — fishing locations
CatchReportCreate / CatchReport — catch posts, optionally linked to a spot

Request models deliberately leave length rules to services/content_validator
so the client gets the same messages the app shows in its form alerts.
Both stored types are moderation targets: they carry report_ids,
flag_count and is_flagged, which only ModerationFlagger writes.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

MAX_IMAGES_PER_POST = 2


# ── Fishing spots ─────────────────────────────────────────────────────────────

class SpotCreate(BaseModel):
    """Payload for POST /api/v1/spots."""
    name: str = ""
    description: str = ""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    # Comma-separated species, as typed in the form ("tuna, snapper")
    fish_types: str = ""
    best_time: str = Field(default="", max_length=100)
    # Uploaded image URLs (upload itself happens client-side)
    images: list[str] = Field(default_factory=list, max_length=MAX_IMAGES_PER_POST)


class FishingSpot(BaseModel):
    id: str
    user_id: str
    user_name: str = ""
    name: str
    description: str
    latitude: float
    longitude: float
    fish_types: list[str] = Field(default_factory=list)
    best_time: str = ""
    images: list[str] = Field(default_factory=list)
    likes: list[str] = Field(default_factory=list)
    is_hidden: bool = False
    is_flagged: bool = False
    flag_count: int = Field(default=0, ge=0)
    report_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None


# ── Catch reports ─────────────────────────────────────────────────────────────

class CatchReportCreate(BaseModel):
    """Payload for POST /api/v1/catches."""
    title: str = ""
    description: str = ""
    fish_type: str = ""
    spot_id: Optional[str] = None
    weight: Optional[str] = Field(default=None, max_length=20)
    length: Optional[str] = Field(default=None, max_length=20)
    images: list[str] = Field(default_factory=list, max_length=MAX_IMAGES_PER_POST)


class CatchReport(BaseModel):
    id: str
    user_id: str
    user_name: str = ""
    spot_id: Optional[str] = None
    spot_name: Optional[str] = None
    title: str
    description: str
    fish_type: str
    weight: Optional[str] = None
    length: Optional[str] = None
    images: list[str] = Field(default_factory=list)
    likes: list[str] = Field(default_factory=list)
    is_hidden: bool = False
    is_flagged: bool = False
    flag_count: int = Field(default=0, ge=0)
    report_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None
