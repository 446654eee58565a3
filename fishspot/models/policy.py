"""
policy.py — Immutable policy configuration for the moderation core.

SpamLimits — thresholds used by SpamGuard, DuplicateDetector and ModerationFlagger
MapBounds  — the serviced rectangle + zoom limits used by GeoBoundsClamp

Both are frozen Pydantic models. Components receive an instance at
construction; tests build their own instead of patching module globals.
Production values come from Settings.spam_limits() (see core/config.py).
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SpamLimits(BaseModel):
    """Anti-spam and auto-flag thresholds."""

    model_config = ConfigDict(frozen=True)

    spots_per_day: int = Field(default=5, ge=1)
    spots_per_week: int = Field(default=20, ge=1)
    min_spot_interval_minutes: float = Field(default=5, ge=0)
    min_description_length: int = Field(default=10, ge=0)
    min_name_length: int = Field(default=3, ge=0)
    # 0 in development; 24 is the intended production value
    min_account_age_hours: float = Field(default=0, ge=0)
    auto_flag_threshold: int = Field(default=3, ge=1)
    duplicate_radius_km: float = Field(default=0.1, gt=0)


class MapBounds(BaseModel):
    """
    Geographic rectangle the map is allowed to show (Leyte and Samar).

    Deltas are visible spans in degrees, not radii.
    """

    model_config = ConfigDict(frozen=True)

    north: float = 13.0
    south: float = 9.5
    west: float = 123.5
    east: float = 126.5

    min_zoom_delta: float = Field(default=0.01, gt=0)  # closest zoom
    max_zoom_delta: float = Field(default=4.0, gt=0)   # widest zoom

    @model_validator(mode="after")
    def _check_order(self) -> "MapBounds":
        if self.south >= self.north:
            raise ValueError("south must be below north")
        if self.west >= self.east:
            raise ValueError("west must be left of east")
        if self.min_zoom_delta > self.max_zoom_delta:
            raise ValueError("min_zoom_delta must not exceed max_zoom_delta")
        return self

    @property
    def lat_span(self) -> float:
        return self.north - self.south

    @property
    def lng_span(self) -> float:
        return self.east - self.west


DEFAULT_SPAM_LIMITS = SpamLimits()
SERVICED_REGION = MapBounds()
