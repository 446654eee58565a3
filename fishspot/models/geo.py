"""
geo.py — Pydantic models for map coordinates and viewports.

GeoPoint  — a latitude / longitude pair
Viewport  — what the map shows: a centre plus the visible span in degrees
            (latitude_delta / longitude_delta are full spans, not radii)
"""

from pydantic import BaseModel, ConfigDict, Field

from fishspot.models.policy import MapBounds


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class Viewport(BaseModel):
    """Visible map region as reported by the map surface."""

    model_config = ConfigDict(frozen=True)

    center: GeoPoint
    latitude_delta: float = Field(..., gt=0)
    longitude_delta: float = Field(..., gt=0)


class ConstrainResponse(BaseModel):
    """Response for POST /api/v1/map/constrain."""
    viewport: Viewport
    # True when the client should animate to `viewport`
    adjusted: bool


class ContainsResponse(BaseModel):
    latitude: float
    longitude: float
    within_bounds: bool


class MapConfigResponse(BaseModel):
    """Everything the map screen needs to set itself up."""
    bounds: MapBounds
    initial_viewport: Viewport
    # Four dimming polygons covering everything outside `bounds`
    outside_mask: list[list[GeoPoint]]
