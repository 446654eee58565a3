"""
map.py — Map viewport routes for the serviced region.

Routes:
  GET  /api/v1/map/bounds     — bounds, zoom limits, opening viewport, dim mask
  GET  /api/v1/map/contains   — is ?lat= &lng= inside the serviced region?
  POST /api/v1/map/constrain  — clamp a viewport reported by the map surface

The app calls /constrain from onRegionChangeComplete and animates to the
returned viewport only when `adjusted` is true, so small float noise does
not cause the map to jitter.

All routes are pure computation; none of them touch the database.
"""

from fastapi import APIRouter, Query

from fishspot.models.geo import ConstrainResponse, ContainsResponse, MapConfigResponse, Viewport
from fishspot.services.geo_bounds import GeoBoundsClamp, needs_adjustment

router = APIRouter(prefix="/api/v1/map", tags=["map"])

_clamp = GeoBoundsClamp()


@router.get("/bounds", response_model=MapConfigResponse)
async def get_map_config():
    return MapConfigResponse(
        bounds=_clamp.bounds,
        initial_viewport=_clamp.initial_viewport(),
        outside_mask=_clamp.outside_mask(),
    )


@router.get("/contains", response_model=ContainsResponse)
async def contains(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
):
    return ContainsResponse(
        latitude=lat,
        longitude=lng,
        within_bounds=_clamp.is_within_bounds(lat, lng),
    )


@router.post("/constrain", response_model=ConstrainResponse)
async def constrain(viewport: Viewport):
    constrained = _clamp.constrain_region(viewport)
    return ConstrainResponse(
        viewport=constrained,
        adjusted=needs_adjustment(viewport, constrained),
    )
