"""
geo_bounds.py — Keep the map viewport inside the serviced region.

The map surface reports a Viewport on every pan / zoom. constrain_region()
returns the nearest allowed viewport:

  1. Clamp latitude_delta and longitude_delta into
     [min_zoom_delta, max_zoom_delta] independently.
  2. Latitude: if the bottom edge (centre - delta/2) is below south, push
     the centre up; then if the top edge is above north, push it down.
  3. Longitude: same against west / east.

The clamped delta is the one used in steps 2-3. The function is pure and
idempotent. Both edge conditions can fire on one axis only if the
rectangle is narrower than max_zoom_delta; the max-side write then wins
and the viewport is pinned to the north / east edge rather than centred.
The serviced region spans 3.5° of latitude and 3.0° of longitude, both
under the 4.0° max span, so a fully zoomed-out viewport lands in that case
on both axes: the centre stays inside the bounds but the visible edges
overhang south / west.

The client animates back only when needs_adjustment() says the
constrained viewport moved noticeably.
"""

from __future__ import annotations

from fishspot.models.geo import GeoPoint, Viewport
from fishspot.models.policy import SERVICED_REGION, MapBounds

# Dimming overlay extends this far past the serviced rectangle
_MASK_NORTH = 20.0
_MASK_SOUTH = 5.0
_MASK_WEST = 120.0
_MASK_EAST = 130.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class GeoBoundsClamp:
    """Viewport constraint for one MapBounds rectangle."""

    def __init__(self, bounds: MapBounds = SERVICED_REGION):
        self.bounds = bounds

    def is_within_bounds(self, latitude: float, longitude: float) -> bool:
        b = self.bounds
        return b.south <= latitude <= b.north and b.west <= longitude <= b.east

    def constrain_region(self, viewport: Viewport) -> Viewport:
        b = self.bounds
        lat_delta = _clamp(viewport.latitude_delta, b.min_zoom_delta, b.max_zoom_delta)
        lng_delta = _clamp(viewport.longitude_delta, b.min_zoom_delta, b.max_zoom_delta)
        half_lat = lat_delta / 2
        half_lng = lng_delta / 2

        lat = viewport.center.latitude
        if lat - half_lat < b.south:
            lat = b.south + half_lat
        if lat + half_lat > b.north:
            lat = b.north - half_lat

        lng = viewport.center.longitude
        if lng - half_lng < b.west:
            lng = b.west + half_lng
        if lng + half_lng > b.east:
            lng = b.east - half_lng

        return Viewport(
            center=GeoPoint(latitude=lat, longitude=lng),
            latitude_delta=lat_delta,
            longitude_delta=lng_delta,
        )

    def initial_viewport(self) -> Viewport:
        """Whole-region view the map opens on."""
        b = self.bounds
        return Viewport(
            center=GeoPoint(latitude=(b.north + b.south) / 2, longitude=(b.east + b.west) / 2),
            latitude_delta=min(b.lat_span, b.max_zoom_delta),
            longitude_delta=min(b.lat_span, b.max_zoom_delta),
        )

    def outside_mask(self) -> list[list[GeoPoint]]:
        """North, south, west and east polygons covering the area outside the bounds."""
        b = self.bounds

        def ring(*corners: tuple[float, float]) -> list[GeoPoint]:
            return [GeoPoint(latitude=lat, longitude=lng) for lat, lng in corners]

        return [
            ring((_MASK_NORTH, _MASK_WEST), (_MASK_NORTH, _MASK_EAST), (b.north, _MASK_EAST), (b.north, _MASK_WEST)),
            ring((b.south, _MASK_WEST), (b.south, _MASK_EAST), (_MASK_SOUTH, _MASK_EAST), (_MASK_SOUTH, _MASK_WEST)),
            ring((b.north, _MASK_WEST), (b.north, b.west), (b.south, b.west), (b.south, _MASK_WEST)),
            ring((b.north, b.east), (b.north, _MASK_EAST), (b.south, _MASK_EAST), (b.south, b.east)),
        ]


def needs_adjustment(requested: Viewport, constrained: Viewport, tolerance: float = 0.01) -> bool:
    """True when any viewport component moved by more than *tolerance* degrees."""
    return any(
        abs(a - b) > tolerance
        for a, b in (
            (requested.center.latitude, constrained.center.latitude),
            (requested.center.longitude, constrained.center.longitude),
            (requested.latitude_delta, constrained.latitude_delta),
            (requested.longitude_delta, constrained.longitude_delta),
        )
    )


# ── Module-level helpers bound to the serviced region ─────────────────────────

_default = GeoBoundsClamp()


def is_within_bounds(latitude: float, longitude: float) -> bool:
    return _default.is_within_bounds(latitude, longitude)


def constrain_region(viewport: Viewport) -> Viewport:
    return _default.constrain_region(viewport)
