"""
test_geo_bounds.py — Viewport clamp to the serviced region.
"""

import pytest

from fishspot.models.geo import GeoPoint, Viewport
from fishspot.models.policy import SERVICED_REGION, MapBounds
from fishspot.services.geo_bounds import (
    GeoBoundsClamp,
    constrain_region,
    is_within_bounds,
    needs_adjustment,
)


def vp(lat, lng, dlat=1.0, dlng=1.0):
    return Viewport(center=GeoPoint(latitude=lat, longitude=lng), latitude_delta=dlat, longitude_delta=dlng)


# A spread of viewports: inside, outside each edge, far away, extreme zooms
VIEWPORTS = [
    vp(11.25, 125.0),
    vp(11.25, 125.0, 0.001, 0.001),
    vp(11.25, 125.0, 10.0, 10.0),
    vp(20.0, 125.0),
    vp(0.0, 125.0, 2.0, 0.5),
    vp(11.0, 130.0),
    vp(11.0, 110.0, 0.2, 3.9),
    vp(-45.0, -170.0, 50.0, 0.01),
    vp(12.99, 126.49, 0.01, 0.01),
    vp(9.6, 123.6, 3.5, 3.0),
]


class TestIsWithinBounds:

    def test_region_center(self):
        assert is_within_bounds(11.25, 125.0) is True

    def test_north_of_region(self):
        assert is_within_bounds(20.0, 125.0) is False

    def test_east_of_region(self):
        assert is_within_bounds(11.25, 130.0) is False

    @pytest.mark.parametrize("lat,lng", [(13.0, 123.5), (9.5, 126.5), (13.0, 126.5), (9.5, 123.5)])
    def test_edges_inclusive(self, lat, lng):
        assert is_within_bounds(lat, lng)


class TestConstrainRegion:

    def test_inside_viewport_unchanged(self):
        v = vp(11.25, 125.0)
        assert constrain_region(v) == v

    def test_zoom_clamped(self):
        out = constrain_region(vp(11.25, 125.0, 0.001, 10.0))
        assert out.latitude_delta == 0.01
        assert out.longitude_delta == 4.0

    def test_pushed_back_from_north(self):
        out = constrain_region(vp(20.0, 125.0, 1.0, 1.0))
        assert out.center.latitude == pytest.approx(12.5)

    def test_pushed_back_from_south(self):
        out = constrain_region(vp(0.0, 125.0, 1.0, 1.0))
        assert out.center.latitude == pytest.approx(10.0)

    def test_pushed_back_from_east_and_west(self):
        assert constrain_region(vp(11.0, 130.0)).center.longitude == pytest.approx(126.0)
        assert constrain_region(vp(11.0, 110.0)).center.longitude == pytest.approx(124.0)

    def test_delta_clamped_before_centre(self):
        # 10° requested → 4° used; centre placed with half of 4°, not 10°
        out = constrain_region(vp(11.25, 125.0, 10.0, 1.0))
        assert out.latitude_delta == 4.0
        assert out.center.latitude == pytest.approx(13.0 - 2.0)

    def test_span_wider_than_region_max_side_wins(self):
        # 4° > 3.5° latitude span: both edges overhang, the north push is applied last
        out = constrain_region(vp(11.25, 125.0, 4.0, 4.0))
        assert out.center.latitude == pytest.approx(SERVICED_REGION.north - 2.0)
        assert out.center.longitude == pytest.approx(SERVICED_REGION.east - 2.0)

    @pytest.mark.parametrize("v", VIEWPORTS)
    def test_idempotent(self, v):
        once = constrain_region(v)
        assert constrain_region(once) == once

    @pytest.mark.parametrize("v", VIEWPORTS)
    def test_centre_always_inside(self, v):
        out = constrain_region(v)
        assert is_within_bounds(out.center.latitude, out.center.longitude)

    @pytest.mark.parametrize("v", VIEWPORTS)
    def test_edges_inside_when_span_fits(self, v):
        out = constrain_region(v)
        b = SERVICED_REGION
        eps = 1e-9
        if out.latitude_delta <= b.lat_span:
            assert out.center.latitude - out.latitude_delta / 2 >= b.south - eps
            assert out.center.latitude + out.latitude_delta / 2 <= b.north + eps
        if out.longitude_delta <= b.lng_span:
            assert out.center.longitude - out.longitude_delta / 2 >= b.west - eps
            assert out.center.longitude + out.longitude_delta / 2 <= b.east + eps

    def test_custom_bounds(self):
        clamp = GeoBoundsClamp(MapBounds(north=1.0, south=-1.0, west=-1.0, east=1.0, max_zoom_delta=1.0))
        out = clamp.constrain_region(vp(5.0, 5.0, 1.0, 1.0))
        assert out.center.latitude == pytest.approx(0.5)
        assert out.center.longitude == pytest.approx(0.5)


class TestMapHelpers:

    def test_initial_viewport(self):
        initial = GeoBoundsClamp().initial_viewport()
        assert initial.center.latitude == pytest.approx(11.25)
        assert initial.center.longitude == pytest.approx(125.0)
        assert initial.latitude_delta == 3.5
        assert initial.longitude_delta == 3.5

    def test_mask_has_four_strips_touching_bounds(self):
        mask = GeoBoundsClamp().outside_mask()
        assert len(mask) == 4
        north, south, west, east = mask
        assert all(p.latitude >= SERVICED_REGION.north for p in north)
        assert all(p.latitude <= SERVICED_REGION.south for p in south)
        assert all(p.longitude <= SERVICED_REGION.west for p in west)
        assert all(p.longitude >= SERVICED_REGION.east for p in east)

    def test_needs_adjustment_tolerance(self):
        v = vp(11.25, 125.0)
        assert needs_adjustment(v, vp(11.255, 125.0)) is False
        assert needs_adjustment(v, vp(11.3, 125.0)) is True

    def test_bounds_validation(self):
        with pytest.raises(ValueError):
            MapBounds(north=9.0, south=10.0)
