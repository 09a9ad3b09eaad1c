"""Tests for geodesic area measurement."""

import pytest
from shapely.geometry import MultiPolygon, Polygon

from site_area.geometry.area import region_area
from site_area.geometry.region import Region

from conftest import geodesic_area, rect


def to_polygon(ring):
    return Polygon([(v["lng"], v["lat"]) for v in ring])


class TestRegionArea:
    """Test area of empty, single and multi regions."""

    def test_empty_region_is_zero(self):
        assert region_area(Region.empty()) == 0.0

    def test_kilometer_square(self):
        """1000 m square measures ~1,000,000 m²."""
        region = Region.from_geometry(to_polygon(rect(0, 0, 1000)))

        assert region_area(region) == pytest.approx(1_000_000, rel=1e-3)

    def test_matches_independent_measurement(self):
        ring = rect(120, 80, 300, 170)
        region = Region.from_geometry(to_polygon(ring))

        assert region_area(region) == pytest.approx(geodesic_area(ring), rel=1e-9)

    def test_orientation_does_not_matter(self):
        """Clockwise and counter-clockwise rings give the same positive area."""
        ring = rect(0, 0, 200)
        ccw = Region.from_geometry(to_polygon(ring))
        cw = Region.from_geometry(to_polygon(list(reversed(ring))))

        assert region_area(ccw) > 0
        assert region_area(cw) == pytest.approx(region_area(ccw), rel=1e-9)

    def test_hole_is_subtracted(self):
        outer = [(v["lng"], v["lat"]) for v in rect(0, 0, 1000)]
        hole = [(v["lng"], v["lat"]) for v in rect(400, 400, 200)]
        region = Region.from_geometry(Polygon(outer, [hole]))

        assert region_area(region) == pytest.approx(1_000_000 - 40_000, rel=1e-3)

    def test_multi_region_sums_parts(self):
        a = rect(0, 0, 100)
        b = rect(500, 500, 200)
        region = Region.from_geometry(MultiPolygon([to_polygon(a), to_polygon(b)]))

        assert region_area(region) == pytest.approx(geodesic_area(a) + geodesic_area(b), rel=1e-9)

    def test_ellipsoid_is_configurable(self):
        """A sphere gives a close but different figure from WGS84."""
        region = Region.from_geometry(to_polygon(rect(0, 0, 1000)))

        wgs84 = region_area(region)
        sphere = region_area(region, ellipsoid="sphere")

        assert sphere != wgs84
        assert sphere == pytest.approx(wgs84, rel=1e-2)
