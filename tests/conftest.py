"""Shared site geometry for usable-area tests.

Sites are laid out in meters east/north of an origin at 45°N and converted to
lat/lng with the local meridian/parallel arc lengths, so a 1000 m square
boundary measures ~1,000,000 m² on the WGS84 ellipsoid.
"""

import math

import pytest
from pyproj import Geod

ORIGIN_LAT = 45.0
ORIGIN_LNG = 7.0

_PHI = math.radians(ORIGIN_LAT)
METERS_PER_DEG_LAT = 111132.954 - 559.822 * math.cos(2 * _PHI) + 1.175 * math.cos(4 * _PHI)
METERS_PER_DEG_LNG = (
    111412.84 * math.cos(_PHI) - 93.5 * math.cos(3 * _PHI) + 0.118 * math.cos(5 * _PHI)
)

_WGS84 = Geod(ellps="WGS84")


def to_vertex(x: float, y: float) -> dict[str, float]:
    """Convert a metric offset from the origin to a {lat, lng} vertex."""
    return {
        "lat": ORIGIN_LAT + y / METERS_PER_DEG_LAT,
        "lng": ORIGIN_LNG + x / METERS_PER_DEG_LNG,
    }


def rect(x: float, y: float, w: float, h: float | None = None) -> list[dict[str, float]]:
    """Open ring for a w x h rectangle whose south-west corner is (x, y) meters."""
    h = w if h is None else h
    return [
        to_vertex(x, y),
        to_vertex(x + w, y),
        to_vertex(x + w, y + h),
        to_vertex(x, y + h),
    ]


def geodesic_area(ring: list[dict[str, float]]) -> float:
    """Independent WGS84 area of a simple ring, in m²."""
    area, _ = _WGS84.polygon_area_perimeter(
        [v["lng"] for v in ring], [v["lat"] for v in ring]
    )
    return abs(area)


def boundary(ring, boundary_id: str = "B1", area: float | None = None) -> dict:
    return {"id": boundary_id, "name": boundary_id, "coordinates": ring, "area": area}


def exclusion(ring, zone_id: str, zone_type: str = "wetland", area: float | None = None) -> dict:
    return {"id": zone_id, "type": zone_type, "coordinates": ring, "area": area}


@pytest.fixture
def site_boundary():
    """1000 m x 1000 m square site."""
    return [boundary(rect(0, 0, 1000), area=1_000_000.0)]


@pytest.fixture
def center_zone():
    """100 m x 100 m wetland fully inside the site."""
    return exclusion(rect(450, 450, 100), "EZ-center", area=10_000.0)


@pytest.fixture
def overlapping_zones():
    """Two 100 m squares overlapping by 50 m x 50 m."""
    return [
        exclusion(rect(400, 400, 100), "EZ-a", area=10_000.0),
        exclusion(rect(450, 450, 100), "EZ-b", zone_type="setback", area=10_000.0),
    ]


@pytest.fixture
def edge_zone():
    """100 m square centered on the site's east edge, half outside."""
    return exclusion(rect(950, 450, 100), "EZ-edge", zone_type="setback", area=10_000.0)


@pytest.fixture
def two_point_zone():
    """Degenerate ring with only two distinct vertices."""
    return exclusion([to_vertex(100, 100), to_vertex(200, 200)], "EZ-line", area=5_000.0)
