"""Geodesic area measurement for lat/lng regions.

Areas are measured on an ellipsoid with pyproj so boundary and exclusion
areas are always comparable, whatever the site's latitude.
"""

from __future__ import annotations

import math

from pyproj import Geod
from pyproj.exceptions import GeodError
from shapely.errors import GEOSException
from shapely.geometry import Polygon
from shapely.geometry.polygon import orient

from ..errors import GeometryError
from .region import Region, RegionKind

DEFAULT_ELLIPSOID = "WGS84"


def polygon_area(polygon: Polygon, geod: Geod) -> float:
    """Get geodesic area of a polygon in square meters.

    The polygon is oriented counter-clockwise (holes clockwise) first so the
    signed ring areas combine correctly.

    Raises:
        GeometryError: If the area cannot be measured
    """
    if polygon.is_empty:
        return 0.0
    try:
        area, _ = geod.geometry_area_perimeter(orient(polygon, sign=1.0))
    except (GeodError, GEOSException, ValueError) as e:
        raise GeometryError("area", str(e)) from e
    if not math.isfinite(area):
        raise GeometryError("area", "non-finite area")
    return abs(area)


def region_area(region: Region, ellipsoid: str = DEFAULT_ELLIPSOID) -> float:
    """Get geodesic area of a region in square meters.

    Args:
        region: Region to measure
        ellipsoid: pyproj ellipsoid name

    Returns:
        Area in m^2 (0 for an EMPTY region)

    Raises:
        GeometryError: If the area cannot be measured
    """
    if region.kind == RegionKind.EMPTY:
        return 0.0

    geod = Geod(ellps=ellipsoid)
    if region.kind == RegionKind.SINGLE:
        return polygon_area(region.geometry, geod)

    # Parts of a multi-polygon are disjoint, so their areas add up
    return sum(polygon_area(p, geod) for p in region.polygons)
