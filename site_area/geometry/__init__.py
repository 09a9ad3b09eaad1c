"""Geometry operations for site areas using Shapely and pyproj."""

from .area import polygon_area, region_area
from .polygon_ops import (
    UnionReport,
    clip_region,
    intersect_regions,
    polygon_from_coords,
    snap_to_grid,
    unify_rings,
    union_step,
)
from .region import Region, RegionKind
from .rings import validate_ring, validate_rings

__all__ = [
    # Ring validation
    "validate_ring",
    "validate_rings",
    # Regions
    "Region",
    "RegionKind",
    # Polygon operations
    "polygon_from_coords",
    "union_step",
    "snap_to_grid",
    "unify_rings",
    "UnionReport",
    "intersect_regions",
    "clip_region",
    # Area
    "polygon_area",
    "region_area",
]
