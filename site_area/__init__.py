"""Site-Area - Compute the usable area of solar project sites.

This package provides:
- Ring validation for imported boundary and exclusion polygons
- Shapely union/intersection of boundaries and exclusion zones
- Geodesic area measurement with pyproj
- A never-raising usable-area resolver with a flagged fallback

Typical use:
    from site_area import compute_usable_area
    result = compute_usable_area(boundaries, exclusion_zones)
"""

__version__ = "0.1.0"

from .errors import GeometryError, SiteAreaError
from .export import AreaTakeoff, build_area_takeoff
from .models import (
    AreaQuality,
    AreaResult,
    AreaSettings,
    BoundaryPolygon,
    DegradedReason,
    ExclusionZone,
    ExclusionZoneType,
    Vertex,
)
from .resolver import compute_usable_area, resolve_usable_area
from .settings import load_settings

__all__ = [
    "compute_usable_area",
    "resolve_usable_area",
    "build_area_takeoff",
    "AreaTakeoff",
    "AreaResult",
    "AreaQuality",
    "DegradedReason",
    "AreaSettings",
    "load_settings",
    "BoundaryPolygon",
    "ExclusionZone",
    "ExclusionZoneType",
    "Vertex",
    "SiteAreaError",
    "GeometryError",
    "__version__",
]
