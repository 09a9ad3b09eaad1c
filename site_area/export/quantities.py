"""Area takeoff for a site's usable-area computation.

Breaks the headline usable-area figure down into the quantities a reviewer
needs to sanity-check it: how much exclusion area was imported, how much of
it overlapped, how much fell outside the boundary, and how the remainder
splits across zone types.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional
import csv
import io
import logging

from ..errors import GeometryError
from ..geometry.area import region_area
from ..geometry.polygon_ops import clip_region, polygon_from_coords, snap_to_grid
from ..geometry.region import Region
from ..geometry.rings import validate_ring
from ..models.result import AreaQuality
from ..models.settings import AreaSettings
from ..models.site import BoundaryPolygon, ExclusionZone, ExclusionZoneType
from ..resolver import (
    BoundaryInput,
    ExclusionInput,
    build_site_regions,
    coerce_boundaries,
    coerce_exclusions,
    compute_usable_area,
    settings_or_defaults,
    unify_exclusions,
)
from ..settings.loader import SettingsLike

logger = logging.getLogger(__name__)


@dataclass
class AreaTakeoff:
    """Area breakdown for one site, all areas in square meters."""

    total_area_m2: float = 0.0
    usable_area_m2: float = 0.0
    usable_pct: float = 0.0

    # Exclusion accounting
    raw_exclusion_area_m2: float = 0.0  # Sum of precomputed per-zone areas
    merged_exclusion_area_m2: float = 0.0  # Union of all zones, unclipped
    clipped_exclusion_area_m2: float = 0.0  # Union of all zones inside the boundary
    outside_exclusion_area_m2: float = 0.0
    overlap_area_m2: float = 0.0  # Counted more than once by summing zones
    exclusion_area_by_type: Dict[str, float] = field(default_factory=dict)

    # Inputs
    boundary_count: int = 0
    exclusion_count: int = 0
    skipped_ring_count: int = 0

    quality: AreaQuality = AreaQuality.EXACT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_area_m2": round(self.total_area_m2, 2),
            "usable_area_m2": round(self.usable_area_m2, 2),
            "usable_pct": round(self.usable_pct, 2),
            "raw_exclusion_area_m2": round(self.raw_exclusion_area_m2, 2),
            "merged_exclusion_area_m2": round(self.merged_exclusion_area_m2, 2),
            "clipped_exclusion_area_m2": round(self.clipped_exclusion_area_m2, 2),
            "outside_exclusion_area_m2": round(self.outside_exclusion_area_m2, 2),
            "overlap_area_m2": round(self.overlap_area_m2, 2),
            "exclusion_area_by_type": {
                k: round(v, 2) for k, v in self.exclusion_area_by_type.items()
            },
            "boundary_count": self.boundary_count,
            "exclusion_count": self.exclusion_count,
            "skipped_ring_count": self.skipped_ring_count,
            "quality": self.quality.value,
        }

    def to_csv_string(self) -> str:
        """Export takeoff as CSV string."""
        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(["Site Area Takeoff"])
        writer.writerow([])

        # Summary section
        writer.writerow(["Summary"])
        writer.writerow(["Metric", "Value", "Unit"])
        writer.writerow(["Total Area", round(self.total_area_m2, 2), "m2"])
        writer.writerow(["Usable Area", round(self.usable_area_m2, 2), "m2"])
        writer.writerow(["Usable Share", round(self.usable_pct, 2), "%"])
        writer.writerow(["Quality", self.quality.value, ""])
        writer.writerow([])

        # Exclusion accounting
        writer.writerow(["Exclusion Areas"])
        writer.writerow(["Metric", "Value", "Unit"])
        writer.writerow(["Raw (sum of zones)", round(self.raw_exclusion_area_m2, 2), "m2"])
        writer.writerow(["Merged", round(self.merged_exclusion_area_m2, 2), "m2"])
        writer.writerow(["Inside Boundary", round(self.clipped_exclusion_area_m2, 2), "m2"])
        writer.writerow(["Outside Boundary", round(self.outside_exclusion_area_m2, 2), "m2"])
        writer.writerow(["Overlap", round(self.overlap_area_m2, 2), "m2"])
        writer.writerow([])

        if self.exclusion_area_by_type:
            writer.writerow(["Exclusion Areas by Zone Type"])
            writer.writerow(["Zone Type", "Area (m2)"])
            for zone_type, area in sorted(self.exclusion_area_by_type.items()):
                writer.writerow([zone_type, round(area, 2)])
            writer.writerow([])

        writer.writerow(["Inputs"])
        writer.writerow(["Boundaries", self.boundary_count])
        writer.writerow(["Exclusion Zones", self.exclusion_count])
        writer.writerow(["Skipped Rings", self.skipped_ring_count])

        return output.getvalue()


def build_area_takeoff(
    boundaries: Iterable[BoundaryInput],
    exclusions: Iterable[ExclusionInput],
    total_area: Optional[float] = None,
    settings: SettingsLike = None,
) -> AreaTakeoff:
    """Compute the area takeoff for a site.

    The headline figures always come from ``compute_usable_area``. When the
    geometric breakdown cannot be computed it is left at zero.

    Args:
        boundaries: Site boundary polygons (models or dicts)
        exclusions: Exclusion zones (models or dicts)
        total_area: Known site area in m^2 (measured from boundaries if None)
        settings: Settings in any form ``compute_usable_area`` accepts

    Returns:
        AreaTakeoff with computed quantities
    """
    settings = settings_or_defaults(settings)
    boundary_models = coerce_boundaries(boundaries)
    exclusion_models = coerce_exclusions(exclusions)

    result = compute_usable_area(boundary_models, exclusion_models, total_area, settings)

    takeoff = AreaTakeoff(
        total_area_m2=result.total_area,
        usable_area_m2=result.usable_area,
        usable_pct=result.usable_ratio * 100,
        raw_exclusion_area_m2=sum(z.raw_area for z in exclusion_models),
        boundary_count=len(boundary_models),
        exclusion_count=len(exclusion_models),
        quality=result.quality,
    )

    if result.quality == AreaQuality.FALLBACK:
        # Geometry already failed once; the breakdown would not agree with the headline
        return takeoff

    try:
        takeoff = _compute_exclusion_breakdown(takeoff, boundary_models, exclusion_models, settings)
    except Exception as e:
        logger.warning(f"Exclusion breakdown unavailable: {e}")

    return takeoff


def _compute_exclusion_breakdown(
    takeoff: AreaTakeoff,
    boundaries: list[BoundaryPolygon],
    exclusions: list[ExclusionZone],
    settings: AreaSettings,
) -> AreaTakeoff:
    """Measure merged, clipped, outside and overlapping exclusion areas."""
    ellipsoid = settings.measurement.ellipsoid
    grid_size = settings.precision.grid_size

    regions = build_site_regions(boundaries, exclusions, settings)
    boundary_region = regions.boundary.region
    exclusion_region = regions.exclusion.region

    merged = region_area(exclusion_region, ellipsoid)
    clipped = region_area(clip_region(exclusion_region, boundary_region, grid_size), ellipsoid)

    # Zones measured one at a time double-count their overlaps
    per_zone_total = 0.0
    for zone in exclusions:
        ring = validate_ring(zone.coordinates, settings.validation.min_distinct_vertices)
        if ring is None:
            continue
        polygon = polygon_from_coords(ring)
        if not polygon.is_valid:
            continue
        try:
            polygon = snap_to_grid(polygon, grid_size)
        except GeometryError:
            continue
        per_zone_total += region_area(Region.from_geometry(polygon), ellipsoid)

    by_type = _clipped_area_by_type(exclusions, boundary_region, settings)

    takeoff.merged_exclusion_area_m2 = merged
    takeoff.clipped_exclusion_area_m2 = clipped
    takeoff.outside_exclusion_area_m2 = max(0.0, merged - clipped)
    takeoff.overlap_area_m2 = max(0.0, per_zone_total - merged)
    takeoff.exclusion_area_by_type = by_type
    takeoff.skipped_ring_count = regions.skipped_rings

    return takeoff


def _clipped_area_by_type(
    exclusions: list[ExclusionZone],
    boundary_region: Region,
    settings: AreaSettings,
) -> Dict[str, float]:
    """Clipped union area of each zone type present on the site."""
    by_type: Dict[ExclusionZoneType, list[ExclusionZone]] = {}
    for zone in exclusions:
        by_type.setdefault(zone.type, []).append(zone)

    areas: Dict[str, float] = {}
    for zone_type, zones in by_type.items():
        try:
            report, _ = unify_exclusions(zones, settings)
        except GeometryError as e:
            logger.warning(f"No usable {zone_type.value} zones: {e}")
            areas[zone_type.value] = 0.0
            continue
        clipped = clip_region(report.region, boundary_region, settings.precision.grid_size)
        areas[zone_type.value] = region_area(clipped, settings.measurement.ellipsoid)

    return areas
