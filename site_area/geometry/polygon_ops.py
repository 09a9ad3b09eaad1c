"""Polygon overlay operations using Shapely.

Provides the union fold that merges boundary or exclusion rings into a single
region, and the clip that restricts exclusions to the site boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import shapely
from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon, Polygon
from shapely.validation import explain_validity

from ..errors import GeometryError
from .region import Region
from .rings import Coords

logger = logging.getLogger(__name__)

# Type aliases
PolygonLike = Polygon | MultiPolygon


@dataclass
class UnionReport:
    """Result of folding a set of rings into one region."""

    region: Region
    used: int = 0  # Polygons merged into the region
    skipped: int = 0  # Polygons dropped because their union step failed


def polygon_from_coords(coords: Coords) -> Polygon:
    """Create Shapely Polygon from coordinate list.

    Args:
        coords: List of (lng, lat) tuples forming polygon exterior

    Returns:
        Shapely Polygon
    """
    return Polygon(coords)


def union_step(
    accumulated: PolygonLike | None,
    polygon: Polygon,
    grid_size: float | None = None,
) -> PolygonLike:
    """Union one polygon into an accumulated geometry.

    Args:
        accumulated: Geometry merged so far (None before the first polygon)
        polygon: Polygon to merge
        grid_size: Optional precision grid for the overlay

    Returns:
        Merged geometry (Polygon or MultiPolygon)

    Raises:
        GeometryError: If the polygon is not a valid simple polygon or GEOS
            cannot compute the union
    """
    if polygon.is_empty or not polygon.is_valid:
        raise GeometryError("union", explain_validity(polygon))

    if accumulated is None or accumulated.is_empty:
        return snap_to_grid(polygon, grid_size)

    try:
        return accumulated.union(polygon, grid_size=grid_size)
    except (GEOSException, ValueError) as e:
        raise GeometryError("union", str(e)) from e


def snap_to_grid(polygon: Polygon, grid_size: float | None) -> PolygonLike:
    """Round a polygon onto the overlay precision grid.

    Seeds the fold so a single-ring region sits on the same grid as the
    overlay output measured against it.

    Raises:
        GeometryError: If the polygon collapses on the grid
    """
    if grid_size is None:
        return polygon

    try:
        snapped = shapely.set_precision(polygon, grid_size)
    except (GEOSException, ValueError) as e:
        raise GeometryError("union", str(e)) from e

    if snapped.is_empty:
        raise GeometryError("union", f"polygon collapses on a {grid_size} grid")
    return snapped


def unify_rings(
    rings: Iterable[Coords],
    grid_size: float | None = None,
) -> UnionReport:
    """Fold pairwise union across validated rings.

    A ring whose union step fails is skipped and folding continues with the
    rest, so one degenerate input never discards the whole set.

    Args:
        rings: Closed rings as produced by ``validate_rings``
        grid_size: Optional precision grid for the overlay

    Returns:
        UnionReport with the unified region and used/skipped counts

    Raises:
        GeometryError: If there were rings but every union step failed
    """
    accumulated: PolygonLike | None = None
    used = 0
    skipped = 0

    for i, coords in enumerate(rings):
        try:
            polygon = polygon_from_coords(coords)
            accumulated = union_step(accumulated, polygon, grid_size=grid_size)
            used += 1
        except (GeometryError, GEOSException, ValueError) as e:
            skipped += 1
            logger.warning(f"Skipping polygon {i} in union: {e}")

    if skipped and not used:
        raise GeometryError("union", f"none of {skipped} polygons could be merged")

    return UnionReport(
        region=Region.from_geometry(accumulated),
        used=used,
        skipped=skipped,
    )


def intersect_regions(
    region: Region,
    boundary: Region,
    grid_size: float | None = None,
) -> Region:
    """Intersect two regions.

    Raises:
        GeometryError: If GEOS cannot compute the intersection
    """
    if region.is_empty or boundary.is_empty:
        return Region.empty()

    try:
        clipped = region.geometry.intersection(boundary.geometry, grid_size=grid_size)
    except (GEOSException, ValueError) as e:
        raise GeometryError("intersection", str(e)) from e

    return Region.from_geometry(clipped)


def clip_region(
    region: Region,
    boundary: Region,
    grid_size: float | None = None,
) -> Region:
    """Restrict a region to the part that lies inside the boundary.

    Args:
        region: Unified exclusion region
        boundary: Unified boundary region
        grid_size: Optional precision grid for the overlay

    Returns:
        Intersection region, EMPTY when the regions do not overlap or the
        intersection cannot be computed
    """
    try:
        return intersect_regions(region, boundary, grid_size=grid_size)
    except GeometryError as e:
        logger.warning(f"Treating clip as empty: {e}")
        return Region.empty()
