"""Unified site geometry as an explicit empty / single / multi variant."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shapely.geometry import GeometryCollection, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry


class RegionKind(Enum):
    """Shape of a unified region."""
    EMPTY = "empty"
    SINGLE = "single"
    MULTI = "multi"


@dataclass(frozen=True)
class Region:
    """A polygonal region produced by unioning or clipping rings.

    Overlay results come back from shapely as Polygon, MultiPolygon or a
    GeometryCollection. ``from_geometry`` keeps only the polygonal parts and
    tags the result so callers never have to inspect geometry types.
    """

    kind: RegionKind
    geometry: Polygon | MultiPolygon

    @classmethod
    def empty(cls) -> Region:
        return cls(RegionKind.EMPTY, Polygon())

    @classmethod
    def from_geometry(cls, geom: BaseGeometry | None) -> Region:
        """Wrap a shapely geometry, discarding any non-polygonal parts."""
        polygons = _polygonal_parts(geom)
        if not polygons:
            return cls.empty()
        if len(polygons) == 1:
            return cls(RegionKind.SINGLE, polygons[0])
        return cls(RegionKind.MULTI, MultiPolygon(polygons))

    @property
    def is_empty(self) -> bool:
        return self.kind == RegionKind.EMPTY

    @property
    def polygons(self) -> list[Polygon]:
        """Member polygons of the region (empty list for EMPTY)."""
        if self.kind == RegionKind.SINGLE:
            return [self.geometry]
        if self.kind == RegionKind.MULTI:
            return list(self.geometry.geoms)
        return []


def _polygonal_parts(geom: BaseGeometry | None) -> list[Polygon]:
    if geom is None or geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom]
    if isinstance(geom, MultiPolygon):
        return [p for p in geom.geoms if not p.is_empty]
    if isinstance(geom, GeometryCollection):
        parts = []
        for g in geom.geoms:
            parts.extend(_polygonal_parts(g))
        return parts
    # Points and lines (e.g. shared edges from an intersection) carry no area
    return []
