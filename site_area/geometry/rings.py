"""Ring validation for imported boundary and exclusion vertex lists."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from ..models.site import Vertex

logger = logging.getLogger(__name__)

# Type aliases
Coord = tuple[float, float]
Coords = list[Coord]
RawRing = Sequence[Vertex] | Sequence[Coord]

MIN_DISTINCT_VERTICES = 3


def _to_coord(vertex: Vertex | Coord) -> Coord:
    if isinstance(vertex, Vertex):
        return vertex.as_lng_lat()
    x, y = vertex
    return (float(x), float(y))


def validate_ring(
    vertices: RawRing,
    min_distinct: int = MIN_DISTINCT_VERTICES,
) -> Coords | None:
    """Validate and close a ring.

    Args:
        vertices: Vertex models, or (lng, lat) tuples, in ring order
        min_distinct: Distinct vertices required, closing vertex excluded

    Returns:
        Closed ring as (lng, lat) tuples, or None if the ring is unusable
    """
    if not vertices:
        return None

    try:
        coords = [_to_coord(v) for v in vertices]
    except (TypeError, ValueError) as e:
        logger.debug(f"Dropping ring with unreadable vertices: {e}")
        return None

    if not all(math.isfinite(x) and math.isfinite(y) for x, y in coords):
        logger.debug("Dropping ring with non-finite coordinates")
        return None

    # Closing vertex does not count towards distinctness
    open_coords = coords[:-1] if len(coords) > 1 and coords[0] == coords[-1] else coords
    if len(set(open_coords)) < max(min_distinct, MIN_DISTINCT_VERTICES):
        logger.debug(f"Dropping ring with {len(set(open_coords))} distinct vertices")
        return None

    if coords[0] != coords[-1]:
        coords.append(coords[0])  # Close ring

    return coords


def validate_rings(
    rings: Iterable[RawRing],
    min_distinct: int = MIN_DISTINCT_VERTICES,
) -> list[Coords]:
    """Validate a collection of rings, silently dropping unusable ones."""
    valid = []
    for ring in rings:
        closed = validate_ring(ring, min_distinct=min_distinct)
        if closed is not None:
            valid.append(closed)
    return valid
