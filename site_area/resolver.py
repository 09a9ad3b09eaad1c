"""Usable-area resolution for a site.

Orchestrates the full computation from imported rings to an AreaResult:
1. Validate boundary and exclusion rings
2. Union boundaries into one region
3. Union exclusions into one region (overlaps counted once)
4. Clip the exclusion region to the boundary region
5. Measure geodesic areas and subtract

Any geometric failure degrades to a flagged fallback built from the
precomputed per-zone areas, so callers always get numbers back.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from .errors import GeometryError
from .geometry.area import region_area
from .geometry.polygon_ops import UnionReport, intersect_regions, unify_rings
from .geometry.rings import MIN_DISTINCT_VERTICES, validate_ring, validate_rings
from .models.result import AreaOutcome, AreaQuality, AreaResult, DegradedReason
from .models.settings import AreaSettings
from .models.site import BoundaryPolygon, ExclusionZone
from .settings.loader import SettingsLike, resolve_settings

logger = structlog.get_logger(__name__)

BoundaryInput = BoundaryPolygon | dict[str, Any]
ExclusionInput = ExclusionZone | dict[str, Any]

ModelT = TypeVar("ModelT", bound=BaseModel)

_FAILED_OPERATION_REASONS = {
    "union": DegradedReason.UNION_FAILED,
    "intersection": DegradedReason.CLIP_FAILED,
    "area": DegradedReason.AREA_FAILED,
}


@dataclass
class SiteRegions:
    """Unified boundary and exclusion regions for one site."""

    boundary: UnionReport
    exclusion: UnionReport
    invalid_rings: int = 0  # Rings rejected by validation before any union

    @property
    def skipped_rings(self) -> int:
        """Rings that did not contribute to either region."""
        return self.invalid_rings + self.boundary.skipped + self.exclusion.skipped


def _coerce(items: Iterable[Any] | None, model: type[ModelT]) -> list[ModelT]:
    """Convert dicts to models, dropping records that fail validation."""
    coerced: list[ModelT] = []
    for i, item in enumerate(items or []):
        if isinstance(item, model):
            coerced.append(item)
            continue
        try:
            coerced.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(
                "dropped_invalid_record",
                model=model.__name__,
                index=i,
                errors=e.error_count(),
            )
    return coerced


def coerce_boundaries(items: Iterable[BoundaryInput] | None) -> list[BoundaryPolygon]:
    return _coerce(items, BoundaryPolygon)


def coerce_exclusions(items: Iterable[ExclusionInput] | None) -> list[ExclusionZone]:
    return _coerce(items, ExclusionZone)


def unify_boundaries(
    boundaries: list[BoundaryPolygon],
    settings: AreaSettings,
) -> tuple[UnionReport, int]:
    """Validate and union boundary rings.

    Returns:
        Tuple of (union report, number of rings rejected by validation)
    """
    rings = validate_rings(
        (b.coordinates for b in boundaries),
        min_distinct=settings.validation.min_distinct_vertices,
    )
    report = unify_rings(rings, grid_size=settings.precision.grid_size)
    return report, len(boundaries) - len(rings)


def unify_exclusions(
    exclusions: list[ExclusionZone],
    settings: AreaSettings,
) -> tuple[UnionReport, int]:
    """Validate and union exclusion rings.

    Returns:
        Tuple of (union report, number of rings rejected by validation)
    """
    rings = validate_rings(
        (z.coordinates for z in exclusions),
        min_distinct=settings.validation.min_distinct_vertices,
    )
    report = unify_rings(rings, grid_size=settings.precision.grid_size)
    return report, len(exclusions) - len(rings)


def build_site_regions(
    boundaries: list[BoundaryPolygon],
    exclusions: list[ExclusionZone],
    settings: AreaSettings | None = None,
) -> SiteRegions:
    """Validate and union both ring sets of a site."""
    settings = settings or AreaSettings()
    boundary, invalid_boundaries = unify_boundaries(boundaries, settings)
    exclusion, invalid_exclusions = unify_exclusions(exclusions, settings)
    return SiteRegions(
        boundary=boundary,
        exclusion=exclusion,
        invalid_rings=invalid_boundaries + invalid_exclusions,
    )


def _supplied_total(total_area: Any) -> float | None:
    """Normalize a caller-supplied total.

    Non-numeric or non-finite values mean unknown; negatives clamp to 0.
    """
    if total_area is None:
        return None
    try:
        total = float(total_area)
    except (TypeError, ValueError):
        logger.warning("ignored_total_area", value=repr(total_area))
        return None
    if not math.isfinite(total):
        return None
    return max(0.0, total)


def settings_or_defaults(settings: SettingsLike) -> AreaSettings:
    """Resolve caller settings, falling back to the defaults if they cannot be loaded."""
    try:
        return resolve_settings(settings)
    except Exception as e:
        logger.warning("settings_unavailable", settings=repr(settings), error=str(e))
        return AreaSettings()


def _passthrough(total_area: float) -> AreaResult:
    return AreaResult(
        total_area=total_area,
        usable_area=total_area,
        quality=AreaQuality.PASSTHROUGH,
    )


def resolve_usable_area(
    boundaries: list[BoundaryPolygon],
    exclusions: list[ExclusionZone],
    total_area: float | None = None,
    settings: AreaSettings | None = None,
) -> AreaOutcome:
    """Run the exact union-then-clip computation.

    Args:
        boundaries: Non-empty list of site boundary polygons
        exclusions: Non-empty list of exclusion zones
        total_area: Known site area in m^2 (measured from boundaries if None)
        settings: Engine settings (defaults if None)

    Returns:
        AreaOutcome holding the exact result, or the reason it failed
    """
    settings = settings or AreaSettings()
    ellipsoid = settings.measurement.ellipsoid
    grid_size = settings.precision.grid_size
    total = _supplied_total(total_area)

    try:
        boundary_report, _ = unify_boundaries(boundaries, settings)
        boundary_region = boundary_report.region

        if boundary_region.is_empty:
            # Nothing to clip against
            logger.info("usable_area_passthrough", reason="empty_boundary_region")
            return AreaOutcome.ok(_passthrough(total if total is not None else 0.0))

        if total is None:
            total = region_area(boundary_region, ellipsoid)

        exclusion_report, _ = unify_exclusions(exclusions, settings)
        clipped = intersect_regions(exclusion_report.region, boundary_region, grid_size=grid_size)
        clipped_area = region_area(clipped, ellipsoid)

    except GeometryError as e:
        reason = _FAILED_OPERATION_REASONS.get(e.operation, DegradedReason.UNEXPECTED_ERROR)
        return AreaOutcome.degraded(reason, detail=str(e), total_area=total)
    except Exception as e:
        return AreaOutcome.degraded(
            DegradedReason.UNEXPECTED_ERROR,
            detail=f"{type(e).__name__}: {e}",
            total_area=total,
        )

    usable = max(0.0, total - clipped_area)
    logger.debug(
        "usable_area_computed",
        total_area=total,
        clipped_exclusion_area=clipped_area,
        usable_area=usable,
        boundaries_skipped=boundary_report.skipped,
        exclusions_skipped=exclusion_report.skipped,
    )
    return AreaOutcome.ok(AreaResult(
        total_area=total,
        usable_area=usable,
        exclusion_area=total - usable,
        quality=AreaQuality.EXACT,
    ))


def fallback_usable_area(
    boundaries: list[BoundaryPolygon],
    exclusions: list[ExclusionZone],
    total_area: float | None,
    reason: DegradedReason,
    min_distinct: int = MIN_DISTINCT_VERTICES,
) -> AreaResult:
    """Approximate usable area from precomputed per-zone areas.

    Overlapping zones are double-counted, so the estimate errs low. Zones
    whose ring is unusable are left out here too.
    """
    total = _supplied_total(total_area)
    if total is None:
        total = sum(b.area or 0.0 for b in boundaries)

    raw_exclusion = sum(
        z.raw_area for z in exclusions
        if validate_ring(z.coordinates, min_distinct=min_distinct) is not None
    )
    usable = max(0.0, total - raw_exclusion)
    return AreaResult(
        total_area=total,
        usable_area=usable,
        exclusion_area=total - usable,
        quality=AreaQuality.FALLBACK,
        degraded_reason=reason,
    )


def compute_usable_area(
    boundaries: Iterable[BoundaryInput] | None,
    exclusions: Iterable[ExclusionInput] | None,
    total_area: float | None = None,
    settings: SettingsLike = None,
) -> AreaResult:
    """Compute the total and usable area of a site.

    Never raises: geometric failures produce a result flagged with
    ``quality=AreaQuality.FALLBACK``, and settings that cannot be loaded are
    replaced by the defaults with a warning.

    Args:
        boundaries: Site boundary polygons (models or dicts)
        exclusions: Exclusion zones (models or dicts)
        total_area: Known site area in m^2 (measured from boundaries if None)
        settings: AreaSettings, profile name, YAML path or override mapping
            (defaults if None)

    Returns:
        AreaResult with total and usable area in square meters

    Example:
        >>> result = compute_usable_area(site.boundaries, site.exclusion_zones)
        >>> result.usable_area <= result.total_area
        True
    """
    settings = settings_or_defaults(settings)
    total_area = _supplied_total(total_area)
    boundary_models = coerce_boundaries(boundaries)
    exclusion_models = coerce_exclusions(exclusions)

    if not boundary_models or not exclusion_models:
        total = total_area
        if total is None:
            try:
                report, _ = unify_boundaries(boundary_models, settings)
                total = region_area(report.region, settings.measurement.ellipsoid)
            except Exception as e:
                logger.warning(
                    "usable_area_fallback",
                    reason=DegradedReason.BOUNDARY_MEASURE_FAILED.value,
                    error=str(e),
                )
                return fallback_usable_area(
                    boundary_models, [], None, DegradedReason.BOUNDARY_MEASURE_FAILED,
                    min_distinct=settings.validation.min_distinct_vertices,
                )
        return _passthrough(total)

    outcome = resolve_usable_area(boundary_models, exclusion_models, total_area, settings)
    if outcome.is_ok:
        return outcome.result

    logger.warning(
        "usable_area_fallback",
        reason=outcome.reason.value,
        error=outcome.detail,
        boundary_count=len(boundary_models),
        exclusion_count=len(exclusion_models),
    )
    known_total = outcome.total_area if outcome.total_area is not None else total_area
    return fallback_usable_area(
        boundary_models,
        exclusion_models,
        known_total,
        outcome.reason,
        min_distinct=settings.validation.min_distinct_vertices,
    )
