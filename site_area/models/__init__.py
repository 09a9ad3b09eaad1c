"""Pydantic models for site-area."""

from .result import AreaOutcome, AreaQuality, AreaResult, DegradedReason
from .settings import AreaSettings, MeasurementSettings, PrecisionSettings, RingValidationSettings
from .site import (
    EXCLUSION_ZONE_LABELS,
    BoundaryPolygon,
    ExclusionZone,
    ExclusionZoneType,
    Vertex,
)

__all__ = [
    # Site
    "Vertex",
    "BoundaryPolygon",
    "ExclusionZone",
    "ExclusionZoneType",
    "EXCLUSION_ZONE_LABELS",
    # Results
    "AreaResult",
    "AreaQuality",
    "AreaOutcome",
    "DegradedReason",
    # Settings
    "AreaSettings",
    "RingValidationSettings",
    "MeasurementSettings",
    "PrecisionSettings",
]
