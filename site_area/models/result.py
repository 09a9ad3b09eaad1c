"""Result models for usable-area computations."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field, computed_field


class AreaQuality(str, Enum):
    """How a usable area figure was obtained."""

    EXACT = "exact"  # union-then-clip geometry
    PASSTHROUGH = "passthrough"  # nothing to clip, usable == total
    FALLBACK = "fallback"  # raw precomputed areas, overlaps double-counted


class DegradedReason(str, Enum):
    """Why a computation fell back to the approximate path."""

    UNION_FAILED = "union_failed"
    CLIP_FAILED = "clip_failed"
    AREA_FAILED = "area_failed"
    BOUNDARY_MEASURE_FAILED = "boundary_measure_failed"
    UNEXPECTED_ERROR = "unexpected_error"


class AreaResult(BaseModel):
    """Total and usable site area in square meters."""

    total_area: float = Field(..., ge=0.0, description="Union area of site boundaries (m^2)")
    usable_area: float = Field(..., ge=0.0, description="Area available for construction (m^2)")
    exclusion_area: float = Field(
        default=0.0, ge=0.0, description="Exclusion area subtracted from the total (m^2)"
    )
    quality: AreaQuality = Field(
        default=AreaQuality.EXACT, description="How usable_area was obtained"
    )
    degraded_reason: DegradedReason | None = Field(
        default=None, description="Set when quality is fallback"
    )

    @computed_field
    @property
    def usable_ratio(self) -> float:
        """Fraction of the site that is usable (0 for an empty site)."""
        if self.total_area <= 0:
            return 0.0
        return self.usable_area / self.total_area

    @property
    def is_exact(self) -> bool:
        return self.quality != AreaQuality.FALLBACK


@dataclass(frozen=True)
class AreaOutcome:
    """Either an exact result or the reason the exact path was abandoned.

    Exactly one of ``result`` and ``reason`` is set. A degraded outcome keeps
    the total area when it was known before the failure.
    """

    result: AreaResult | None = None
    reason: DegradedReason | None = None
    detail: str | None = None
    total_area: float | None = None

    @classmethod
    def ok(cls, result: AreaResult) -> "AreaOutcome":
        return cls(result=result)

    @classmethod
    def degraded(
        cls,
        reason: DegradedReason,
        detail: str | None = None,
        total_area: float | None = None,
    ) -> "AreaOutcome":
        return cls(reason=reason, detail=detail, total_area=total_area)

    @property
    def is_ok(self) -> bool:
        return self.result is not None
