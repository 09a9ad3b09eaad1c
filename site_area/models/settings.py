"""Tunable settings for the usable-area engine."""

from collections.abc import Mapping
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


class RingValidationSettings(BaseModel):
    """Rules for accepting a raw vertex list as a polygon ring."""

    min_distinct_vertices: int = Field(
        default=3, ge=3, description="Distinct vertices required, closing vertex excluded"
    )


class MeasurementSettings(BaseModel):
    """How areas are measured on the earth's surface."""

    ellipsoid: str = Field(
        default="WGS84", description="pyproj ellipsoid name used for geodesic area"
    )

    @field_validator("ellipsoid")
    @classmethod
    def validate_ellipsoid(cls, v: str) -> str:
        """Reject ellipsoid names pyproj does not know."""
        from pyproj import get_ellps_map

        if v not in get_ellps_map():
            raise ValueError(f"Unknown ellipsoid '{v}'")
        return v


class PrecisionSettings(BaseModel):
    """Precision grid applied to overlay operations."""

    grid_size: Optional[float] = Field(
        default=None,
        gt=0,
        description="Snap union/intersection output to this grid (degrees); None = full precision",
    )


class AreaSettings(BaseModel):
    """Complete settings for a usable-area computation.

    Unset sections keep their defaults, so a profile or override only names
    what it changes.
    """

    validation: RingValidationSettings = Field(
        default_factory=RingValidationSettings, description="Ring validation rules"
    )
    measurement: MeasurementSettings = Field(
        default_factory=MeasurementSettings, description="Area measurement settings"
    )
    precision: PrecisionSettings = Field(
        default_factory=PrecisionSettings, description="Overlay precision settings"
    )

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "AreaSettings":
        """Parse settings from a YAML document; an empty document gives the defaults."""
        data = yaml.safe_load(yaml_content)
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError(f"Settings YAML must be a mapping, got {type(data).__name__}")
        return cls.model_validate(data)

    def merge_override(self, override: Mapping[str, Any]) -> "AreaSettings":
        """Return a copy with ``override`` applied section by section."""
        return AreaSettings.model_validate(_apply_override(self.model_dump(), override))


def _apply_override(section: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay nested mappings onto a settings dump without mutating it."""
    merged = dict(section)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = _apply_override(current, value)
        else:
            merged[key] = value
    return merged
