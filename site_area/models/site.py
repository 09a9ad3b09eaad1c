"""Site boundary and exclusion zone models."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ExclusionZoneType(str, Enum):
    """Category of a no-build zone inside a site."""

    WETLAND = "wetland"
    SETBACK = "setback"
    EASEMENT = "easement"
    SLOPE = "slope"
    FLOOD_ZONE = "flood_zone"
    TREE_COVER = "tree_cover"
    STRUCTURE = "structure"
    WATER_BODY = "water_body"
    OTHER = "other"


EXCLUSION_ZONE_LABELS: dict[ExclusionZoneType, str] = {
    ExclusionZoneType.WETLAND: "Wetland",
    ExclusionZoneType.SETBACK: "Setback",
    ExclusionZoneType.EASEMENT: "Easement",
    ExclusionZoneType.SLOPE: "Steep Slope",
    ExclusionZoneType.FLOOD_ZONE: "Flood Zone",
    ExclusionZoneType.TREE_COVER: "Tree Cover",
    ExclusionZoneType.STRUCTURE: "Structure",
    ExclusionZoneType.WATER_BODY: "Water Body",
    ExclusionZoneType.OTHER: "Other",
}


class Vertex(BaseModel):
    """A latitude/longitude pair in degrees."""

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lng: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")
    elevation: float | None = Field(
        default=None, description="Elevation from the import file (ignored for area)"
    )

    def as_lng_lat(self) -> tuple[float, float]:
        """Get (x, y) ordering used by the geometry layer."""
        return (self.lng, self.lat)


class BoundaryPolygon(BaseModel):
    """One part of a site's outer perimeter.

    Sites made of split parcels carry several boundary polygons.
    """

    id: str = Field(..., description="Unique identifier")
    name: str = Field(default="", description="Display name")
    coordinates: list[Vertex] = Field(
        default_factory=list, description="Ring vertices, closed or open"
    )
    area: float | None = Field(
        default=None, ge=0.0, description="Precomputed area in square meters"
    )


class ExclusionZone(BaseModel):
    """No-build zone such as a wetland, setback or easement.

    ``area`` is the raw per-zone area supplied by the import step. It is only
    used when the exact computation cannot run.
    """

    id: str = Field(..., description="Unique identifier")
    name: str = Field(default="", description="Display name")
    type: ExclusionZoneType = Field(
        default=ExclusionZoneType.OTHER, description="Zone category"
    )
    coordinates: list[Vertex] = Field(
        default_factory=list, description="Ring vertices, closed or open"
    )
    area: float | None = Field(
        default=None, ge=0.0, description="Precomputed raw area in square meters"
    )
    description: str | None = Field(default=None, description="Free-form notes")

    @field_validator("type", mode="before")
    @classmethod
    def coerce_unknown_type(cls, v: object) -> object:
        """Map unrecognised zone types to OTHER instead of rejecting the zone."""
        if isinstance(v, ExclusionZoneType):
            return v
        try:
            return ExclusionZoneType(str(v).lower())
        except ValueError:
            return ExclusionZoneType.OTHER

    @property
    def label(self) -> str:
        return EXCLUSION_ZONE_LABELS[self.type]

    @property
    def raw_area(self) -> float:
        """Precomputed area, 0 when the import step did not supply one."""
        return self.area or 0.0
