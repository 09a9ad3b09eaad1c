"""Export utilities for site area results."""

from .quantities import AreaTakeoff, build_area_takeoff

__all__ = [
    "AreaTakeoff",
    "build_area_takeoff",
]
