"""
models.py — Python dataclasses for the planting planner.

All models are frozen: a config change always produces a new value,
and a GridPlan is never edited after generation.
"""

from dataclasses import dataclass, replace
from typing import Tuple


@dataclass(frozen=True)
class CropPreset:
    """Default spacing and depth for a crop, in centimeters."""
    row_spacing: float
    plant_spacing: float
    planting_depth: float


@dataclass(frozen=True)
class PlantingConfig:
    """User-adjustable planting configuration (all dimensions in cm)."""
    crop: str = "maize"
    row_spacing: float = 60
    plant_spacing: float = 25
    planting_depth: float = 5
    field_width: float = 500
    field_length: float = 800

    def with_values(self, **changes) -> "PlantingConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class Waypoint:
    """A single planting location: x spans the rows, y runs along a row."""
    x: float
    y: float


@dataclass(frozen=True)
class GridPlan:
    """Planting grid and robot traversal path derived from a PlantingConfig."""
    rows: int
    plants_per_row: int
    total_plants: int
    robot_path: Tuple[Waypoint, ...]


@dataclass(frozen=True)
class ExportRecord:
    """One numbered waypoint, denormalized for export."""
    sequence: int
    x: float
    y: float
    crop: str
    depth: float
    action: str = "plant"
