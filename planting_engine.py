"""
planting_engine.py — Planting grid and robot path generation.

This module implements:
- Grid sizing: how many rows fit across the field width and how many plants
  fit along each row
- Serpentine (boustrophedon) traversal of the grid for a planting robot
- Preview sizing and summary figures for the planner page

Algorithm details:
- rows = floor(field_width / row_spacing)
- plants_per_row = floor(field_length / plant_spacing)
- Row r sits at x = r * row_spacing
- Even rows are planted with y ascending, odd rows with y descending:

    Row 0: ↓ ↓ ↓ ↓   (y = 0 → end)
    Row 1: ↑ ↑ ↑ ↑   (y = end → 0)
    Row 2: ↓ ↓ ↓ ↓

  so the last plant of one row is next to the first plant of the next.
- Non-positive spacing or field dimensions, and grids larger than
  MAX_WAYPOINTS, raise InvalidConfig before any grid is computed.
  A field too small for a single row or plant is a valid,
  empty plan.
"""

import math

from models import GridPlan, Waypoint


PREVIEW_MAX_ROWS = 20
PREVIEW_MAX_PLANTS = 30

# Largest robot path a single plan may hold
MAX_WAYPOINTS = 1_000_000

_REQUIRED_POSITIVE = ('row_spacing', 'plant_spacing', 'field_width', 'field_length')


class InvalidConfig(ValueError):
    """Raised when a planting configuration cannot produce a grid."""

    def __init__(self, field, value, message=None):
        self.field = field
        self.value = value
        super().__init__(message or f"{field} must be a positive number, got {value!r}")


def check_config(config):
    """Raise InvalidConfig for the first spacing or field dimension that is not positive."""
    for name in _REQUIRED_POSITIVE:
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidConfig(name, value)
        try:
            finite = math.isfinite(value)
        except OverflowError:
            finite = False
        if not finite or value <= 0:
            raise InvalidConfig(name, value)


def _cell_count(config, extent_field, spacing_field):
    """floor(extent / spacing), or InvalidConfig when the quotient is not finite."""
    extent = getattr(config, extent_field)
    try:
        quotient = extent / getattr(config, spacing_field)
    except OverflowError:
        quotient = math.inf
    if not math.isfinite(quotient):
        raise InvalidConfig(
            extent_field, extent,
            f"{extent_field} is too large for {spacing_field} = {getattr(config, spacing_field)!r}",
        )
    return math.floor(quotient)


def grid_dimensions(config):
    """
    Compute (rows, plants_per_row) for a validated configuration.

    Returns:
        Tuple of non-negative ints.

    Raises:
        InvalidConfig: a field dimension divided by its spacing overflows.
    """
    rows = _cell_count(config, 'field_width', 'row_spacing')
    plants_per_row = _cell_count(config, 'field_length', 'plant_spacing')
    return rows, plants_per_row


def serpentine_order(rows, plants_per_row):
    """
    Yield (row, plant) grid indices in serpentine order.

    Odd rows are walked in reverse so consecutive cells are always adjacent.
    """
    for row in range(rows):
        plants = range(plants_per_row)
        if row % 2 == 1:
            plants = reversed(plants)
        for plant in plants:
            yield row, plant


def generate(config, max_waypoints=MAX_WAYPOINTS):
    """
    Generate the planting grid and robot path for a configuration.

    Args:
        config: PlantingConfig
        max_waypoints: Largest accepted rows * plants_per_row.

    Returns:
        GridPlan with robot_path of length rows * plants_per_row.

    Raises:
        InvalidConfig: row_spacing, plant_spacing, field_width or field_length
            is zero, negative or not a finite number, or the grid would hold
            more than max_waypoints plants.
    """
    check_config(config)

    rows, plants_per_row = grid_dimensions(config)
    if rows == 0 or plants_per_row == 0:
        return GridPlan(rows=rows, plants_per_row=plants_per_row, total_plants=0, robot_path=())

    if rows * plants_per_row > max_waypoints:
        raise InvalidConfig(
            'field_width', config.field_width,
            f"{rows} rows × {plants_per_row} plants exceeds the limit of {max_waypoints} waypoints",
        )

    robot_path = tuple(
        Waypoint(x=row * config.row_spacing, y=plant * config.plant_spacing)
        for row, plant in serpentine_order(rows, plants_per_row)
    )

    return GridPlan(
        rows=rows,
        plants_per_row=plants_per_row,
        total_plants=rows * plants_per_row,
        robot_path=robot_path,
    )


def path_length(robot_path):
    """Total straight-line distance (cm) the robot travels between waypoints."""
    total = 0.0
    for start, end in zip(robot_path, robot_path[1:]):
        total += math.hypot(end.x - start.x, end.y - start.y)
    return total


def preview_grid(plan, max_rows=PREVIEW_MAX_ROWS, max_plants=PREVIEW_MAX_PLANTS):
    """
    Size the on-screen preview of a plan.

    Large fields are only partially drawn; 'truncated' tells the page to say
    so.

    Returns:
        Dict with keys: rows, plants_per_row, truncated, cells.
        'cells' lists (row, plant, direction) in serpentine order, with
        direction 'forward' for rows planted with y ascending and
        'reverse' for rows planted with y descending.
    """
    rows = min(plan.rows, max_rows)
    plants_per_row = min(plan.plants_per_row, max_plants)
    truncated = plan.rows > max_rows or plan.plants_per_row > max_plants

    cells = [
        (row, plant, 'forward' if row % 2 == 0 else 'reverse')
        for row, plant in serpentine_order(rows, plants_per_row)
    ]

    return {
        'rows': rows,
        'plants_per_row': plants_per_row,
        'truncated': truncated,
        'cells': cells,
    }


def plan_summary(config, plan):
    """Summary figures shown next to the planner form."""
    return {
        'crop': config.crop,
        'rows': plan.rows,
        'plants_per_row': plan.plants_per_row,
        'total_plants': plan.total_plants,
        'path_length_cm': round(path_length(plan.robot_path), 2),
    }
