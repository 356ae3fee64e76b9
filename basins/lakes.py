from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import structlog

from basins.fill import FILL_METHODS
from basins.grid import Grid

logger = structlog.get_logger()


@dataclass(frozen=True)
class HydrologyResult:
    """Settled water surface and standing-water depth for one terrain.

    ``water_level`` holds surface elevations, ``depth`` holds water depth
    above the terrain. They are separate grids; neither is rewritten in place.
    """

    water_level: Grid
    depth: Grid


def standing_water_depth(
    elevation: Grid, water_level: Grid, ocean_level: float
) -> Grid:
    """Depth of standing water per cell.

    The ocean level is a global floor on the water surface:
    ``depth = max(max(water_level, ocean_level) - elevation, 0)``.
    """

    if water_level.size != elevation.size:
        raise ValueError("water_level must have the same size as elevation")

    h = elevation.as_array()
    target = np.maximum(water_level.as_array(), float(ocean_level))
    depth = np.clip(target - h, 0.0, np.inf)
    return Grid.from_array(depth, dtype=np.float64)


def calculate_lakes(
    elevation: Grid,
    ocean_level: float,
    *,
    method: str = "fifo",
    water_level: Optional[Grid] = None,
) -> HydrologyResult:
    method = str(method)
    if method not in FILL_METHODS:
        raise ValueError(f"unknown fill method: {method}")

    filled = FILL_METHODS[method](elevation, water_level)
    depth = standing_water_depth(elevation, filled, ocean_level)

    logger.info(
        "Lakes calculated",
        ocean_level=float(ocean_level),
        flooded_cells=int(np.count_nonzero(depth.values())),
        max_depth=float(np.max(depth.values())),
    )
    return HydrologyResult(water_level=filled, depth=depth)
