from basins.config import SettingsError, TerrainConfig, load_settings, save_settings
from basins.fill import (
    FILL_METHODS,
    MAX_WATER_ELEVATION,
    fill_depressions,
    fill_depressions_priority_flood,
)
from basins.grid import Grid, Position
from basins.lakes import HydrologyResult, calculate_lakes, standing_water_depth
from basins.pipeline import TerrainResult, generate, generate_elevation

__all__ = [
    "FILL_METHODS",
    "Grid",
    "HydrologyResult",
    "MAX_WATER_ELEVATION",
    "Position",
    "SettingsError",
    "TerrainConfig",
    "TerrainResult",
    "calculate_lakes",
    "fill_depressions",
    "fill_depressions_priority_flood",
    "generate",
    "generate_elevation",
    "load_settings",
    "save_settings",
    "standing_water_depth",
]
