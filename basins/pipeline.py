from __future__ import annotations

import time
from dataclasses import dataclass

import structlog

from noisefield.fractal import NoiseField

from basins.config import TerrainConfig
from basins.grid import Grid
from basins.lakes import calculate_lakes

logger = structlog.get_logger()


@dataclass(frozen=True)
class TerrainResult:
    """Both output fields of one Generate run, sharing ``config.size``."""

    config: TerrainConfig
    elevation: Grid
    water_level: Grid
    depth: Grid

    @property
    def size(self) -> int:
        return self.elevation.size


def noise_field(config: TerrainConfig) -> NoiseField:
    return NoiseField(
        seed=int(config.seed),
        size=int(config.size),
        frequency=float(config.frequency),
        amplitude=float(config.amplitude),
        octaves=int(config.octaves),
        persistence=float(config.persistence),
        basis=str(config.basis),
    )


def generate_elevation(config: TerrainConfig) -> Grid:
    field = noise_field(config.validate())
    return Grid.from_array(field.to_array())


def generate(config: TerrainConfig) -> TerrainResult:
    """Recompute elevation and standing water from scratch.

    Pure with respect to ``config``: the same parameters always give the same
    grids. Nothing from a previous run is reused.
    """

    config.validate()
    t0 = time.perf_counter()

    elevation = generate_elevation(config)
    t1 = time.perf_counter()

    hydro = calculate_lakes(
        elevation,
        float(config.ocean_level),
        method=str(config.method),
    )
    t2 = time.perf_counter()

    logger.info(
        "Terrain generated",
        seed=int(config.seed),
        size=int(config.size),
        noise_ms=round((t1 - t0) * 1000.0, 2),
        water_ms=round((t2 - t1) * 1000.0, 2),
    )
    return TerrainResult(
        config=config,
        elevation=elevation,
        water_level=hydro.water_level,
        depth=hydro.depth,
    )
