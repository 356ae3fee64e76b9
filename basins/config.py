"""Generation parameters and their on-disk settings file."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import structlog

from noisefield.fractal import BASES

from basins.fill import FILL_METHODS

logger = structlog.get_logger()

MIN_SIZE = 16
MAX_SIZE = 2048
MAX_OCTAVES = 16

# OpenSimplex samples point by point; above this side length Generate gets slow
SIMPLEX_HINT_SIZE = 512

DEFAULT_SETTINGS_PATH = Path.home() / ".basins" / "settings.json"


class SettingsError(ValueError):
    """Raised when a settings file cannot be read back into a config."""


@dataclass(frozen=True)
class TerrainConfig:
    """Everything one Generate run depends on.

    Computed grids are never part of the config; they are rebuilt from it.
    """

    seed: int = 12345
    size: int = 128
    frequency: float = 16.0
    amplitude: float = 256.0
    octaves: int = 6
    persistence: float = 0.8
    ocean_level: float = 32.0
    basis: str = "simplex"
    method: str = "fifo"

    def validate(self) -> TerrainConfig:
        if int(self.size) <= 0:
            raise ValueError("size must be > 0")
        if int(self.octaves) < 0:
            raise ValueError("octaves must be >= 0")
        if str(self.basis) not in BASES:
            raise ValueError(f"unknown basis: {self.basis}")
        if str(self.method) not in FILL_METHODS:
            raise ValueError(f"unknown fill method: {self.method}")
        return self

    def replace(self, **changes: Any) -> TerrainConfig:
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> TerrainConfig:
        """Build a config from a mapping; unknown keys are ignored and
        missing keys keep their defaults."""

        defaults = cls()
        kwargs: dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            if f.name not in payload:
                continue
            kind = type(getattr(defaults, f.name))
            try:
                kwargs[f.name] = kind(payload[f.name])
            except (TypeError, ValueError) as exc:
                raise SettingsError(f"invalid value for {f.name}: {payload[f.name]!r}") from exc
        return cls(**kwargs)


def large_map_hint(config: TerrainConfig) -> str | None:
    """Advice for configs that will take long to generate, or None."""
    if config.basis == "simplex" and int(config.size) > SIMPLEX_HINT_SIZE:
        return (
            "OpenSimplex noise is sampled cell by cell and gets slow above "
            f"{SIMPLEX_HINT_SIZE}x{SIMPLEX_HINT_SIZE}. The perlin basis is "
            "vectorized and much faster for large maps."
        )
    return None


def load_settings(path: str | Path) -> TerrainConfig:
    """Read a settings file, falling back to defaults when it does not exist."""

    path = Path(path)
    if not path.exists():
        logger.debug("No settings file, using defaults", path=str(path))
        return TerrainConfig()

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SettingsError(f"settings file is not valid JSON: {path}") from exc
    if not isinstance(payload, dict):
        raise SettingsError(f"settings file must hold a JSON object: {path}")

    config = TerrainConfig.from_dict(payload)
    logger.info("Settings loaded", path=str(path))
    return config


def save_settings(config: TerrainConfig, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(config.to_dict(), indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    logger.info("Settings saved", path=str(path))
