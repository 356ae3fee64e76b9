from __future__ import annotations

import numpy as np
import structlog

from .noise_2d import Noise2D, Perlin2D
from .simplex_2d import Simplex2D
from .value_noise_2d import ValueNoise2D

logger = structlog.get_logger()

BASES = {
    "simplex": Simplex2D,
    "perlin": Perlin2D,
    "value": ValueNoise2D,
}


def make_basis(basis: str, seed: int) -> Noise2D:
    basis = str(basis)
    if basis not in BASES:
        raise ValueError(f"unknown basis: {basis}")
    return BASES[basis](seed=int(seed))


class NoiseField:
    """Fractal (octave-summed) elevation field over a square grid.

    Octave ``o`` samples the basis at ``(x, y) / size * frequency * 2**o``,
    remaps it from [-1, 1] to [0, 1] and weights it by
    ``amplitude * persistence**o``. The sum is divided by the largest
    achievable sum and scaled back to ``[0, amplitude]``, so changing the
    octave count never changes the output range.

    Instances are callables ``Position -> float`` and can be passed straight
    to ``Grid.with_generator``; ``to_array`` evaluates the whole grid at once.
    """

    def __init__(
        self,
        *,
        seed: int,
        size: int,
        frequency: float,
        amplitude: float,
        octaves: int,
        persistence: float,
        basis: str = "simplex",
    ):
        self.size = int(size)
        if self.size <= 0:
            raise ValueError("size must be > 0")
        self.octaves = int(octaves)
        if self.octaves < 0:
            raise ValueError("octaves must be >= 0")

        self.seed = int(seed)
        self.frequency = float(frequency)
        self.amplitude = float(amplitude)
        self.persistence = float(persistence)
        self.basis = str(basis)
        self.noise = make_basis(self.basis, self.seed)
        self.scaler = 1.0 / float(self.size)

        max_amplitude = 0.0
        amp = self.amplitude
        for _ in range(self.octaves):
            max_amplitude += amp
            amp *= self.persistence
        self.max_amplitude = max_amplitude

    def _octaves(self, sample, x, y) -> np.ndarray:
        total = None
        amp = self.amplitude
        freq = self.frequency

        for _ in range(self.octaves):
            n = np.asarray(sample(x * freq, y * freq), dtype=np.float64)
            layer = np.clip(n * 0.5 + 0.5, 0.0, 1.0) * amp
            total = layer if total is None else total + layer
            freq *= 2.0
            amp *= self.persistence

        if total is None or self.max_amplitude == 0.0:
            return np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
        return np.clip(total / self.max_amplitude, 0.0, 1.0) * self.amplitude

    def sample(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        """Elevation at arbitrary (possibly fractional) grid coordinates."""
        x = np.asarray(x, dtype=np.float64) * self.scaler
        y = np.asarray(y, dtype=np.float64) * self.scaler
        return self._octaves(self.noise.noise, x, y)

    def __call__(self, pos) -> float:
        return float(self.sample(np.array(pos.x), np.array(pos.y)))

    def to_array(self) -> np.ndarray:
        """Evaluate every cell; shape (size, size), row-major."""
        coords = np.arange(self.size, dtype=np.float64) * self.scaler
        z = self._octaves(self.noise.noise_grid, coords, coords)
        z = np.broadcast_to(z, (self.size, self.size)).copy()
        logger.debug(
            "Noise field sampled",
            basis=self.basis,
            size=self.size,
            octaves=self.octaves,
        )
        return z
