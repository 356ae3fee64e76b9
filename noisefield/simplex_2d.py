from __future__ import annotations

import numpy as np
from opensimplex import OpenSimplex


class Simplex2D:
    """OpenSimplex 2D noise behind the same interface as Perlin2D."""

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self._gen = OpenSimplex(seed=self.seed)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x, y = np.broadcast_arrays(
            np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)
        )
        out = np.empty(x.shape, dtype=np.float64)
        for idx in np.ndindex(x.shape):
            out[idx] = self._gen.noise2(float(x[idx]), float(y[idx]))
        return out

    def noise_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        xs = np.asarray(xs, dtype=np.float64).reshape(-1)
        ys = np.asarray(ys, dtype=np.float64).reshape(-1)
        return np.asarray(self._gen.noise2array(xs, ys), dtype=np.float64)
