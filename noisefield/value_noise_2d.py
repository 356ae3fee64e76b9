from __future__ import annotations

import numpy as np

from .core import fade, lattice, lerp, make_permutation


class ValueNoise2D:
    """2D value noise (lattice values + smooth interpolation)."""

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        xi0 = np.floor(x).astype(np.int64) & 255
        yi0 = np.floor(y).astype(np.int64) & 255
        xi1 = (xi0 + 1) & 255
        yi1 = (yi0 + 1) & 255

        u = fade(x - np.floor(x))
        v = fade(y - np.floor(y))

        p = self.perm
        corners = [
            p[p[xi0] + yi0],
            p[p[xi0] + yi1],
            p[p[xi1] + yi0],
            p[p[xi1] + yi1],
        ]
        # Map hashed values into [-1, 1].
        vaa, vab, vba, vbb = ((c.astype(np.float64) / 255.0) * 2.0 - 1.0 for c in corners)

        x_lerp0 = lerp(vaa, vba, u)
        x_lerp1 = lerp(vab, vbb, u)
        return lerp(x_lerp0, x_lerp1, v)

    def noise_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        return lattice(self, xs, ys)
