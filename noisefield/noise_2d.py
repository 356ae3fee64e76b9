from __future__ import annotations

from typing import Protocol

import numpy as np

from .core import fade, grad2_from_hash, lattice, lerp, make_permutation


class Noise2D(Protocol):
    """Coherent 2D noise with native output in [-1, 1]."""

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:  # pragma: no cover
        ...

    def noise_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:  # pragma: no cover
        ...


class Perlin2D:
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

        xf = x - np.floor(x)
        yf = y - np.floor(y)
        u = fade(xf)
        v = fade(yf)

        p = self.perm
        aa = p[p[xi0] + yi0]
        ab = p[p[xi0] + yi1]
        ba = p[p[xi1] + yi0]
        bb = p[p[xi1] + yi1]

        gxaa, gyaa = grad2_from_hash(aa)
        gxab, gyab = grad2_from_hash(ab)
        gxba, gyba = grad2_from_hash(ba)
        gxbb, gybb = grad2_from_hash(bb)

        x1 = xf - 1.0
        y1 = yf - 1.0

        d00 = gxaa * xf + gyaa * yf
        d01 = gxab * xf + gyab * y1
        d10 = gxba * x1 + gyba * yf
        d11 = gxbb * x1 + gybb * y1

        x_lerp0 = lerp(d00, d10, u)
        x_lerp1 = lerp(d01, d11, u)
        return lerp(x_lerp0, x_lerp1, v)

    def noise_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        return lattice(self, xs, ys)
