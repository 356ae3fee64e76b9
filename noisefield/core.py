from __future__ import annotations

import numpy as np

_SEED_MASK = (1 << 64) - 1


def fade(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve used by Improved Perlin Noise (2002)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def make_permutation(seed: int) -> np.ndarray:
    """Return the doubled 512-entry permutation table for ``seed``.

    Negative seeds are folded into the unsigned 64-bit range so every integer
    selects a stream.
    """

    rng = np.random.default_rng(int(seed) & _SEED_MASK)
    p = rng.permutation(256).astype(np.int32)
    return np.concatenate([p, p])


def lattice(noise, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Sample an elementwise ``noise(x, y)`` on the grid spanned by xs and ys.

    Result has shape (len(ys), len(xs)), row-major like the terrain grids.
    """

    xg, yg = np.meshgrid(
        np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)
    )
    return noise.noise(xg, yg)


_GRAD2_DIAG8 = np.array(
    [
        [1.0, 0.0],
        [-1.0, 0.0],
        [0.0, 1.0],
        [0.0, -1.0],
        [1.0, 1.0],
        [-1.0, 1.0],
        [1.0, -1.0],
        [-1.0, -1.0],
    ],
    dtype=np.float64,
)
_GRAD2_DIAG8 /= np.linalg.norm(_GRAD2_DIAG8, axis=1, keepdims=True)


def grad2_from_hash(h: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    idx = (h % _GRAD2_DIAG8.shape[0]).astype(np.int32)
    g = _GRAD2_DIAG8[idx]
    return g[..., 0], g[..., 1]
