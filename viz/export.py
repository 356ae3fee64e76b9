from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image


def heightmap_png_bytes(
    z: np.ndarray,
    *,
    lo: Optional[float] = None,
    hi: Optional[float] = None,
) -> bytes:
    """Encode a height field as an 8-bit grayscale PNG.

    ``lo`` maps to black and ``hi`` to white; either bound defaults to the
    field's own minimum or maximum. Values outside the range saturate, and an
    empty range (a flat field) comes out black.
    """

    z = np.asarray(z, dtype=np.float64)
    if z.ndim != 2:
        raise ValueError("expected a 2D array")

    lo = float(np.min(z)) if lo is None else float(lo)
    hi = float(np.max(z)) if hi is None else float(hi)
    if hi <= lo:
        gray = np.zeros(z.shape, dtype=np.uint8)
    else:
        scaled = (z - lo) / (hi - lo) * 255.0
        gray = np.clip(np.nan_to_num(scaled), 0.0, 255.0).astype(np.uint8)

    out = io.BytesIO()
    Image.fromarray(gray).save(out, format="PNG")
    return out.getvalue()


def rgb_to_png_bytes(rgb: np.ndarray) -> bytes:
    rgb = np.asarray(rgb)
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError("expected an (H, W, 3) array")
    if rgb.dtype != np.uint8:
        raise ValueError("expected uint8 RGB values")

    out = io.BytesIO()
    Image.fromarray(rgb).save(out, format="PNG")
    return out.getvalue()


def array_to_npy_bytes(z: np.ndarray) -> bytes:
    z = np.asarray(z)
    out = io.BytesIO()
    np.save(out, z, allow_pickle=False)
    return out.getvalue()


def write_bytes(path: str | Path, data: bytes) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path
