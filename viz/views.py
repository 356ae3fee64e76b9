from __future__ import annotations

import numpy as np

VIEWS = {
    "elevation": "Elevation",
    "water": "Water",
    "composite": "Composite",
}

WATER_GAIN = 4.0


def _to_u8(a: np.ndarray) -> np.ndarray:
    # Saturating float -> uint8 cast; NaN becomes 0.
    a = np.nan_to_num(np.asarray(a, dtype=np.float64), nan=0.0)
    return np.clip(a, 0.0, 255.0).astype(np.uint8)


def elevation_rgb(elevation: np.ndarray) -> np.ndarray:
    gray = _to_u8(elevation)
    return np.stack([gray, gray, gray], axis=-1)


def water_rgb(depth: np.ndarray) -> np.ndarray:
    """White for dry cells, saturating to blue as water deepens."""
    v = _to_u8(np.minimum(np.asarray(depth, dtype=np.float64) * WATER_GAIN, 255.0))
    iv = np.uint8(255) - v
    blue = np.full_like(iv, 255)
    return np.stack([iv, iv, blue], axis=-1)


def composite_rgb(elevation: np.ndarray, depth: np.ndarray) -> np.ndarray:
    gray = _to_u8(elevation)
    blue = _to_u8(np.asarray(depth, dtype=np.float64) * WATER_GAIN)
    b = np.minimum(gray.astype(np.uint16) + blue.astype(np.uint16), 255).astype(np.uint8)
    return np.stack([gray, gray, b], axis=-1)


def render_view(result, view: str = "composite") -> np.ndarray:
    """Return a (size, size, 3) uint8 image of a generated terrain."""

    view = str(view)
    if view not in VIEWS:
        raise ValueError(f"unknown view: {view}")

    size = result.config.size
    assert result.elevation.size == size
    assert result.depth.size == size

    if view == "elevation":
        rgb = elevation_rgb(result.elevation.as_array())
    elif view == "water":
        rgb = water_rgb(result.depth.as_array())
    else:
        rgb = composite_rgb(result.elevation.as_array(), result.depth.as_array())

    assert rgb.shape == (size, size, 3)
    return rgb
