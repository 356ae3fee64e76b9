from __future__ import annotations

import json
import os
from pathlib import Path

import numpy as np
import streamlit as st
import structlog

from basins.config import (
    DEFAULT_SETTINGS_PATH,
    MAX_OCTAVES,
    MAX_SIZE,
    MIN_SIZE,
    SIMPLEX_HINT_SIZE,
    SettingsError,
    TerrainConfig,
    large_map_hint,
    load_settings,
    save_settings,
)
from basins.fill import FILL_METHODS
from basins.log import configure_logging
from basins.pipeline import TerrainResult, generate
from noisefield.fractal import BASES
from ui.styles import inject_global_styles
from viz.export import array_to_npy_bytes, heightmap_png_bytes, rgb_to_png_bytes
from viz.views import VIEWS, render_view

st.set_page_config(
    page_title="Lake Basins",
    page_icon="~",
    layout="wide",
)

inject_global_styles()

logger = structlog.get_logger()

_METHODS = {
    "fifo": "Relaxation (FIFO queue)",
    "priority": "Priority flood",
}
_BASES = {
    "simplex": "OpenSimplex",
    "perlin": "Perlin (improved)",
    "value": "Value noise",
}


def _settings_path() -> Path:
    return Path(os.environ.get("BASINS_SETTINGS", str(DEFAULT_SETTINGS_PATH)))


@st.cache_resource
def _init_logging() -> bool:
    configure_logging(os.environ.get("BASINS_LOG_LEVEL", "INFO"))
    return True


@st.cache_data(show_spinner=False, max_entries=8)
def _generate(params: tuple[tuple[str, object], ...]) -> TerrainResult:
    # Streamlit runs one script execution per session at a time, so a
    # Generate click never interleaves with a previous run.
    return generate(TerrainConfig.from_dict(dict(params)))


def _freeze(config: TerrainConfig) -> tuple[tuple[str, object], ...]:
    return tuple(sorted(config.to_dict().items()))


def _initial_config() -> TerrainConfig:
    try:
        return load_settings(_settings_path()).validate()
    except (SettingsError, ValueError) as exc:
        st.warning(f"Ignoring saved settings: {exc}")
        return TerrainConfig()


_init_logging()

if "config" not in st.session_state:
    st.session_state["config"] = _initial_config()
if "view" not in st.session_state:
    st.session_state["view"] = "composite"

applied: TerrainConfig = st.session_state["config"]

with st.sidebar:
    with st.form("settings_form", border=False):
        st.header("Settings")
        seed = st.number_input("Seed", value=int(applied.seed), step=1)
        size = st.number_input(
            "Size",
            min_value=MIN_SIZE,
            max_value=MAX_SIZE,
            value=int(np.clip(applied.size, MIN_SIZE, MAX_SIZE)),
            step=16,
            help=(
                "Side length in cells. With the simplex basis, sizes above "
                f"{SIMPLEX_HINT_SIZE} take a while; pick perlin for large maps."
            ),
        )

        st.divider()
        st.subheader("Elevation")
        basis = st.selectbox(
            "Noise basis",
            list(BASES.keys()),
            index=list(BASES.keys()).index(applied.basis),
            format_func=lambda k: _BASES.get(str(k), str(k)),
        )
        frequency = st.number_input(
            "Frequency", value=float(applied.frequency), step=1.0
        )
        amplitude = st.slider(
            "Amplitude",
            min_value=0.0,
            max_value=256.0,
            value=float(np.clip(applied.amplitude, 0.0, 256.0)),
        )
        octaves = st.slider(
            "Octaves",
            min_value=0,
            max_value=MAX_OCTAVES,
            value=int(np.clip(applied.octaves, 0, MAX_OCTAVES)),
        )
        persistence = st.slider(
            "Persistence",
            min_value=0.0,
            max_value=1.0,
            value=float(np.clip(applied.persistence, 0.0, 1.0)),
            step=0.05,
        )

        st.divider()
        st.subheader("Water")
        ocean_level = st.number_input(
            "Ocean level", value=float(applied.ocean_level), step=1.0
        )
        method = st.selectbox(
            "Fill method",
            list(FILL_METHODS.keys()),
            index=list(FILL_METHODS.keys()).index(applied.method),
            format_func=lambda k: _METHODS.get(str(k), str(k)),
        )

        submitted = st.form_submit_button("Generate", use_container_width=True)

    if submitted:
        candidate = TerrainConfig(
            seed=int(seed),
            size=int(size),
            frequency=float(frequency),
            amplitude=float(amplitude),
            octaves=int(octaves),
            persistence=float(persistence),
            ocean_level=float(ocean_level),
            basis=str(basis),
            method=str(method),
        )
        try:
            st.session_state["config"] = candidate.validate()
            save_settings(candidate, _settings_path())
            logger.info("Generate requested", **candidate.to_dict())
        except (ValueError, OSError) as exc:
            st.error(str(exc))
        applied = st.session_state["config"]

    st.caption(f"Settings file: `{_settings_path()}`")

st.title("Lake Basins")

hint = large_map_hint(applied)
if hint:
    st.info(hint)

view = st.radio(
    "View",
    list(VIEWS.keys()),
    index=list(VIEWS.keys()).index(st.session_state["view"]),
    format_func=lambda k: VIEWS[str(k)],
    horizontal=True,
)
st.session_state["view"] = str(view)

with st.spinner("Generating terrain..."):
    result = _generate(_freeze(applied))

rgb = render_view(result, str(view))
png = rgb_to_png_bytes(rgb)

left, right = st.columns([3, 1])
with left:
    st.image(png, width=512, caption=f"{VIEWS[str(view)]} ({result.size}x{result.size})")

with right:
    depth = result.depth.as_array()
    elevation = result.elevation.as_array()
    st.metric("Flooded cells", f"{int(np.count_nonzero(depth)):,}")
    st.metric("Max depth", f"{float(np.max(depth)):.2f}")
    st.metric(
        "Elevation range",
        f"{float(np.min(elevation)):.1f} .. {float(np.max(elevation)):.1f}",
    )

    base_name = f"basins_{applied.seed}_{applied.size}"
    st.download_button(
        "Download PNG",
        data=png,
        file_name=f"{base_name}_{view}.png",
        mime="image/png",
    )
    st.download_button(
        "Download heightmap PNG",
        data=heightmap_png_bytes(elevation, lo=0.0, hi=applied.amplitude),
        file_name=f"{base_name}_heightmap.png",
        mime="image/png",
    )
    st.download_button(
        "Download elevation .npy",
        data=array_to_npy_bytes(elevation),
        file_name=f"{base_name}_elevation.npy",
        mime="application/octet-stream",
    )
    st.download_button(
        "Download depth .npy",
        data=array_to_npy_bytes(depth),
        file_name=f"{base_name}_depth.npy",
        mime="application/octet-stream",
    )
    st.download_button(
        "Download settings.json",
        data=json.dumps(applied.to_dict(), indent=2, sort_keys=True),
        file_name=f"{base_name}.settings.json",
        mime="application/json",
    )
