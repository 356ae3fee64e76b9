from __future__ import annotations

import streamlit as st

APP_CSS = r"""
@import url('https://fonts.googleapis.com/css2?family=IBM+Plex+Sans:wght@400;500;600&family=Space+Grotesk:wght@500;600;700&display=swap');

html, body, [class*="st-"] {
  font-family: "IBM Plex Sans", ui-sans-serif, system-ui, -apple-system,
    BlinkMacSystemFont, "Segoe UI", sans-serif;
}

h1, h2, h3, h4 {
  font-family: "Space Grotesk", ui-sans-serif, system-ui, sans-serif;
  letter-spacing: -0.02em;
}

/* Water-tinted page background */
[data-testid="stAppViewContainer"] {
  background:
    radial-gradient(
      1100px 760px at 15% 5%,
      rgba(37, 99, 235, 0.10),
      rgba(0,0,0,0) 60%
    ),
    linear-gradient(180deg, rgba(255,255,255,0.35), rgba(0,0,0,0) 45%);
}

[data-testid="stSidebar"] {
  border-right: 1px solid rgba(17, 24, 39, 0.08);
}

[data-testid="stSidebar"] [data-testid="stVerticalBlock"] {
  gap: 0.6rem;
}

/* Keep map pixels crisp when the image is upscaled */
[data-testid="stImage"] img {
  image-rendering: pixelated;
}
"""


def inject_global_styles() -> None:
    st.markdown(f"<style>{APP_CSS}</style>", unsafe_allow_html=True)
