# app.py
"""
Financial Performance Dashboard - Main Application
==================================================

Two independent sections on one page:
- Index trackers (TMI-1x / 2x / 3x) against the S&P 500, from a bundled
  month-end table
- Trading account gains, from a published Google Sheet fetched once per
  browser session

Each section has its own Start/End selectors; the chart and the
percentage-change cards are recomputed from (series, range) on every rerun.

Run with:
    streamlit run project/app.py
"""
import sys
import os
import logging

from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
sys.path.append(str(ROOT_DIR))

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_logger = logging.getLogger(__name__)

import streamlit as st

from perf_engine.constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_CHART_COLORS,
    DEFAULT_FONT,
    Theme,
)
from ui.components import apply_theme
from ui.index_trackers import render_index_trackers
from ui.trading_performance import render_trading_performance

# ---------------------------------------------------------
# Streamlit setup
# ---------------------------------------------------------
st.set_page_config(page_title="Financial Performance Dashboard", layout="wide")


# ---------------------------------------------------------
# Theme state
# ---------------------------------------------------------
def initialize_theme_state():
    """Seed the color pickers once per session"""
    if "theme_background" not in st.session_state:
        st.session_state["theme_background"] = DEFAULT_BACKGROUND
    if "theme_font" not in st.session_state:
        st.session_state["theme_font"] = DEFAULT_FONT
    for i, color in enumerate(DEFAULT_CHART_COLORS):
        if f"theme_chart_{i}" not in st.session_state:
            st.session_state[f"theme_chart_{i}"] = color

initialize_theme_state()


def _reset_theme():
    st.session_state["theme_background"] = DEFAULT_BACKGROUND
    st.session_state["theme_font"] = DEFAULT_FONT
    for i, color in enumerate(DEFAULT_CHART_COLORS):
        st.session_state[f"theme_chart_{i}"] = color


# =================================================================
# SIDEBAR
# =================================================================
st.sidebar.markdown(
    """
    <div style="text-align:center;font-weight:900;font-size:30px;line-height:1.1;margin:0.2rem 0 0.9rem 0;">
        Performance Dashboard
    </div>
    """,
    unsafe_allow_html=True,
)

with st.sidebar.expander("Appearance", expanded=False):
    st.color_picker("Background", key="theme_background")
    st.color_picker("Font", key="theme_font")
    for i in range(len(DEFAULT_CHART_COLORS)):
        st.color_picker(f"Line {i + 1}", key=f"theme_chart_{i}")

    st.button("Reset colors", width="stretch", on_click=_reset_theme)

theme = Theme(
    background=st.session_state["theme_background"],
    font=st.session_state["theme_font"],
    chart_colors=[st.session_state[f"theme_chart_{i}"] for i in range(len(DEFAULT_CHART_COLORS))],
)
apply_theme(theme)
_logger.debug("Theme: %s", theme)


# =================================================================
# DASHBOARD
# =================================================================
st.markdown(
    '<h1 style="font-size:36px;font-weight:800;margin-bottom:4px;">Financial Performance Dashboard</h1>',
    unsafe_allow_html=True,
)

with st.container(border=True):
    render_index_trackers(theme)

with st.container(border=True):
    st.markdown('<h2 style="font-size:24px;font-weight:700;margin:0 0 8px 0;">Trading Performance</h2>',
                unsafe_allow_html=True)
    render_trading_performance(theme)


# =================================================================
# FOOTER
# =================================================================
st.sidebar.markdown("---")
st.sidebar.caption("Trading data: published Google Sheet, loaded once per session.")
