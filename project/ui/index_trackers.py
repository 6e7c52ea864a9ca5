# ui/index_trackers.py
"""
Index trackers vs. S&P 500
==========================
Bundled month-end table -> month range filter -> unguarded percentage
change -> comparison chart + summary cards.
"""

from __future__ import annotations

import pandas as pd
import streamlit as st

from perf_engine.constants import INDEX_TRACKER_METRICS, MONTH_KEY, Theme
from perf_engine.performance import index_tracker_performance
from perf_engine.series import filter_by_month, range_options
from perf_engine.tracker_data import DEFAULT_INDEX_RANGE, load_index_trackers
from ui.components import (
    COMPARISON,
    SINGLE,
    build_line_chart,
    date_range_selector,
    performance_cards,
)

_CHART_MODES = {COMPARISON: "Compare all", SINGLE: "Single metric"}


@st.cache_data(show_spinner=False)
def _index_table() -> pd.DataFrame:
    return load_index_trackers()


def render_index_trackers(theme: Theme) -> None:
    df = _index_table()

    start, end = date_range_selector(
        range_options(df, MONTH_KEY), "index_start", "index_end", DEFAULT_INDEX_RANGE)

    filtered = filter_by_month(df, start, end)
    performance = index_tracker_performance(filtered, INDEX_TRACKER_METRICS)

    c1, c2 = st.columns([0.6, 0.4])
    with c1:
        mode = st.radio("Chart:", options=list(_CHART_MODES), format_func=_CHART_MODES.get,
                        horizontal=True, key="index_chart_mode", label_visibility="collapsed")
    selected = INDEX_TRACKER_METRICS[0]
    if mode == SINGLE:
        with c2:
            selected = st.selectbox("Metric", INDEX_TRACKER_METRICS, key="index_selected_metric",
                                    label_visibility="collapsed")

    if filtered.empty:
        st.info("No months fall inside the selected range.")

    fig = build_line_chart(filtered, MONTH_KEY, INDEX_TRACKER_METRICS, theme,
                           mode=mode, selected_metric=selected)
    st.plotly_chart(fig, width="stretch")

    performance_cards("Performance over Selected Range", INDEX_TRACKER_METRICS, performance)
