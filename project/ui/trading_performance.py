# ui/trading_performance.py
"""
Trading account performance
===========================
Published sheet (fetched once per session) -> date range filter ->
floored percentage change -> gain chart + summary cards.
"""

from __future__ import annotations

import streamlit as st

from perf_engine.constants import (
    DEFAULT_CHART_COLORS,
    TRADING_DATE_KEY,
    TRADING_METRIC_LABELS,
    TRADING_METRICS,
    Theme,
)
from perf_engine.performance import trading_performance
from perf_engine.series import filter_by_date, range_options
from perf_engine.trading_fetch import ERROR, READY, TradingFeed, load_trading_feed
from ui.components import build_line_chart, date_range_selector, performance_cards


def trading_chart_theme(theme: Theme) -> Theme:
    """The page background and font, with the three gain lines in fixed colors."""
    return Theme(background=theme.background, font=theme.font,
                 chart_colors=list(DEFAULT_CHART_COLORS[:len(TRADING_METRICS)]))


def _trading_feed() -> TradingFeed:
    """The session's feed, fetching it on first use. Never refetched."""
    feed = st.session_state.get("trading_feed")
    if feed is None or not feed.settled:
        st.session_state["trading_feed"] = TradingFeed.pending()
        with st.spinner("Loading Trading Performance Data..."):
            feed = load_trading_feed()
        st.session_state["trading_feed"] = feed
        if feed.status == READY:
            st.session_state["trading_start"] = feed.start
            st.session_state["trading_end"] = feed.end
    return feed


def render_trading_performance(theme: Theme) -> None:
    feed = _trading_feed()

    if feed.status == ERROR:
        st.error(f"Error: {feed.error}")
        return

    df = feed.data
    start, end = date_range_selector(
        range_options(df, TRADING_DATE_KEY), "trading_start", "trading_end",
        (feed.start, feed.end))

    filtered = filter_by_date(df, start, end)
    performance = trading_performance(filtered, TRADING_METRICS)

    if filtered.empty:
        st.info("No trading days fall inside the selected range.")

    fig = build_line_chart(filtered, TRADING_DATE_KEY, TRADING_METRICS, trading_chart_theme(theme),
                           markers=False, legend_top=True, tick_size=12)
    st.plotly_chart(fig, width="stretch")

    performance_cards("Performance Metrics over Selected Range", TRADING_METRICS, performance,
                      labels=TRADING_METRIC_LABELS)
