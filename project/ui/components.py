# ui/components.py
"""
Shared building blocks for both dashboard sections
==================================================
Cards, headers, the start/end selector pair and the line-chart builder.
"""

from __future__ import annotations

import html
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from perf_engine.constants import Theme
from perf_engine.performance import change_color, display_value

BORDER  = "#E2E8F0"
CARD_BG = "#F7FAFC"   # gray.50

COMPARISON = "comparison"
SINGLE     = "single"


# ── Theme ────────────────────────────────────────────────────────────────────

def apply_theme(theme: Theme) -> None:
    st.markdown(f"""
    <style>
    .stApp {{ background: {theme.background}; }}
    .stApp p, .stApp span, .stApp label, .stApp h1, .stApp h2, .stApp h3 {{ color: {theme.font}; }}
    html, body, [class*="css"] {{ font-family: 'Roboto', sans-serif; }}
    </style>""", unsafe_allow_html=True)


# ── Cards / headers ──────────────────────────────────────────────────────────

def metric_card(label: str, value: Optional[str]) -> str:
    """HTML card: metric title over its change, green when non-negative."""
    color = change_color(value)
    return f"""
<div style="background:{CARD_BG};border-radius:8px;padding:16px 18px;border:1px solid {BORDER};
     box-shadow:0 1px 2px rgba(0,0,0,0.05);text-align:center;margin-bottom:12px;">
  <div style="font-size:18px;font-weight:700;color:#1A202C;margin-bottom:8px;">{html.escape(label)}</div>
  <div style="font-size:22px;font-weight:500;color:{color};">{display_value(value)}</div>
</div>"""


def section_header(title: str, subtitle: str = "") -> None:
    sub = f'<p style="opacity:0.7;font-size:14px;margin:2px 0 0 0;">{subtitle}</p>' if subtitle else ""
    st.markdown(
        f'<div style="margin:28px 0 12px 0;"><h3 style="font-size:20px;font-weight:700;margin:0;">'
        f'{title}</h3>{sub}</div>', unsafe_allow_html=True)


def performance_cards(title: str, metrics: Sequence[str], performance: Dict[str, str],
                      labels: Optional[Dict[str, str]] = None, per_row: int = 3) -> None:
    """Grid of metric cards, ``per_row`` to a row."""
    labels = labels or {}
    section_header(title)
    for offset in range(0, len(metrics), per_row):
        cols = st.columns(per_row)
        for col, metric in zip(cols, metrics[offset:offset + per_row]):
            with col:
                st.markdown(metric_card(labels.get(metric, metric), performance.get(metric)),
                            unsafe_allow_html=True)


# ── Range selector ───────────────────────────────────────────────────────────

def date_range_selector(options: List[str], start_key: str, end_key: str,
                        defaults: Tuple[str, str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Start/End selectboxes backed by ``st.session_state[start_key]`` and
    ``st.session_state[end_key]``. Both lists show every option; nothing
    stops a start that falls after the end.
    """
    for key, fallback in ((start_key, defaults[0]), (end_key, defaults[1])):
        if st.session_state.get(key) not in options:
            st.session_state[key] = fallback if fallback in options else None

    c1, c2 = st.columns(2)
    with c1:
        start = st.selectbox("Start Date", options, key=start_key,
                             placeholder="Select start date")
    with c2:
        end = st.selectbox("End Date", options, key=end_key,
                           placeholder="Select end date")
    return start, end


# ── Charts ───────────────────────────────────────────────────────────────────

def build_line_chart(df: pd.DataFrame, x_key: str, metrics: Sequence[str], theme: Theme,
                     mode: str = COMPARISON, selected_metric: Optional[str] = None,
                     markers: bool = True, legend_top: bool = False,
                     tick_size: int = 8, height: int = 500) -> go.Figure:
    """
    One line per metric in comparison mode, or only ``selected_metric``
    otherwise. Columns absent from ``df`` are skipped; an empty frame
    gives an empty figure with the themed layout.
    """
    fig = go.Figure()

    if mode == COMPARISON:
        lines = list(enumerate(metrics))
    else:
        lines = [(0, selected_metric)] if selected_metric else []

    if df is not None and not df.empty:
        for color_index, metric in lines:
            if metric not in df.columns:
                continue
            fig.add_trace(go.Scatter(
                x=df[x_key].astype(str), y=pd.to_numeric(df[metric], errors="coerce"),
                name=metric, mode="lines+markers" if markers else "lines",
                line=dict(color=theme.color_for(color_index), width=2, shape="spline"),
                marker=dict(size=6),
                hovertemplate=f"<b>%{{x}}</b><br>{html.escape(metric)}: %{{y}}<extra></extra>",
            ))

    legend = dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0) if legend_top \
        else dict(orientation="h", yanchor="top", y=-0.15, xanchor="center", x=0.5)

    fig.update_layout(
        template="plotly_white", hovermode="x unified", height=height,
        plot_bgcolor=theme.background, paper_bgcolor=theme.background,
        font=dict(family="Roboto, sans-serif", size=12, color=theme.font),
        margin=dict(l=55, r=20, t=40, b=40),
        legend=legend,
        hoverlabel=dict(bgcolor=theme.background, font=dict(color=theme.font)),
        xaxis=dict(type="category", showgrid=True, griddash="dash",
                   tickfont=dict(size=tick_size, color=theme.font), linecolor=theme.font),
        yaxis=dict(showgrid=True, griddash="dash", zeroline=False,
                   tickfont=dict(color=theme.font), linecolor=theme.font),
    )
    return fig
