# performance.py
# ------------------------------------------------------------------
# Percentage change between the first and last row of a series.
#
# Two division policies are kept side by side and must not be merged:
#
#   unguarded_change  (index trackers)
#       (end - start) / start * 100, IEEE semantics. A zero start
#       prints "Infinity", "-Infinity" or "NaN".
#
#   floored_change    (trading account)
#       |start| < MIN_START_VALUE is replaced by +MIN_START_VALUE, and
#       any start that is still not strictly positive gives "N/A".
#
# Results are strings with two decimals, e.g. "20.00" or "-3.15".
# ------------------------------------------------------------------

import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Callable, Dict, List, Optional

import numpy as np
import pandas as pd

from perf_engine.constants import (
    MIN_START_VALUE,
    NOT_AVAILABLE,
    NUMERIC_TEXT,
    UP,
    DOWN,
    INDEX_TRACKER_METRICS,
    TRADING_METRICS,
)

ChangeStrategy = Callable[[float, float], str]

_TWO_PLACES = Decimal("0.01")

# Enough digits to quantize any finite double to two places
_WIDE = Context(prec=400)


# ---------------------------------------------------------
# Formatting
# ---------------------------------------------------------
def format_fixed(value: float) -> str:
    """
    Two-decimal string for a change value.

    Ties round away from zero on the exact binary value, so 0.125 gives
    "0.13" and -0.125 gives "-0.13". Non-finite values print as
    "Infinity", "-Infinity" and "NaN"; magnitudes of 1e21 and up use
    exponent notation ("1e+21").
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if abs(value) >= 1e21:
        return repr(value)
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    return str(Decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP, context=_WIDE))


def _to_number(value) -> Optional[float]:
    """Numeric cell value, or None when the cell is empty or not a number."""
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        v = float(value)
        return None if math.isnan(v) else v
    if isinstance(value, str) and NUMERIC_TEXT.match(value):
        return float(value)
    return None


# ---------------------------------------------------------
# Change strategies
# ---------------------------------------------------------
def unguarded_change(start: float, end: float) -> str:
    """Plain percentage change. No protection against a zero start."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        change = (np.float64(end) - np.float64(start)) / np.float64(start) * 100
    return format_fixed(change)


def floored_change(start: float, end: float) -> str:
    """Percentage change with near-zero starts lifted to +MIN_START_VALUE."""
    if abs(start) < MIN_START_VALUE:
        start = MIN_START_VALUE
    if not start > 0:
        return NOT_AVAILABLE
    change = ((end - start) / start) * 100
    return format_fixed(change)


STRATEGIES: Dict[str, ChangeStrategy] = {
    "unguarded": unguarded_change,
    "floored": floored_change,
}


# ---------------------------------------------------------
# Aggregation
# ---------------------------------------------------------
def calculate_performance(df: pd.DataFrame, metrics: List[str],
                          strategy: ChangeStrategy = unguarded_change) -> Dict[str, str]:
    """
    Per-metric change from the first row of ``df`` to its last row.

    Interior rows are ignored. An empty frame maps every metric to "N/A";
    a metric that is missing at either end maps to "N/A" on its own.
    """
    if df is None or df.empty:
        return {metric: NOT_AVAILABLE for metric in metrics}

    first = df.iloc[0]
    last = df.iloc[-1]

    performance: Dict[str, str] = {}
    for metric in metrics:
        start = _to_number(first.get(metric))
        end = _to_number(last.get(metric))
        if start is None or end is None:
            performance[metric] = NOT_AVAILABLE
        else:
            performance[metric] = strategy(start, end)
    return performance


def index_tracker_performance(df: pd.DataFrame,
                              metrics: List[str] = INDEX_TRACKER_METRICS) -> Dict[str, str]:
    return calculate_performance(df, metrics, unguarded_change)


def trading_performance(df: pd.DataFrame,
                        metrics: List[str] = TRADING_METRICS) -> Dict[str, str]:
    return calculate_performance(df, metrics, floored_change)


# ---------------------------------------------------------
# Display helpers
# ---------------------------------------------------------
def change_color(value: Optional[str]) -> str:
    """Green for a non-negative change (Infinity included), red otherwise."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DOWN
    return UP if number >= 0 else DOWN


def display_value(value: Optional[str]) -> str:
    if not value or value == NOT_AVAILABLE:
        return NOT_AVAILABLE
    return f"{value}%"
