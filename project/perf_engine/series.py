# series.py
# ------------------------------------------------------------------
# Range selection over time-keyed DataFrames.
#
# A series is a DataFrame whose row order is the time order and whose
# time key is a string column ("Month" for the index-tracker table,
# "open" for the trading sheet). Every function here is pure: inputs
# are never mutated and results are re-indexed from 0.
#
#   filter_by_month()        inclusive [start, end] on raw string labels
#   filter_by_date()         inclusive [start, end] on parsed calendar dates
#   normalize_trading_rows() trim + drop blank keys + sort by date
#   range_options()          selector values, in series order
#   default_range()          (first key, last key)
# ------------------------------------------------------------------

import logging
from typing import List, Optional, Tuple

import pandas as pd

from perf_engine.constants import MONTH_KEY, TRADING_DATE_KEY

_logger = logging.getLogger(__name__)


# ---------------------------------------------------------
# Date parsing helpers
# ---------------------------------------------------------
def _parse_dates(values: pd.Series) -> pd.Series:
    """
    Parse a column of date labels onto the UTC timeline.

    Labels without an offset are read as UTC, so naive and offset dates
    can sit in one column. Anything unparsable becomes NaT.
    """
    return pd.to_datetime(values.astype(str), errors="coerce", format="mixed", utc=True)


def _parse_date(value) -> Optional[pd.Timestamp]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    ts = pd.to_datetime(text, errors="coerce", utc=True)
    if pd.isna(ts):
        return None
    return ts


def _empty(df: Optional[pd.DataFrame]) -> pd.DataFrame:
    if df is None:
        return pd.DataFrame()
    return df.iloc[0:0].reset_index(drop=True)


# ---------------------------------------------------------
# Range filters
# ---------------------------------------------------------
def filter_by_month(df: pd.DataFrame, start: str, end: str,
                    key: str = MONTH_KEY) -> pd.DataFrame:
    """
    Rows whose month label lies in [start, end].

    Labels are compared as plain strings; ISO month-end labels
    ("2023-03-31") already sort chronologically that way. A start
    after end simply matches nothing.
    """
    if df is None or df.empty or start is None or end is None:
        return _empty(df)
    labels = df[key].astype(str)
    mask = (labels >= str(start)) & (labels <= str(end))
    return df.loc[mask.values].reset_index(drop=True)


def filter_by_date(df: pd.DataFrame, start: str, end: str,
                   key: str = TRADING_DATE_KEY) -> pd.DataFrame:
    """
    Rows whose date label lies in [start, end] by calendar order.

    A bound or a row label that cannot be read as a date never satisfies
    the interval test, so a blank bound yields an empty frame.
    """
    if df is None or df.empty:
        return _empty(df)
    lo = _parse_date(start)
    hi = _parse_date(end)
    if lo is None or hi is None:
        return _empty(df)
    dates = _parse_dates(df[key])
    # NaT compares False on both sides
    mask = (dates >= lo) & (dates <= hi)
    return df.loc[mask.values].reset_index(drop=True)


# ---------------------------------------------------------
# Normalization (trading sheet only)
# ---------------------------------------------------------
def normalize_trading_rows(df: pd.DataFrame, key: str = TRADING_DATE_KEY) -> pd.DataFrame:
    """
    Trim the date key, drop rows whose key is blank, sort ascending by date.

    The published sheet is not guaranteed to be in date order. Rows whose
    key is not a readable date are kept but sorted after every dated row.
    Order among equal dates is unspecified.
    """
    if df is None or df.empty:
        return _empty(df)

    out = df.copy()
    out[key] = out[key].where(out[key].notna(), "").astype(str).str.strip()
    out = out[out[key] != ""]

    dropped = len(df) - len(out)
    if dropped:
        _logger.debug("Dropped %d row(s) with an empty '%s' field", dropped, key)

    out = out.sort_values(key, key=_parse_dates, kind="mergesort", na_position="last")
    return out.reset_index(drop=True)


# ---------------------------------------------------------
# Selector helpers
# ---------------------------------------------------------
def range_options(df: pd.DataFrame, key: str) -> List[str]:
    """Every time key in series order. Duplicates are not removed."""
    if df is None or df.empty or key not in df.columns:
        return []
    return [str(v) for v in df[key].tolist()]


def default_range(df: pd.DataFrame, key: str) -> Tuple[str, str]:
    """(first key, last key) of the series, or ("", "") when it is empty."""
    if df is None or df.empty or key not in df.columns:
        return "", ""
    return str(df[key].iloc[0]), str(df[key].iloc[-1])
