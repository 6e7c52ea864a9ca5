# trading_fetch.py
# ------------------------------------------------------------------
# One-shot loader for the published trading-account sheet.
#
#   fetch_trading_csv()   single GET with an explicit timeout, no retry
#   parse_trading_csv()   header row + per-cell number inference
#   load_trading_feed()   fetch -> parse -> normalize, settled state
#
# The sheet is read exactly once per browser session. A failure leaves
# the feed in its error state until the page is reloaded.
# ------------------------------------------------------------------

import logging
from dataclasses import dataclass, field
from io import StringIO
from typing import Callable, Optional

import numpy as np
import pandas as pd
import requests

from perf_engine.constants import (
    FETCH_TIMEOUT,
    NUMERIC_TEXT,
    TRADING_CSV_URL,
    TRADING_DATE_KEY,
)
from perf_engine.series import default_range, normalize_trading_rows

_logger = logging.getLogger(__name__)

LOADING = "loading"
READY = "ready"
ERROR = "error"


class TradingDataError(Exception):
    """Raised when the trading sheet cannot be turned into a series."""


class TradingFetchError(TradingDataError):
    """Raised when the trading sheet request itself fails."""
    def __init__(self, url: str, status_code: Optional[int], message: str):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Trading data fetch failed [{status_code}] {url}: {message}")


# ---------------------------------------------------------
# Transport
# ---------------------------------------------------------
def fetch_trading_csv(url: Optional[str] = None) -> str:
    """
    Download the trading sheet as CSV text.

    Raises:
        TradingFetchError: On a non-200 response or any transport error.
    """
    url = url or TRADING_CSV_URL
    _logger.info("Fetching trading data from %s", url)
    try:
        resp = requests.get(url, timeout=FETCH_TIMEOUT)
    except requests.RequestException as exc:
        raise TradingFetchError(url, None, str(exc)) from exc

    if resp.status_code != 200:
        raise TradingFetchError(url, resp.status_code, resp.reason)
    return resp.text


# ---------------------------------------------------------
# Parsing
# ---------------------------------------------------------
def _infer_cell(value):
    """Numbers for numeric-looking text, NaN for blanks, text otherwise."""
    if not isinstance(value, str) or value == "":
        return np.nan
    if NUMERIC_TEXT.match(value):
        return float(value)
    return value


def parse_trading_csv(text: str) -> pd.DataFrame:
    """
    Parse CSV text with a header row into one row per record.

    Each cell is typed on its own: numeric-looking cells become floats,
    blank cells become NaN, anything else stays text. A column whose
    cells are all numeric or blank gets a float dtype. The date column
    is always kept as text.

    Raises:
        TradingDataError: When the text is not CSV or has no date column.
    """
    try:
        raw = pd.read_csv(StringIO(text), dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise TradingDataError(f"Could not parse trading data: {exc}") from exc

    if TRADING_DATE_KEY not in raw.columns:
        raise TradingDataError(f"Trading data has no '{TRADING_DATE_KEY}' column")

    df = raw.copy()
    for column in df.columns:
        if column == TRADING_DATE_KEY:
            continue
        values = df[column].map(_infer_cell)
        if all(isinstance(v, float) for v in values):
            values = values.astype(float)
        df[column] = values
    return df


# ---------------------------------------------------------
# Feed state
# ---------------------------------------------------------
@dataclass
class TradingFeed:
    """Loading, then settled as ready (with data) or error (with a message)."""
    status: str = LOADING
    data: pd.DataFrame = field(default_factory=pd.DataFrame)
    error: Optional[str] = None
    start: str = ""
    end: str = ""

    @classmethod
    def pending(cls) -> "TradingFeed":
        return cls()

    @property
    def settled(self) -> bool:
        return self.status != LOADING


def _normalize(df: pd.DataFrame) -> pd.DataFrame:
    try:
        return normalize_trading_rows(df)
    except (ValueError, TypeError) as exc:
        raise TradingDataError(f"Could not sort trading dates: {exc}") from exc


def load_trading_feed(url: Optional[str] = None,
                      fetch: Callable[[Optional[str]], str] = fetch_trading_csv) -> TradingFeed:
    """
    Fetch, parse and date-sort the trading sheet once.

    Never raises for transport or parse failures; those settle the feed
    in its error state. On success the default range spans the first and
    last sorted dates.
    """
    try:
        text = fetch(url)
        df = _normalize(parse_trading_csv(text))
    except TradingDataError as exc:
        _logger.warning("Trading data unavailable: %s", exc)
        return TradingFeed(status=ERROR, error=str(exc))

    start, end = default_range(df, TRADING_DATE_KEY)
    _logger.info("Loaded %d trading rows (%s to %s)", len(df), start, end)
    return TradingFeed(status=READY, data=df, start=start, end=end)
