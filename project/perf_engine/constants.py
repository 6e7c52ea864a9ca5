# constants.py
# ------------------------------------------------------------------
# Shared configuration used across perf_engine and ui modules.
#
# Environment overrides are read once at import time:
#   TRADING_CSV_URL        published trading-account sheet (CSV export)
#   TRADING_FETCH_TIMEOUT  read timeout in seconds for that request
# ------------------------------------------------------------------

import os
import re
from dataclasses import dataclass, field
from typing import List

# Published Google Sheet holding the daily trading-account records.
_DEFAULT_TRADING_CSV_URL = (
    "https://docs.google.com/spreadsheets/d/e/2PACX-1vRO99iDZZiqlXeGXRUP1Aubm7Fs2LP0oeda-"
    "yoxajUFsILfuOngPU196aKNhCeYd9kBRhFRHQx4gA8l/pub?output=csv"
)
TRADING_CSV_URL: str = os.environ.get("TRADING_CSV_URL", _DEFAULT_TRADING_CSV_URL)


def _read_timeout() -> float:
    raw = os.environ.get("TRADING_FETCH_TIMEOUT")
    if not raw:
        return 30.0
    try:
        return float(raw)
    except ValueError:
        return 30.0


# Request timeouts: (connect_timeout_s, read_timeout_s)
FETCH_TIMEOUT = (10, _read_timeout())


# ------------------------------------------------------------------
# Series columns
# ------------------------------------------------------------------
MONTH_KEY: str = "Month"
TRADING_DATE_KEY: str = "open"

INDEX_TRACKER_METRICS: List[str] = ["TMI-1x", "TMI-2x", "TMI-3x", "S&P 500"]
TRADING_METRICS: List[str] = ["net gain", "pct gain", "combined percent gain"]

# Card titles for the trading metrics (column names are lower case in the sheet)
TRADING_METRIC_LABELS = {
    "net gain":              "Net Gain",
    "pct gain":              "Pct Gain",
    "combined percent gain": "Combined Percent Gain",
}


# ------------------------------------------------------------------
# Percentage-change policy
# ------------------------------------------------------------------
# Smallest start value the floored aggregator will divide by. A start
# value with a smaller magnitude is replaced by +MIN_START_VALUE.
MIN_START_VALUE: float = 0.01

NOT_AVAILABLE: str = "N/A"

# A text cell that reads as a plain decimal or exponent number
NUMERIC_TEXT = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")


# ------------------------------------------------------------------
# Palette
# ------------------------------------------------------------------
UP   = "#38A169"   # green.500
DOWN = "#E53E3E"   # red.500

DEFAULT_BACKGROUND = "#ffffff"
DEFAULT_FONT       = "#000000"
DEFAULT_CHART_COLORS = ["#8884d8", "#82ca9d", "#ffc658", "#ff7300"]


@dataclass
class Theme:
    """Page-level colors shared by both charts and every card."""
    background: str = DEFAULT_BACKGROUND
    font: str = DEFAULT_FONT
    chart_colors: List[str] = field(default_factory=lambda: list(DEFAULT_CHART_COLORS))

    def color_for(self, index: int) -> str:
        return self.chart_colors[index % len(self.chart_colors)]
