# tracker_data.py
# ------------------------------------------------------------------
# Bundled month-end levels for the three TMI index trackers and the
# S&P 500 benchmark. The table ships with the app and is never fetched.
#
# Month labels are ISO month-end dates so that plain string comparison
# orders them chronologically (see series.filter_by_month).
# ------------------------------------------------------------------

from io import StringIO
from typing import Tuple

import pandas as pd

from perf_engine.constants import MONTH_KEY, INDEX_TRACKER_METRICS

_INDEX_TRACKER_CSV = """Month,TMI-1x,TMI-2x,TMI-3x,S&P 500
2023-03-31,100,100,100,4109.31
2023-04-30,101.8,103.5,105.2,4169.48
2023-05-31,102.5,104.8,107.1,4179.83
2023-06-30,105.9,111.6,117.3,4450.38
2023-07-31,108.3,116.6,124.9,4588.96
2023-08-31,106.7,113.1,119.5,4507.66
2023-09-30,103.2,105.8,108.2,4288.05
2023-10-31,101.4,102.1,102.6,4193.80
2023-11-30,107.6,114.5,120.9,4567.80
2023-12-31,111.9,123.8,135.2,4769.83
2024-01-31,113.0,126.2,138.9,4845.65
2024-02-29,116.4,133.7,150.8,5096.27
2024-03-31,118.8,139.2,159.6,5254.35
2024-04-30,114.9,130.1,145.1,5035.69
2024-05-31,117.5,135.9,154.2,5277.51
2024-06-30,119.6,140.8,162.1,5460.48
2024-07-31,120,141.7,163.4,5522.30
"""

# Initial selection: the full span of the bundled table
DEFAULT_INDEX_RANGE: Tuple[str, str] = ("2023-03-31", "2024-07-31")


def load_index_trackers() -> pd.DataFrame:
    """Parse the bundled table. Month stays text; metric columns are floats."""
    df = pd.read_csv(StringIO(_INDEX_TRACKER_CSV), dtype={MONTH_KEY: str})
    df[INDEX_TRACKER_METRICS] = df[INDEX_TRACKER_METRICS].astype(float)
    return df
