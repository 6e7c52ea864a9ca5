# tests/test_series.py
# -----------------------------------------------------------------------
# Unit tests for perf_engine/series.py
#
# Range filters, trading-row normalization and selector helpers. All
# frames are built inline; nothing touches the network.
# -----------------------------------------------------------------------

import pandas as pd
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from perf_engine.series import (
    filter_by_month,
    filter_by_date,
    normalize_trading_rows,
    range_options,
    default_range,
)


# ── Helpers ────────────────────────────────────────────────────────────

MONTHS = ["2023-03-31", "2023-04-30", "2023-05-31", "2023-06-30", "2023-07-31"]


def _monthly(values=None) -> pd.DataFrame:
    values = values or [100.0, 101.0, 102.0, 103.0, 104.0]
    return pd.DataFrame({"Month": MONTHS, "TMI-1x": values})


def _daily(dates, gains=None) -> pd.DataFrame:
    gains = gains if gains is not None else list(range(len(dates)))
    return pd.DataFrame({"open": dates, "net gain": gains})


# ═══════════════════════════════════════════════════════════════════════
# filter_by_month
# ═══════════════════════════════════════════════════════════════════════

class TestFilterByMonth:
    def test_full_span_returns_everything(self):
        out = filter_by_month(_monthly(), "2023-03-31", "2023-07-31")
        assert list(out["Month"]) == MONTHS

    def test_inner_window_is_inclusive(self):
        out = filter_by_month(_monthly(), "2023-04-30", "2023-06-30")
        assert list(out["Month"]) == ["2023-04-30", "2023-05-31", "2023-06-30"]

    def test_single_month_window(self):
        out = filter_by_month(_monthly(), "2023-05-31", "2023-05-31")
        assert list(out["Month"]) == ["2023-05-31"]

    def test_inverted_range_is_empty(self):
        out = filter_by_month(_monthly(), "2023-07-31", "2023-03-31")
        assert out.empty

    def test_bounds_outside_series_are_allowed(self):
        out = filter_by_month(_monthly(), "2020-01-31", "2023-04-15")
        assert list(out["Month"]) == ["2023-03-31"]

    def test_preserves_input_order(self):
        """The static table is trusted as-is; no re-sorting happens."""
        df = _monthly().iloc[::-1].reset_index(drop=True)
        out = filter_by_month(df, "2023-04-30", "2023-06-30")
        assert list(out["Month"]) == ["2023-06-30", "2023-05-31", "2023-04-30"]

    def test_result_is_reindexed(self):
        out = filter_by_month(_monthly(), "2023-05-31", "2023-07-31")
        assert list(out.index) == [0, 1, 2]

    def test_input_not_mutated(self):
        df = _monthly()
        filter_by_month(df, "2023-05-31", "2023-05-31")
        assert len(df) == 5

    def test_missing_bound_is_empty(self):
        assert filter_by_month(_monthly(), None, "2023-07-31").empty

    def test_empty_frame(self):
        assert filter_by_month(pd.DataFrame(columns=["Month"]), "a", "z").empty


# ═══════════════════════════════════════════════════════════════════════
# filter_by_date
# ═══════════════════════════════════════════════════════════════════════

class TestFilterByDate:
    def test_inclusive_calendar_window(self):
        df = _daily(["2024-01-02", "2024-01-03", "2024-01-04", "2024-01-05"])
        out = filter_by_date(df, "2024-01-03", "2024-01-04")
        assert list(out["open"]) == ["2024-01-03", "2024-01-04"]

    def test_compares_as_dates_not_strings(self):
        """'1/10/2024' sorts before '1/9/2024' as text but after it as a date."""
        df = _daily(["1/2/2024", "1/9/2024", "1/10/2024", "1/11/2024"])
        out = filter_by_date(df, "1/9/2024", "1/10/2024")
        assert list(out["open"]) == ["1/9/2024", "1/10/2024"]

    def test_inverted_range_is_empty(self):
        df = _daily(["2024-01-02", "2024-01-03"])
        assert filter_by_date(df, "2024-01-03", "2024-01-02").empty

    def test_blank_bound_matches_nothing(self):
        df = _daily(["2024-01-02", "2024-01-03"])
        assert filter_by_date(df, "", "2024-01-03").empty
        assert filter_by_date(df, "2024-01-02", None).empty

    def test_unparsable_row_never_matches(self):
        df = _daily(["2024-01-02", "not a date", "2024-01-03"])
        out = filter_by_date(df, "2024-01-01", "2024-12-31")
        assert list(out["open"]) == ["2024-01-02", "2024-01-03"]

    def test_bounds_outside_series(self):
        df = _daily(["2024-01-02", "2024-01-03"])
        out = filter_by_date(df, "2023-12-01", "2024-06-30")
        assert len(out) == 2

    def test_offset_bound_against_naive_rows(self):
        df = _daily(["2024-01-02", "2024-01-03", "2024-01-04"])
        out = filter_by_date(df, "2024-01-01T00:00:00Z", "2024-01-05")
        assert list(out["open"]) == ["2024-01-02", "2024-01-03", "2024-01-04"]

    def test_offset_bound_is_placed_on_utc_timeline(self):
        # 2024-01-03T00:00+05:00 is 2024-01-02T19:00 UTC
        df = _daily(["2024-01-02", "2024-01-03"])
        out = filter_by_date(df, "2024-01-03T00:00:00+05:00", "2024-01-03")
        assert list(out["open"]) == ["2024-01-03"]

    def test_mixed_offset_rows(self):
        df = _daily(["2024-01-02", "2024-01-03T10:00:00+05:00", "2024-01-04"])
        out = filter_by_date(df, "2024-01-03", "2024-01-04")
        assert list(out["open"]) == ["2024-01-03T10:00:00+05:00", "2024-01-04"]

    def test_empty_frame(self):
        assert filter_by_date(pd.DataFrame(columns=["open"]), "2024-01-01", "2024-01-02").empty


# ═══════════════════════════════════════════════════════════════════════
# normalize_trading_rows
# ═══════════════════════════════════════════════════════════════════════

class TestNormalizeTradingRows:
    def test_sorts_by_calendar_date(self):
        df = _daily(["2024-01-05", "2024-01-02", "2024-01-04"], [5, 2, 4])
        out = normalize_trading_rows(df)
        assert list(out["open"]) == ["2024-01-02", "2024-01-04", "2024-01-05"]
        assert list(out["net gain"]) == [2, 4, 5]

    def test_trims_keys(self):
        df = _daily(["  2024-01-03 ", "2024-01-02\t"])
        out = normalize_trading_rows(df)
        assert list(out["open"]) == ["2024-01-02", "2024-01-03"]

    def test_drops_blank_and_missing_keys(self):
        df = _daily(["2024-01-03", "   ", None, "", "2024-01-02"])
        out = normalize_trading_rows(df)
        assert list(out["open"]) == ["2024-01-02", "2024-01-03"]

    def test_unparsable_keys_sort_last(self):
        df = _daily(["someday", "2024-01-03", "2024-01-02"])
        out = normalize_trading_rows(df)
        assert list(out["open"]) == ["2024-01-02", "2024-01-03", "someday"]

    def test_mixed_naive_and_offset_keys(self):
        df = _daily(["2024-01-03T10:00:00+05:00", "2024-01-04", "2024-01-02"], [2, 3, 1])
        out = normalize_trading_rows(df)
        assert list(out["open"]) == ["2024-01-02", "2024-01-03T10:00:00+05:00", "2024-01-04"]
        assert list(out["net gain"]) == [1, 2, 3]

    def test_idempotent_on_sorted_series(self):
        df = _daily(["2024-01-02", "2024-01-03", "2024-01-04"])
        once = normalize_trading_rows(df)
        twice = normalize_trading_rows(once)
        pd.testing.assert_frame_equal(once, twice)

    def test_input_not_mutated(self):
        df = _daily([" 2024-01-03", "2024-01-02"])
        normalize_trading_rows(df)
        assert list(df["open"]) == [" 2024-01-03", "2024-01-02"]

    def test_empty_frame(self):
        assert normalize_trading_rows(pd.DataFrame(columns=["open"])).empty


# ═══════════════════════════════════════════════════════════════════════
# range_options / default_range
# ═══════════════════════════════════════════════════════════════════════

class TestSelectorHelpers:
    def test_options_follow_series_order(self):
        assert range_options(_monthly(), "Month") == MONTHS

    def test_duplicates_are_kept(self):
        df = _daily(["2024-01-02", "2024-01-02", "2024-01-03"])
        assert range_options(df, "open") == ["2024-01-02", "2024-01-02", "2024-01-03"]

    def test_options_for_empty_frame(self):
        assert range_options(pd.DataFrame(), "open") == []

    def test_default_range_is_first_and_last(self):
        assert default_range(_monthly(), "Month") == ("2023-03-31", "2023-07-31")

    def test_default_range_after_normalization(self):
        df = normalize_trading_rows(_daily(["2024-01-05", "", "2024-01-02"]))
        assert default_range(df, "open") == ("2024-01-02", "2024-01-05")

    def test_default_range_empty(self):
        assert default_range(pd.DataFrame(columns=["open"]), "open") == ("", "")
