# tests/test_date_ranges.py
"""
Date Range Tests - Unit Tests for the Required Date Generator

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxtrend.domain.date_ranges (DateRangeGenerator, iso_date, parse_iso_date)
- fxtrend.domain.models (ZoomWindow)
"""
from datetime import date

import pytest

from fxtrend.domain.date_ranges import DateRangeGenerator, iso_date, parse_iso_date
from fxtrend.domain.models import ZoomWindow


class TestIsoHelpers:
    def test_iso_date_zero_pads(self):
        assert iso_date(date(2025, 1, 3)) == "2025-01-03"

    def test_parse_round_trip(self):
        assert parse_iso_date("2024-02-29") == date(2024, 2, 29)

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_iso_date("2024-13-01")


class TestDatesFor:
    def test_month_window_is_thirty_consecutive_days(self):
        gen = DateRangeGenerator(date(2025, 3, 31))
        dates = gen.dates_for(ZoomWindow.MONTH)

        assert len(dates) == 30
        assert dates[0] == "2025-03-31"
        assert dates[1] == "2025-03-30"
        assert dates[-1] == "2025-03-02"

    def test_year_window_crosses_leap_day(self):
        gen = DateRangeGenerator(date(2024, 3, 1))
        dates = gen.dates_for(ZoomWindow.YEAR)

        assert len(dates) == 365
        assert dates[:3] == ["2024-03-01", "2024-02-29", "2024-02-28"]
        assert len(set(dates)) == len(dates)

    def test_newest_first(self):
        dates = DateRangeGenerator(date(2025, 6, 15)).dates_for(ZoomWindow.YEAR)
        assert dates == sorted(dates, reverse=True)

    def test_max_window_steps_weekly(self):
        gen = DateRangeGenerator(date(2025, 1, 15))
        dates = gen.dates_for(ZoomWindow.MAX)

        assert dates[:3] == ["2025-01-15", "2025-01-08", "2025-01-01"]
        assert len(dates) == len(range(0, 365 * 5, 7))

    def test_max_window_stops_at_earliest(self):
        gen = DateRangeGenerator(date(2024, 3, 20), earliest=date(2024, 3, 2))
        dates = gen.dates_for(ZoomWindow.MAX)

        assert dates == ["2024-03-20", "2024-03-13", "2024-03-06"]

    def test_daily_windows_ignore_earliest(self):
        gen = DateRangeGenerator(date(2024, 3, 5), earliest=date(2024, 3, 2))
        assert len(gen.dates_for(ZoomWindow.MONTH)) == 30

    def test_earliest_equal_to_sample_is_kept(self):
        gen = DateRangeGenerator(date(2024, 3, 16), earliest=date(2024, 3, 2))
        assert gen.dates_for(ZoomWindow.MAX)[-1] == "2024-03-02"


class TestUnion:
    def test_union_deduplicates_and_sorts(self):
        merged = DateRangeGenerator.union_for(
            ["2025-01-03", "2025-01-02", "2025-01-01"],
            ["2025-01-03", "2024-12-27"],
        )
        assert merged == ["2025-01-03", "2025-01-02", "2025-01-01", "2024-12-27"]

    def test_year_and_max_union_size(self):
        gen = DateRangeGenerator(date(2025, 1, 15))
        daily = gen.dates_for(ZoomWindow.YEAR)
        weekly = gen.dates_for(ZoomWindow.MAX)
        union = gen.union_for(daily, weekly)

        # weekly samples inside the year are already in the daily list
        older_weekly = [d for d in weekly if d not in set(daily)]
        assert len(union) == len(daily) + len(older_weekly)
        assert union[0] == "2025-01-15"

    def test_union_with_itself_is_identity(self):
        daily = DateRangeGenerator(date(2025, 1, 15)).dates_for(ZoomWindow.YEAR)
        assert DateRangeGenerator.union_for(daily, daily) == daily

    def test_overlapping_dates_appear_once(self):
        gen = DateRangeGenerator(date(2025, 1, 15), earliest=date(2024, 3, 2))
        daily = gen.dates_for(ZoomWindow.YEAR)
        weekly = gen.dates_for(ZoomWindow.MAX)
        union = gen.union_for(daily, weekly)

        assert len(union) == len(set(union))
        assert set(union) == set(daily) | set(weekly)
        assert union == sorted(union, reverse=True)

    def test_empty_inputs(self):
        assert DateRangeGenerator.union_for([], []) == []


class TestZoomWindow:
    @pytest.mark.parametrize("key,expected", [
        ("1m", ZoomWindow.MONTH),
        ("1Y", ZoomWindow.YEAR),
        (" max ", ZoomWindow.MAX),
    ])
    def test_from_key(self, key, expected):
        assert ZoomWindow.from_key(key) is expected

    def test_from_key_unknown(self):
        with pytest.raises(ValueError, match="Unknown zoom window"):
            ZoomWindow.from_key("5y")

    def test_only_max_is_bounded(self):
        assert ZoomWindow.MAX.bounded
        assert not ZoomWindow.YEAR.bounded
        assert not ZoomWindow.MONTH.bounded
