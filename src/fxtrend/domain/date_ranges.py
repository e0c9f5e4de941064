# src/fxtrend/domain/date_ranges.py
"""
Date Ranges - Required Calendar Dates per Zoom Window

This module produces the ISO dates a zoom window needs from the provider.
Daily windows yield consecutive dates ending today; stepped windows
(weekly "Max") yield one date per step and stop at the provider's earliest
available date, since older dates are never served and would otherwise be
re-requested on every refresh.

"Today" is injected so the generator stays a pure function of its inputs.

Files that USE this module:
- fxtrend.application.history_sync (required date set for a refresh)
- tests.test_date_ranges (unit tests)

Files that this module USES:
- fxtrend.domain.models (ZoomWindow)
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional

from fxtrend.domain.models import ZoomWindow


def iso_date(day: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return day.strftime("%Y-%m-%d")


def parse_iso_date(text: str) -> date:
    """
    Parse a ``YYYY-MM-DD`` string.

    Raises:
        ValueError: If the string is not a valid ISO calendar date
    """
    return date.fromisoformat(text)


class DateRangeGenerator:
    """Generates newest-first ISO date lists for zoom windows."""

    def __init__(self, today: date, earliest: Optional[date] = None):
        """
        Args:
            today: The day the ranges end on (inclusive)
            earliest: Oldest date the provider serves; bounded windows stop here
        """
        self.today = today
        self.earliest = earliest

    def dates_for(self, window: ZoomWindow) -> List[str]:
        """
        Dates required by ``window``, newest first, no duplicates.

        Args:
            window: Zoom window carrying the day count and sampling step

        Returns:
            ISO date strings starting with today
        """
        dates: List[str] = []
        for offset in range(0, window.days, window.step):
            day = self.today - timedelta(days=offset)
            if window.bounded and self.earliest is not None and day < self.earliest:
                break
            dates.append(iso_date(day))
        return dates

    @staticmethod
    def union_for(primary: Iterable[str], secondary: Iterable[str]) -> List[str]:
        """
        Deduplicated union of two newest-first date lists.

        Primary dates take precedence on overlap; the result stays ordered
        newest first. ISO strings sort chronologically, so ordering is a
        plain string comparison.

        Args:
            primary: Dates of the dense window
            secondary: Dates of the sparse window

        Returns:
            Newest-first list holding every date of both inputs exactly once
        """
        seen = set()
        merged: List[str] = []
        for day in list(primary) + list(secondary):
            if day not in seen:
                seen.add(day)
                merged.append(day)
        merged.sort(reverse=True)
        return merged
