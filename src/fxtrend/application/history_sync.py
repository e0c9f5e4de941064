# src/fxtrend/application/history_sync.py
"""
History Synchronizer - Keeps a Pair's Rate History Up to Date

This module orchestrates one refresh of a currency pair:

1. load the stored history
2. compute the required dates (daily for one year + weekly back to the
   provider's earliest date)
3. bust today's value when asked to, or when it is older than the
   refresh interval
4. fetch only the dates still missing, merge them in, persist
5. report latest/previous rates and the chronological chart points

Historical values never change upstream, so a stored date is never
requested again; only today's value is invalidated.

Files that USE this module:
- fxtrend.application.context (AppContext.refresh runs it)
- tests.test_history_sync (unit and end-to-end tests)

Files that this module USES:
- fxtrend.domain.date_ranges (DateRangeGenerator)
- fxtrend.domain.models (CurrencyPair, ChartPoint, RefreshResult, ZoomWindow, PreviousBaseline)
- fxtrend.adapters.persistence.file_store (HistoryStore, today_key)
- fxtrend.application.batch_fetcher (BatchFetcher)
"""
from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from fxtrend.adapters.persistence.file_store import HistoryStore, today_key
from fxtrend.application.batch_fetcher import BatchFetcher
from fxtrend.domain.date_ranges import DateRangeGenerator
from fxtrend.domain.errors import FetchError, RequestCancelledError, StoreError
from fxtrend.domain.models import (
    ChartPoint,
    CurrencyPair,
    PreviousBaseline,
    RefreshResult,
    ZoomWindow,
)

logger = logging.getLogger(__name__)

DENSE_WINDOW = ZoomWindow.YEAR
SPARSE_WINDOW = ZoomWindow.MAX


def merge_rates(series: Dict[str, float], fetched: Dict[str, float]) -> int:
    """
    Add newly fetched dates to ``series`` in place; existing keys are kept.

    Returns:
        Number of keys added
    """
    added = 0
    for day, rate in fetched.items():
        if day not in series:
            series[day] = rate
            added += 1
    return added


class HistorySynchronizer:
    """Produces an up-to-date, gap-free (where fetchable) series for a pair."""

    def __init__(
        self,
        store: HistoryStore,
        fetcher: BatchFetcher,
        *,
        refresh_interval: float = 60 * 60,
        earliest: Optional[date] = None,
        baseline: PreviousBaseline = PreviousBaseline.DAILY_SLOT,
        today_fn: Callable[[], date] = date.today,
    ):
        """
        Initialize the synchronizer.

        Args:
            store: HistoryStore for the series and the today marker
            fetcher: BatchFetcher used for missing dates
            refresh_interval: Seconds after which today's value is re-fetched
            earliest: Oldest date the provider serves
            baseline: Which stored value the direction indicator compares with
            today_fn: Returns the local calendar date (injected for tests)
        """
        self.store = store
        self.fetcher = fetcher
        self.refresh_interval = refresh_interval
        self.earliest = earliest
        self.baseline = baseline
        self.today_fn = today_fn
        self._locks: Dict[CurrencyPair, asyncio.Lock] = {}

    def required_dates(self, today: date) -> Tuple[List[str], List[str]]:
        """
        Dates the chart needs for ``today``.

        Returns:
            (all required dates newest first, dense daily dates newest first)
        """
        generator = DateRangeGenerator(today, earliest=self.earliest)
        daily = generator.dates_for(DENSE_WINDOW)
        weekly = generator.dates_for(SPARSE_WINDOW)
        return generator.union_for(daily, weekly), daily

    def _lock_for(self, pair: CurrencyPair) -> asyncio.Lock:
        lock = self._locks.get(pair)
        if lock is None:
            lock = self._locks[pair] = asyncio.Lock()
        return lock

    async def refresh(self, pair: CurrencyPair, bust_today: bool = False) -> RefreshResult:
        """
        Bring the history of ``pair`` up to date.

        Overlapping calls for the same pair run one after the other.

        Args:
            pair: Currency pair to refresh
            bust_today: Force today's value to be re-fetched

        Returns:
            RefreshResult with chart points and latest/previous rates

        Raises:
            FetchError: If the fetch step failed as a whole
            RequestCancelledError: If the session was aborted
        """
        async with self._lock_for(pair):
            return await self._refresh(pair, bust_today)

    async def _refresh(self, pair: CurrencyPair, bust_today: bool) -> RefreshResult:
        today = self.today_fn()
        series = self.store.load(pair)
        required, daily = self.required_dates(today)
        newest = required[0]

        marker = today_key(pair)
        if bust_today or self.store.read_marker(marker, self.refresh_interval) is None:
            if series.pop(newest, None) is not None:
                logger.debug("Busted %s for %s", newest, pair.label)
            try:
                self.store.write_marker(marker, True)
            except StoreError as e:
                logger.error("Failed to write today marker for %s: %s", pair.label, e)

        missing = [d for d in required if d not in series]
        fetched_count = 0

        if missing:
            logger.info("Fetching %d missing dates for %s", len(missing), pair.label)
            try:
                fetched = await self.fetcher.fetch_missing(missing, pair.base, pair.target)
            except RequestCancelledError:
                raise
            except Exception as e:
                raise FetchError(f"Fetching history for {pair.label} failed: {e}") from e

            fetched_count = merge_rates(series, fetched)
            try:
                self.store.save(pair, series)
            except StoreError as e:
                logger.error("Failed to save history for %s: %s", pair.label, e)

        latest = series.get(newest)
        previous = self._previous_rate(series, required, daily)
        if latest is None:
            logger.warning("No data for %s on %s", pair.label, newest)

        points = tuple(
            ChartPoint(date=d, rate=series[d]) for d in reversed(required) if d in series
        )
        return RefreshResult(
            pair=pair,
            points=points,
            latest=latest,
            previous=previous,
            today=today,
            fetched=fetched_count,
            requested=len(missing),
        )

    def _previous_rate(
        self, series: Dict[str, float], required: List[str], daily: List[str]
    ) -> Optional[float]:
        if self.baseline is PreviousBaseline.PRIOR_AVAILABLE:
            for day in required[1:]:
                if day in series:
                    return series[day]
            return None
        if len(daily) < 2:
            return None
        return series.get(daily[1])
