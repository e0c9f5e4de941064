# src/fxtrend/application/batch_fetcher.py
"""
Batch Fetcher - Bounded-Concurrency Gap Filling

This module drives a RateProvider over a list of missing dates. Dates are
processed in fixed-size chunks: every fetch in a chunk runs concurrently
and the next chunk only starts once all of them settled, so at most
``batch_size`` requests are ever outstanding.

A date whose fetch fails is simply left out of the result; it is still
missing on the next synchronisation pass and gets requested again then.

Files that USE this module:
- fxtrend.application.history_sync (HistorySynchronizer fills gaps through it)
- fxtrend.application.context (builds the fetcher)
- tests.test_batch_fetcher (unit tests)

Files that this module USES:
- fxtrend.adapters.providers.base (RateProvider interface)
- fxtrend.domain.errors (RequestCancelledError)
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Sequence

from fxtrend.adapters.providers.base import RateProvider
from fxtrend.domain.errors import RequestCancelledError

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 8


def chunked(items: Sequence[str], size: int) -> List[Sequence[str]]:
    """Split ``items`` into consecutive slices of at most ``size`` elements."""
    return [items[i:i + size] for i in range(0, len(items), size)]


class BatchFetcher:
    """Fetches many dates through a provider, ``batch_size`` at a time."""

    def __init__(self, provider: RateProvider, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.provider = provider
        self.batch_size = batch_size

    async def fetch_missing(self, dates: Sequence[str], base: str, target: str) -> Dict[str, float]:
        """
        Fetch the rate of every date in ``dates``.

        Args:
            dates: ISO dates to fetch (newest first by convention)
            base: Base identifier
            target: Target identifier

        Returns:
            Partial mapping of date to rate; failed dates are omitted

        Raises:
            RequestCancelledError: If the session was aborted mid-batch
        """
        out: Dict[str, float] = {}
        failed = 0

        for chunk in chunked(list(dates), self.batch_size):
            results = await asyncio.gather(
                *(self.provider.fetch_rate(d, base, target) for d in chunk),
                return_exceptions=True,
            )
            for day, result in zip(chunk, results):
                if isinstance(result, (RequestCancelledError, asyncio.CancelledError)):
                    raise RequestCancelledError(f"Batch cancelled at {day}")
                if isinstance(result, BaseException):
                    failed += 1
                    logger.debug("No rate for %s %s/%s: %s", day, base, target, result)
                    continue
                if result is None:
                    failed += 1
                    continue
                out[day] = float(result)

        if failed:
            logger.info(
                "Fetched %d/%d dates for %s/%s (%d unavailable, retried next pass)",
                len(out), len(dates), base, target, failed,
            )
        else:
            logger.debug("Fetched %d/%d dates for %s/%s", len(out), len(dates), base, target)
        return out
