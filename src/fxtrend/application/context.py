# src/fxtrend/application/context.py
"""
App Context - Runtime State of One Running Instance

This module replaces module-level caches, timers and globals with a single
object that is built when the bot starts and torn down when it stops. It
owns the shared HTTP session, the store, the provider stack, the
synchronizer and the currency catalog, plus the mutable runtime state:
the current pair, the last successful refresh result, the coarse status
shown to users and the periodic jobs registered on its behalf.

Files that USE this module:
- fxtrend.adapters.telegram.bot (builds the context in post_init, closes it in post_shutdown)
- fxtrend.adapters.telegram.handlers (reads results, triggers refreshes)
- fxtrend.adapters.telegram.jobs (periodic refreshes)
- tests.test_context (unit tests)

Files that this module USES:
- fxtrend.config.settings (Settings)
- fxtrend.adapters.providers (HttpSession, build_provider)
- fxtrend.adapters.persistence (HistoryStore, pair preference marker)
- fxtrend.application.batch_fetcher (BatchFetcher)
- fxtrend.application.history_sync (HistorySynchronizer)
- fxtrend.application.currency_list (CurrencyCatalog)
- fxtrend.adapters.formatting.formatter (coarse status strings)
"""
from __future__ import annotations

import logging
import time
from datetime import date
from typing import Any, Callable, List, Optional

import httpx

from fxtrend.adapters.formatting.formatter import CONFIG_ERROR, ERROR, LOADING, NO_DATA, OK, UPDATING
from fxtrend.adapters.persistence.file_store import PAIR_PREFERENCE_KEY, HistoryStore
from fxtrend.adapters.providers.base import RateProvider
from fxtrend.adapters.providers.currency_api import build_provider
from fxtrend.adapters.providers.session import HttpSession
from fxtrend.application.batch_fetcher import BatchFetcher
from fxtrend.application.currency_list import CurrencyCatalog
from fxtrend.application.history_sync import HistorySynchronizer
from fxtrend.config.settings import Settings
from fxtrend.domain.errors import ConfigError, RequestCancelledError, StoreError
from fxtrend.domain.models import CurrencyPair, RefreshResult
from fxtrend.shared.validators import validate_currency_code

logger = logging.getLogger(__name__)


def _checked_pair(base: str, target: str) -> CurrencyPair:
    """
    Build a pair from user or file input.

    Raises:
        ConfigError: If an identifier is malformed
    """
    for code in (base, target):
        if not validate_currency_code(code):
            raise ConfigError(f"Invalid currency code: {code!r}")
    return CurrencyPair(base, target)


def _load_pair_preference(store: HistoryStore) -> Optional[CurrencyPair]:
    """Pair persisted by an earlier ``set_pair``, if any and well-formed."""
    data = store.read_marker(PAIR_PREFERENCE_KEY)
    if not isinstance(data, dict):
        return None
    try:
        return _checked_pair(str(data.get("base", "")), str(data.get("target", "")))
    except ConfigError as e:
        logger.warning("Ignoring invalid pair preference %r: %s", data, e)
        return None


class AppContext:
    """Everything one running instance owns, with an explicit lifecycle."""

    def __init__(
        self,
        settings: Settings,
        session: HttpSession,
        store: HistoryStore,
        provider: RateProvider,
        synchronizer: HistorySynchronizer,
        catalog: CurrencyCatalog,
        pair: Optional[CurrencyPair],
    ):
        self.settings = settings
        self.session = session
        self.store = store
        self.provider = provider
        self.synchronizer = synchronizer
        self.catalog = catalog
        self.pair = pair
        self.last_result: Optional[RefreshResult] = None
        self.status: str = LOADING if pair is not None else CONFIG_ERROR
        self.jobs: List[Any] = []  # telegram.ext.Job handles

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        client: Optional[httpx.AsyncClient] = None,
        today_fn: Callable[[], date] = date.today,
        clock: Callable[[], float] = time.time,
    ) -> AppContext:
        """
        Wire the full object graph from Settings.

        Args:
            settings: Validated Settings
            client: Optional httpx client (tests pass one with a MockTransport)
            today_fn: Local calendar date source
            clock: Wall clock for cache envelopes
        """
        session = HttpSession(timeout=settings.http_timeout_seconds, client=client)
        store = HistoryStore(settings.cache_dir, clock=clock)
        provider = build_provider(session, settings)
        fetcher = BatchFetcher(provider, batch_size=settings.fetch_batch_size)
        synchronizer = HistorySynchronizer(
            store,
            fetcher,
            refresh_interval=settings.refresh_interval_seconds,
            earliest=settings.history_start,
            baseline=settings.previous_baseline,
            today_fn=today_fn,
        )
        catalog = CurrencyCatalog(store, provider, ttl=settings.currency_list_ttl_seconds)

        pair = _load_pair_preference(store)
        if pair is None:
            try:
                pair = CurrencyPair(settings.base_currency, settings.target_currency)
            except ConfigError as e:
                logger.error("Invalid currency configuration: %s", e)
                pair = None
        logger.info("Context ready: pair=%s cache=%s", pair.label if pair else "-", settings.cache_dir)
        return cls(settings, session, store, provider, synchronizer, catalog, pair)

    async def refresh(self, bust_today: bool = False) -> Optional[RefreshResult]:
        """
        Synchronise the current pair and record the outcome.

        On failure the previous result is kept and the status becomes
        ``Error``. A cancelled refresh (shutdown) changes nothing.

        Returns:
            The new RefreshResult, or None if the refresh did not complete
        """
        if self.pair is None:
            self.status = CONFIG_ERROR
            return None

        previous_status = self.status
        self.status = UPDATING
        try:
            result = await self.synchronizer.refresh(self.pair, bust_today=bust_today)
        except RequestCancelledError:
            self.status = previous_status
            return None
        except Exception as e:
            logger.error("Refresh of %s failed: %s", self.pair.label, e)
            self.status = ERROR
            return None

        if result.pair != self.pair:
            # pair switched while the refresh was running
            return result

        self.last_result = result
        self.status = OK if result.has_data else NO_DATA
        logger.info(
            "Refreshed %s: latest=%s fetched=%d/%d",
            result.pair.label, result.latest, result.fetched, result.requested,
        )
        return result

    def set_pair(self, base: str, target: str) -> CurrencyPair:
        """
        Switch to another pair and persist the choice.

        Raises:
            ConfigError: If an identifier is malformed or not in the cached list
        """
        pair = _checked_pair(base, target)

        known = self.catalog.cached()
        if known is not None:
            unknown = [c for c in (pair.base, pair.target) if c not in known]
            if unknown:
                raise ConfigError(f"Unsupported currency: {', '.join(c.upper() for c in unknown)}")

        self._apply_pair(pair)
        return pair

    def _apply_pair(self, pair: CurrencyPair) -> None:
        if pair != self.pair:
            self.last_result = None
            self.status = UPDATING
        self.pair = pair
        try:
            self.store.write_marker(PAIR_PREFERENCE_KEY, {"base": pair.base, "target": pair.target})
        except StoreError as e:
            logger.error("Failed to persist pair preference: %s", e)

    async def update_currency_list(self, force: bool = False) -> List[str]:
        """
        Refresh the supported identifiers and reset the pair if needed.

        Returns:
            Reset notices (empty when nothing changed or the list is unavailable)
        """
        codes = await self.catalog.refresh(force=force)
        if codes is None or self.pair is None:
            return []
        pair, notices = self.catalog.validate_pair(self.pair, codes)
        if notices:
            self._apply_pair(pair)
        return notices

    def add_job(self, job: Any) -> None:
        self.jobs.append(job)

    async def aclose(self) -> None:
        """Cancel periodic jobs and abort every in-flight request."""
        for job in self.jobs:
            job.schedule_removal()
        self.jobs.clear()
        await self.session.aclose()
        logger.info("Context closed")
