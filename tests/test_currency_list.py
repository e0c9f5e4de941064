# tests/test_currency_list.py
"""
Currency Catalog Tests - Daily List Cache and Pair Validation

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxtrend.application.currency_list (CurrencyCatalog)
- fxtrend.adapters.persistence.file_store (HistoryStore)
"""
from unittest.mock import AsyncMock, Mock

import pytest

from fxtrend.adapters.persistence.file_store import CURRENCY_LIST_KEY, HistoryStore
from fxtrend.adapters.providers.base import RateProvider
from fxtrend.application.currency_list import CurrencyCatalog
from fxtrend.domain.errors import ProviderError, RequestCancelledError
from fxtrend.domain.models import CurrencyPair

DAY = 24 * 60 * 60


class Clock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def store(tmp_path, clock):
    return HistoryStore(tmp_path, clock=clock)


def provider_returning(value=None, error=None):
    provider = Mock(spec=RateProvider)
    provider.fetch_currencies = AsyncMock(return_value=value, side_effect=error)
    return provider


class TestRefresh:
    @pytest.mark.asyncio
    async def test_fetches_and_caches(self, store):
        provider = provider_returning({"zar": "Rand", "usd": "US Dollar", "eur": "Euro"})
        catalog = CurrencyCatalog(store, provider, ttl=DAY)

        assert await catalog.refresh() == ["eur", "usd", "zar"]
        assert store.read_marker(CURRENCY_LIST_KEY) == ["eur", "usd", "zar"]

    @pytest.mark.asyncio
    async def test_fresh_cache_skips_network(self, store, clock):
        store.write_marker(CURRENCY_LIST_KEY, ["usd", "zar"])
        clock.now += DAY - 1
        provider = provider_returning({"eur": "Euro"})

        assert await CurrencyCatalog(store, provider, ttl=DAY).refresh() == ["usd", "zar"]
        provider.fetch_currencies.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stale_cache_refetches(self, store, clock):
        store.write_marker(CURRENCY_LIST_KEY, ["usd", "zar"])
        clock.now += DAY + 1
        provider = provider_returning({"eur": "Euro"})

        assert await CurrencyCatalog(store, provider, ttl=DAY).refresh() == ["eur"]

    @pytest.mark.asyncio
    async def test_force_ignores_fresh_cache(self, store):
        store.write_marker(CURRENCY_LIST_KEY, ["usd"])
        provider = provider_returning({"gbp": "Pound"})

        assert await CurrencyCatalog(store, provider).refresh(force=True) == ["gbp"]

    @pytest.mark.asyncio
    async def test_failure_returns_none(self, store):
        provider = provider_returning(error=ProviderError("latest"))
        assert await CurrencyCatalog(store, provider).refresh() is None

    @pytest.mark.asyncio
    async def test_cancellation_returns_none(self, store, caplog):
        provider = provider_returning(error=RequestCancelledError("Request was cancelled."))

        assert await CurrencyCatalog(store, provider).refresh() is None
        assert not [r for r in caplog.records if r.levelname == "ERROR"]


class TestValidatePair:
    VALID = {"usd", "zar", "eur", "gbp"}

    def test_valid_pair_unchanged(self):
        pair = CurrencyPair("eur", "gbp")
        assert CurrencyCatalog.validate_pair(pair, self.VALID) == (pair, [])

    def test_unknown_base_resets_to_usd(self):
        pair, notices = CurrencyCatalog.validate_pair(CurrencyPair("xyz", "eur"), self.VALID)
        assert pair == CurrencyPair("usd", "eur")
        assert notices == ["XYZ is no longer supported; reset."]

    def test_unknown_target_with_usd_base_resets_to_zar(self):
        pair, _ = CurrencyCatalog.validate_pair(CurrencyPair("usd", "xyz"), self.VALID)
        assert pair == CurrencyPair("usd", "zar")

    def test_unknown_target_with_other_base_resets_to_usd(self):
        pair, _ = CurrencyCatalog.validate_pair(CurrencyPair("eur", "xyz"), self.VALID)
        assert pair == CurrencyPair("eur", "usd")

    def test_both_unknown(self):
        pair, notices = CurrencyCatalog.validate_pair(CurrencyPair("aaa", "bbb"), self.VALID)
        assert pair == CurrencyPair("usd", "zar")
        assert len(notices) == 2
