# src/fxtrend/application/currency_list.py
"""
Currency Catalog - Supported Identifier List and Pair Validation

This module keeps the list of identifiers the provider publishes, cached
for a day under the ``currency-list`` marker, and checks the configured
pair against it. A pair that references an identifier the provider no
longer lists is reset to a known-good default.

Files that USE this module:
- fxtrend.application.context (AppContext.update_currency_list)
- tests.test_currency_list (unit tests)

Files that this module USES:
- fxtrend.adapters.persistence.file_store (HistoryStore markers)
- fxtrend.adapters.providers.base (RateProvider.fetch_currencies)
- fxtrend.domain.models (CurrencyPair)
"""
from __future__ import annotations

import logging
from typing import Collection, List, Optional, Tuple

from fxtrend.adapters.persistence.file_store import CURRENCY_LIST_KEY, HistoryStore
from fxtrend.adapters.providers.base import RateProvider
from fxtrend.domain.errors import RequestCancelledError, StoreError
from fxtrend.domain.models import CurrencyPair

logger = logging.getLogger(__name__)

DEFAULT_BASE = "usd"
DEFAULT_TARGET = "zar"


def reset_notice(code: str) -> str:
    return f"{code.upper()} is no longer supported; reset."


class CurrencyCatalog:
    """Daily-cached list of supported currency identifiers."""

    def __init__(self, store: HistoryStore, provider: RateProvider, ttl: float = 24 * 60 * 60):
        self.store = store
        self.provider = provider
        self.ttl = ttl

    def cached(self) -> Optional[List[str]]:
        """Identifiers from a fresh marker, or None when absent or stale."""
        data = self.store.read_marker(CURRENCY_LIST_KEY, self.ttl)
        if not isinstance(data, list) or not data:
            return None
        return sorted(str(code).lower() for code in data)

    async def refresh(self, force: bool = False) -> Optional[List[str]]:
        """
        Return the supported identifiers, fetching them when the cache is stale.

        Args:
            force: Ignore a fresh cached list

        Returns:
            Sorted identifiers, or None if the list could not be obtained
        """
        if not force:
            codes = self.cached()
            if codes is not None:
                logger.debug("Currency list served from cache (%d identifiers)", len(codes))
                return codes

        try:
            currencies = await self.provider.fetch_currencies()
        except RequestCancelledError:
            logger.debug("Currency list refresh cancelled")
            return None
        except Exception as e:
            logger.error("Failed to refresh currency list: %s", e)
            return None

        codes = sorted(currencies)
        try:
            self.store.write_marker(CURRENCY_LIST_KEY, codes)
        except StoreError as e:
            logger.error("Failed to cache currency list: %s", e)
        return codes

    @staticmethod
    def validate_pair(pair: CurrencyPair, valid: Collection[str]) -> Tuple[CurrencyPair, List[str]]:
        """
        Reset identifiers of ``pair`` that are not in ``valid``.

        The base falls back to ``usd``; the target falls back to ``zar``
        when the base is ``usd``, else to ``usd``.

        Returns:
            (possibly reset pair, one notice per reset identifier)
        """
        valid = set(valid)
        notices: List[str] = []
        base, target = pair.base, pair.target

        if base not in valid:
            notices.append(reset_notice(base))
            base = DEFAULT_BASE
        if target not in valid:
            notices.append(reset_notice(target))
            target = DEFAULT_TARGET if base == DEFAULT_BASE else DEFAULT_BASE

        if notices:
            logger.warning("Currency pair %s reset: %s", pair.label, " ".join(notices))
            return CurrencyPair(base, target), notices
        return pair, notices
