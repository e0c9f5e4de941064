# src/fxtrend/adapters/providers/base.py
"""
Base Provider Interface for Historical Exchange Rate Providers

This module defines the abstract base class for rate providers. It
establishes the contract that the batch fetcher and the currency catalog
rely on.

Files that USE this module:
- fxtrend.adapters.providers.currency_api (CurrencyApiProvider implements RateProvider)
- fxtrend.application.batch_fetcher (drives any RateProvider)
- fxtrend.application.currency_list (reads the supported identifiers)

Files that this module USES:
- None (pure interface definition)
"""
from abc import ABC, abstractmethod
from typing import Dict


class RateProvider(ABC):
    @abstractmethod
    async def fetch_rate(self, date: str, base: str, target: str) -> float:
        """Return the ``target`` per 1 ``base`` rate published for ``date``."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_currencies(self) -> Dict[str, str]:
        """Return every supported identifier mapped to its display name."""
        raise NotImplementedError
