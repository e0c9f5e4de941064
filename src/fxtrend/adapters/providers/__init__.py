# src/fxtrend/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains the abortable HTTP session and the currency-api
client. Providers implement the RateProvider interface.
"""

from fxtrend.adapters.providers.base import RateProvider
from fxtrend.adapters.providers.currency_api import CurrencyApiProvider, build_provider, extract_rate
from fxtrend.adapters.providers.session import HttpSession

__all__ = [
    "RateProvider",
    "CurrencyApiProvider",
    "HttpSession",
    "build_provider",
    "extract_rate",
]
