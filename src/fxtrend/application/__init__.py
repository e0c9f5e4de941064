# src/fxtrend/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains the services that orchestrate domain logic:
batch fetching, history synchronisation, the currency catalog and the
runtime context that ties them together.
"""

from fxtrend.application.batch_fetcher import BatchFetcher, chunked
from fxtrend.application.history_sync import HistorySynchronizer, merge_rates
from fxtrend.application.currency_list import CurrencyCatalog
from fxtrend.application.context import AppContext

__all__ = [
    "BatchFetcher",
    "chunked",
    "HistorySynchronizer",
    "merge_rates",
    "CurrencyCatalog",
    "AppContext",
]
