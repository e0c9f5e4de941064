# src/fxtrend/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains the JSON file store holding rate histories and
TTL-gated markers.
"""

from fxtrend.adapters.persistence.file_store import (
    CURRENCY_LIST_KEY,
    PAIR_PREFERENCE_KEY,
    HistoryStore,
    history_key,
    today_key,
)

__all__ = [
    "HistoryStore",
    "history_key",
    "today_key",
    "CURRENCY_LIST_KEY",
    "PAIR_PREFERENCE_KEY",
]
