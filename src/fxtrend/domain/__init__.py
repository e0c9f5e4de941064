# src/fxtrend/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models, the date range generator and the
error taxonomy. No dependencies on infrastructure or external systems.
"""

from fxtrend.domain.models import (
    CacheEnvelope,
    ChartPoint,
    CurrencyPair,
    PreviousBaseline,
    RefreshResult,
    ZoomWindow,
)
from fxtrend.domain.date_ranges import DateRangeGenerator, iso_date, parse_iso_date
from fxtrend.domain.errors import (
    ConfigError,
    EmptyResponseError,
    FetchError,
    FxTrendError,
    HttpStatusError,
    NetworkError,
    NoDataError,
    ParseError,
    ProviderError,
    RequestCancelledError,
    StoreError,
    TransportError,
)

__all__ = [
    "CacheEnvelope",
    "ChartPoint",
    "CurrencyPair",
    "PreviousBaseline",
    "RefreshResult",
    "ZoomWindow",
    "DateRangeGenerator",
    "iso_date",
    "parse_iso_date",
    "FxTrendError",
    "TransportError",
    "NetworkError",
    "HttpStatusError",
    "EmptyResponseError",
    "ParseError",
    "RequestCancelledError",
    "NoDataError",
    "ProviderError",
    "FetchError",
    "StoreError",
    "ConfigError",
]
