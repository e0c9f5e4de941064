# src/fxtrend/domain/errors.py
"""
Domain Errors - Fetch, Storage and Configuration Exceptions

This module defines the exception taxonomy shared by every layer. Adapters
translate library exceptions (httpx, OSError, json) into these types at
their boundary, so the application layer never sees third-party errors.

Files that USE this module:
- fxtrend.adapters.providers.session (transport errors, cancellation)
- fxtrend.adapters.providers.currency_api (NoDataError, ProviderError)
- fxtrend.adapters.persistence.file_store (StoreError)
- fxtrend.application.* (FetchError, ConfigError)
"""
from __future__ import annotations

from typing import Optional


class FxTrendError(Exception):
    """Base exception for all fxtrend errors."""
    pass


class TransportError(FxTrendError):
    """A single GET-and-parse-JSON request failed."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message} ({url})")
        self.url = url


class NetworkError(TransportError):
    """Transport, DNS or timeout failure."""
    pass


class HttpStatusError(TransportError):
    """The server answered with a non-success status."""

    def __init__(self, url: str, status: int):
        super().__init__(url, f"HTTP {status}")
        self.status = status


class EmptyResponseError(TransportError):
    """The server answered with an empty body."""
    pass


class ParseError(TransportError):
    """The body is not valid JSON."""
    pass


class RequestCancelledError(FxTrendError):
    """
    The request was aborted by the caller (session shutdown).

    Expected during disable/shutdown; never logged as a failure.
    """
    pass


class NoDataError(FxTrendError):
    """A well-formed response lacks the requested ``[base][target]`` value."""
    pass


class ProviderError(FxTrendError):
    """Both the primary and the fallback endpoint failed for one date."""

    def __init__(self, date: str, cause: Optional[BaseException] = None):
        super().__init__(f"No rate for {date}: {cause}")
        self.date = date
        self.cause = cause


class FetchError(FxTrendError):
    """A refresh failed at the operation level (not a per-date miss)."""
    pass


class StoreError(FxTrendError):
    """I/O failure on the on-disk cache."""
    pass


class ConfigError(FxTrendError):
    """Invalid or missing currency configuration."""
    pass
