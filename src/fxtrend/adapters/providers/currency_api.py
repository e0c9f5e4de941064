# src/fxtrend/adapters/providers/currency_api.py
"""
currency-api Provider for Daily Historical Exchange Rates

This module implements the client for the free fawazahmed0 currency-api.
Each date is published as a static JSON file per base currency on the
jsDelivr CDN, mirrored on Cloudflare Pages. A request tries the CDN first
and falls back to the mirror once; there are no further retries here, the
next synchronisation pass picks missed dates up again.

Files that USE this module:
- fxtrend.application.context (builds the provider for the batch fetcher)
- tests.test_providers (unit tests)

Files that this module USES:
- fxtrend.adapters.providers.base (RateProvider interface)
- fxtrend.adapters.providers.session (HttpSession for JSON requests)
- fxtrend.config.settings (default endpoint URLs)
- fxtrend.domain.errors (NoDataError, ProviderError, RequestCancelledError)
"""
import logging
import math
from typing import Any, Awaitable, Callable, Dict, Optional

from fxtrend.adapters.providers.base import RateProvider
from fxtrend.adapters.providers.session import HttpSession
from fxtrend.config.settings import (
    CDN_URL_TEMPLATE,
    CURRENCY_LIST_FALLBACK_URL,
    CURRENCY_LIST_URL,
    FALLBACK_URL_TEMPLATE,
)
from fxtrend.domain.errors import NoDataError, ProviderError, RequestCancelledError

log = logging.getLogger(__name__)


def extract_rate(body: Any, base: str, target: str) -> float:
    """
    Pull ``body[base][target]`` out of a currency-api response.

    Args:
        body: Decoded JSON, e.g. ``{"date": "2025-01-02", "usd": {"zar": 18.7, ...}}``
        base: Base identifier (lowercase)
        target: Target identifier (lowercase)

    Returns:
        The rate as float

    Raises:
        NoDataError: If the key path is missing or the value is not a non-negative number
    """
    try:
        raw = body[base][target]
    except (KeyError, TypeError) as e:
        raise NoDataError(f"Response has no {base}/{target} value") from e
    if raw is None or isinstance(raw, bool):
        raise NoDataError(f"Response has a null {base}/{target} value")
    try:
        rate = float(raw)
    except (TypeError, ValueError) as e:
        raise NoDataError(f"Non-numeric {base}/{target} value: {raw!r}") from e
    if rate < 0 or math.isnan(rate):
        raise NoDataError(f"Invalid {base}/{target} value: {raw!r}")
    return rate


class CurrencyApiProvider(RateProvider):
    """Primary CDN + fallback mirror client for currency-api."""

    def __init__(
        self,
        session: HttpSession,
        primary_template: str = CDN_URL_TEMPLATE,
        fallback_template: str = FALLBACK_URL_TEMPLATE,
        list_url: str = CURRENCY_LIST_URL,
        list_fallback_url: str = CURRENCY_LIST_FALLBACK_URL,
    ):
        """
        Initialize currency-api provider.

        Args:
            session: Shared HttpSession used for every request
            primary_template: Rate URL with ``{date}`` and ``{base}`` placeholders
            fallback_template: Mirror URL with the same placeholders
            list_url: Currency list URL
            list_fallback_url: Mirror of the currency list
        """
        self.session = session
        self.primary_template = primary_template
        self.fallback_template = fallback_template
        self.list_url = list_url
        self.list_fallback_url = list_fallback_url

    def primary_url(self, date: str, base: str) -> str:
        return self.primary_template.format(date=date, base=base)

    def fallback_url(self, date: str, base: str) -> str:
        return self.fallback_template.format(date=date, base=base)

    async def _with_fallback(
        self,
        label: str,
        attempt: Callable[[str], Awaitable[Any]],
        primary: str,
        fallback: str,
    ) -> Any:
        """
        Run ``attempt`` on the primary URL, then once on the fallback.

        Cancellation is never retried; any other failure of the primary is
        logged at debug level and the fallback result (or error) wins.
        """
        try:
            return await attempt(primary)
        except RequestCancelledError:
            raise
        except Exception as e:
            log.debug("Primary endpoint failed for %s, trying fallback: %s", label, e)
        return await attempt(fallback)

    async def fetch_rate(self, date: str, base: str, target: str) -> float:
        """
        Get the ``target`` per 1 ``base`` rate for ``date``.

        Args:
            date: ISO date (or ``latest``)
            base: Base identifier
            target: Target identifier

        Returns:
            Rate as float

        Raises:
            ProviderError: If both endpoints failed (carries the last cause)
            RequestCancelledError: If the session was aborted
        """
        base = base.lower()
        target = target.lower()

        async def attempt(url: str) -> float:
            body = await self.session.get_json(url)
            return extract_rate(body, base, target)

        try:
            return await self._with_fallback(
                date, attempt, self.primary_url(date, base), self.fallback_url(date, base)
            )
        except RequestCancelledError:
            raise
        except Exception as e:
            raise ProviderError(date, e) from e

    async def fetch_currencies(self) -> Dict[str, str]:
        """
        Get every supported currency identifier and its display name.

        Returns:
            Mapping of lowercase identifier to display name

        Raises:
            ProviderError: If both endpoints failed or returned a non-object
            RequestCancelledError: If the session was aborted
        """
        async def attempt(url: str) -> Dict[str, str]:
            body = await self.session.get_json(url)
            if not isinstance(body, dict) or not body:
                raise NoDataError("Currency list is not a non-empty JSON object")
            return {str(k).lower(): str(v) for k, v in body.items()}

        try:
            currencies = await self._with_fallback(
                "currency list", attempt, self.list_url, self.list_fallback_url
            )
        except RequestCancelledError:
            raise
        except Exception as e:
            raise ProviderError("latest", e) from e

        log.info("Currency list fetched: %d identifiers", len(currencies))
        return currencies


def build_provider(session: HttpSession, settings: Optional[Any] = None) -> CurrencyApiProvider:
    """
    Build a provider from Settings (or with the public endpoints when None).

    Args:
        session: Shared HttpSession
        settings: Optional fxtrend.config.Settings instance
    """
    if settings is None:
        return CurrencyApiProvider(session)
    return CurrencyApiProvider(
        session,
        primary_template=settings.primary_url_template,
        fallback_template=settings.fallback_url_template,
        list_url=settings.currency_list_url,
        list_fallback_url=settings.currency_list_fallback_url,
    )
