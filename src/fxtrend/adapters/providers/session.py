# src/fxtrend/adapters/providers/session.py
"""
HTTP Session - Abortable Asynchronous GET-and-parse-JSON

This module wraps one shared httpx.AsyncClient and exposes the single
primitive the providers need: GET a URL and return its parsed JSON body.
Every failure is translated into the domain transport taxonomy, and the
whole session can be aborted on shutdown, in which case every in-flight
request resolves with RequestCancelledError instead of a data error.

Files that USE this module:
- fxtrend.adapters.providers.currency_api (CurrencyApiProvider issues requests through it)
- fxtrend.application.context (owns the session, aborts it on shutdown)
- tests.test_providers (unit tests with httpx.MockTransport)

Files that this module USES:
- fxtrend.domain.errors (transport errors and RequestCancelledError)
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Set

import httpx

from fxtrend.domain.errors import (
    EmptyResponseError,
    HttpStatusError,
    NetworkError,
    ParseError,
    RequestCancelledError,
)

log = logging.getLogger(__name__)


class HttpSession:
    """Shared, abortable HTTP session returning parsed JSON."""

    def __init__(self, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the session.

        Args:
            timeout: Per-request timeout in seconds (ignored when ``client`` is given)
            client: Optional pre-built client (tests pass one with a MockTransport)
        """
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._inflight: Set[asyncio.Task] = set()
        self._aborted = False

    @property
    def aborted(self) -> bool:
        return self._aborted

    async def get_json(self, url: str) -> Any:
        """
        GET ``url`` and return the decoded JSON body.

        Args:
            url: Absolute URL to fetch

        Returns:
            Parsed JSON value

        Raises:
            NetworkError: Transport, DNS or timeout failure
            HttpStatusError: Non-200 response
            EmptyResponseError: 200 with an empty body
            ParseError: Body is not valid JSON
            RequestCancelledError: The session was aborted
        """
        if self._aborted:
            raise RequestCancelledError(f"Request was cancelled: {url}")

        task = asyncio.create_task(self._client.get(url))
        self._inflight.add(task)
        try:
            resp = await task
        except asyncio.CancelledError:
            if self._aborted and task.cancelled():
                raise RequestCancelledError(f"Request was cancelled: {url}") from None
            raise
        except httpx.TimeoutException as e:
            raise NetworkError(url, f"Timeout: {e}") from e
        except httpx.HTTPError as e:
            if self._aborted:
                raise RequestCancelledError(f"Request was cancelled: {url}") from e
            raise NetworkError(url, f"Request failed: {e}") from e
        finally:
            self._inflight.discard(task)

        if resp.status_code != 200:
            raise HttpStatusError(url, resp.status_code)
        if not resp.content:
            raise EmptyResponseError(url, "Empty response")
        try:
            return resp.json()
        except ValueError as e:
            raise ParseError(url, f"Invalid JSON: {e}") from e

    def abort(self) -> None:
        """Cancel every in-flight request; later requests fail fast."""
        self._aborted = True
        pending = [t for t in self._inflight if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            log.info("Aborted %d in-flight request(s)", len(pending))

    async def aclose(self) -> None:
        """Abort outstanding requests and close the underlying client."""
        self.abort()
        await self._client.aclose()
