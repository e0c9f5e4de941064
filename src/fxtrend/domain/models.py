# src/fxtrend/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains the value objects the rest of the application passes
around:
- Currency pairs and chart points
- Zoom windows (date sampling + chart cutoff)
- Refresh results and the previous-rate baseline policy

Files that USE this module:
- fxtrend.domain.date_ranges (ZoomWindow)
- fxtrend.application.* (CurrencyPair, ChartPoint, RefreshResult)
- fxtrend.adapters.* (adapters consume the results)
- tests.* (tests build domain objects directly)

Files that this module USES:
- fxtrend.domain.errors (ConfigError for invalid pairs)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass  # Decorator for creating data classes
from datetime import date  # Calendar dates for refresh results
from enum import Enum  # Fixed enumerations for zoom windows and policies
from typing import Any, Optional, Tuple  # Type hints

from fxtrend.domain.errors import ConfigError


@dataclass(frozen=True)
class CurrencyPair:
    """
    A (base, target) identifier tuple whose ratio is tracked.

    Identifiers are case-insensitive; they are stored lowercase so that
    cache keys and API URLs are canonical.
    """
    base: str
    target: str

    def __post_init__(self) -> None:
        base = (self.base or "").strip().lower()
        target = (self.target or "").strip().lower()
        if not base or not target:
            raise ConfigError("Both base and target currency must be set")
        object.__setattr__(self, "base", base)
        object.__setattr__(self, "target", target)

    @property
    def label(self) -> str:
        """Display form, e.g. ``USD/ZAR``."""
        return f"{self.base.upper()}/{self.target.upper()}"


@dataclass(frozen=True)
class ChartPoint:
    """One (ISO date, rate) sample of the chart series."""
    date: str
    rate: float


@dataclass(frozen=True)
class CacheEnvelope:
    """
    Timestamp + payload wrapper around every persisted blob.

    Attributes:
        ts: Write time, seconds since epoch
        data: Opaque JSON-serialisable payload
    """
    ts: float
    data: Any

    def age(self, now: float) -> float:
        return now - self.ts


class ZoomWindow(Enum):
    """
    Fixed set of chart windows.

    Each member carries (key, days, step):
    - days/step drive which dates are required from the provider
    - daily windows show their last ``days`` dates, stepped windows show everything
    """
    MONTH = ("1m", 30, 1)
    YEAR = ("1y", 365, 1)
    MAX = ("max", 365 * 5, 7)

    def __init__(self, key: str, days: int, step: int):
        self.key = key
        self.days = days
        self.step = step

    @property
    def bounded(self) -> bool:
        """Stepped windows stop at the provider's earliest available date."""
        return self.step > 1

    @classmethod
    def from_key(cls, key: str) -> "ZoomWindow":
        """
        Look up a window by its short key (``1m``, ``1y``, ``max``).

        Raises:
            ValueError: If the key is unknown
        """
        normalized = (key or "").strip().lower()
        for window in cls:
            if window.key == normalized:
                return window
        raise ValueError(f"Unknown zoom window: {key!r}")


class PreviousBaseline(str, Enum):
    """
    Which stored rate the direction indicator compares against.

    DAILY_SLOT: the second date of the daily window (yesterday), even when
        it has no value.
    PRIOR_AVAILABLE: the most recent required date older than today that
        has a value.
    """
    DAILY_SLOT = "daily_slot"
    PRIOR_AVAILABLE = "prior_available"


@dataclass(frozen=True)
class RefreshResult:
    """
    Outcome of one synchronisation pass for a pair.

    Attributes:
        pair: The pair that was refreshed
        points: Known values for the required dates, oldest first
        latest: Rate for the newest required date, None when unavailable
        previous: Baseline rate for the direction indicator
        today: The "today" the required dates were computed from
        fetched: Number of dates the provider returned in this pass
        requested: Number of dates that were missing before the pass
    """
    pair: CurrencyPair
    points: Tuple[ChartPoint, ...]
    latest: Optional[float]
    previous: Optional[float]
    today: date
    fetched: int = 0
    requested: int = 0

    @property
    def has_data(self) -> bool:
        return self.latest is not None

    @property
    def change(self) -> Optional[float]:
        """latest - previous when both are known."""
        if self.latest is None or self.previous is None:
            return None
        return self.latest - self.previous
