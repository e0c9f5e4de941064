# src/fxtrend/adapters/persistence/file_store.py
"""
File Store - Rate History and Marker Persistence

This module persists the per-pair rate history and small auxiliary markers
(today-busted flags, the currency list, the chosen pair) as JSON files in
the per-user cache directory. Every file holds one envelope:

    {"ts": <unix seconds>, "data": <payload>}

Writes go to a temp file in the same directory and are renamed into place,
so a reader never observes a half-written file. Reads never raise: a
missing, unreadable or corrupt file is treated as absent.

Files that USE this module:
- fxtrend.application.history_sync (HistorySynchronizer loads/saves history)
- fxtrend.application.currency_list (currency list marker)
- fxtrend.application.context (pair preference marker)
- tests.test_file_store (unit tests)

Files that this module USES:
- fxtrend.domain.models (CacheEnvelope, CurrencyPair)
- fxtrend.domain.errors (StoreError)
"""
from __future__ import annotations

import json
import logging
import math
import os
import shutil
import tempfile
import time
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from fxtrend.domain.errors import StoreError
from fxtrend.domain.models import CacheEnvelope, CurrencyPair

log = logging.getLogger(__name__)

CURRENCY_LIST_KEY = "currency-list"
PAIR_PREFERENCE_KEY = "pair-preference"


def history_key(pair: CurrencyPair) -> str:
    return f"history-{pair.base}-{pair.target}"


def today_key(pair: CurrencyPair) -> str:
    return f"today-{pair.base}-{pair.target}"


def _valid_entry(day: Any, rate: Any) -> bool:
    """A history entry is an ISO date mapped to a finite, non-negative number."""
    if not isinstance(day, str) or isinstance(rate, bool) or not isinstance(rate, (int, float)):
        return False
    try:
        date.fromisoformat(day)
    except ValueError:
        return False
    return rate >= 0 and math.isfinite(rate)


class HistoryStore:
    """Durable mapping from currency pair to its date -> rate series."""

    def __init__(self, cache_dir: Path, clock: Callable[[], float] = time.time):
        """
        Initialize the store.

        Args:
            cache_dir: Directory holding one JSON file per key
            clock: Returns seconds since epoch (injected for tests)
        """
        self.cache_dir = Path(cache_dir)
        self.clock = clock

    def _path(self, key: str) -> Path:
        return self.cache_dir / f"{key}.json"

    # --- envelopes ---

    def _read_envelope(self, key: str) -> Optional[CacheEnvelope]:
        """
        Read the envelope stored under ``key``.

        Corrupt JSON is moved aside to ``<key>.json.corrupt`` so the next
        write starts from a clean file.

        Returns:
            CacheEnvelope if the file exists and is well-formed, None otherwise
        """
        p = self._path(key)
        if not p.exists():
            return None

        try:
            with p.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            backup_path = p.with_suffix(".json.corrupt")
            try:
                shutil.move(str(p), str(backup_path))
                log.warning("Cache file %s corrupted, moved to %s: %s", p.name, backup_path.name, e)
            except OSError as backup_error:
                log.error("Failed to move corrupt cache file %s aside: %s", p.name, backup_error)
            return None
        except (OSError, UnicodeDecodeError) as e:
            log.error("Failed to read cache file %s: %s", p.name, e)
            return None

        if not isinstance(raw, dict) or "data" not in raw:
            log.warning("Cache file %s has no envelope, ignoring", p.name)
            return None
        try:
            ts = float(raw.get("ts", 0))
        except (TypeError, ValueError):
            log.warning("Cache file %s has an invalid timestamp, ignoring", p.name)
            return None
        return CacheEnvelope(ts=ts, data=raw["data"])

    def _write_envelope(self, key: str, payload: Any) -> None:
        """
        Atomically replace the file for ``key`` with a fresh envelope.

        Raises:
            StoreError: If the directory cannot be created or the write fails
        """
        p = self._path(key)
        envelope = {"ts": self.clock(), "data": payload}

        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                prefix=f".{key}.", suffix=".json.tmp", dir=str(self.cache_dir), text=True
            )
        except OSError as e:
            raise StoreError(f"Failed to prepare cache file {p.name}: {e}") from e

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(envelope, f, ensure_ascii=False, separators=(",", ":"))
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, str(p))
        except (OSError, TypeError, ValueError) as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StoreError(f"Failed to write cache file {p.name}: {e}") from e

    # --- history ---

    def load(self, pair: CurrencyPair) -> Dict[str, float]:
        """
        Load the rate series of ``pair``.

        Returns:
            Mapping of ISO date to rate; empty if absent or unreadable.
            Invalid entries are dropped.
        """
        envelope = self._read_envelope(history_key(pair))
        if envelope is None:
            return {}
        if not isinstance(envelope.data, dict):
            log.warning("History for %s is not a mapping, ignoring", pair.label)
            return {}

        series = {d: float(r) for d, r in envelope.data.items() if _valid_entry(d, r)}
        dropped = len(envelope.data) - len(series)
        if dropped:
            log.warning("Dropped %d invalid history entries for %s", dropped, pair.label)
        return series

    def save(self, pair: CurrencyPair, series: Dict[str, float]) -> None:
        """
        Atomically persist the rate series of ``pair``.

        Raises:
            StoreError: If the write fails (the previous file stays intact)
        """
        ordered = {d: series[d] for d in sorted(series)}
        self._write_envelope(history_key(pair), ordered)
        log.debug("Saved %d history entries for %s", len(ordered), pair.label)

    # --- markers ---

    def read_marker(self, key: str, max_age: float = math.inf) -> Optional[Any]:
        """
        TTL-gated read of an auxiliary blob.

        Args:
            key: Marker name (file stem)
            max_age: Maximum age in seconds

        Returns:
            The payload if present and not older than ``max_age``, None otherwise.
            A timestamp in the future (clock went backwards) counts as expired.
        """
        envelope = self._read_envelope(key)
        if envelope is None:
            return None
        age = envelope.age(self.clock())
        if age < 0:
            log.debug("Marker %s is from the future (age=%.0fs), treating as expired", key, age)
            return None
        if age > max_age:
            return None
        return envelope.data

    def write_marker(self, key: str, payload: Any) -> None:
        """
        Persist an auxiliary blob under ``key``.

        Raises:
            StoreError: If the write fails
        """
        self._write_envelope(key, payload)
