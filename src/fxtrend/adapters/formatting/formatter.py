# src/fxtrend/adapters/formatting/formatter.py
"""
Message Formatter - Text Formatting and Presentation

This module handles all text shown to users: the compact panel label
(``USD/ZAR: 18.42 ▼ 0.13``), the coarse status strings, and the longer
Telegram replies for the rate, chart and currency list commands.

Users only ever see coarse states; exception text stays in the logs.

Files that USE this module:
- fxtrend.application.context (status strings)
- fxtrend.adapters.telegram.handlers (all reply texts)
- fxtrend.adapters.telegram.jobs (reset notices)
- tests.test_formatter (unit tests)

Files that this module USES:
- fxtrend.domain.models (RefreshResult, ZoomWindow)
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from fxtrend.domain.models import RefreshResult, ZoomWindow

# Coarse states
OK = "OK"
LOADING = "Loading…"
UPDATING = "Updating…"
NO_DATA = "No data"
ERROR = "Error"
CONFIG_ERROR = "Config Error"

FLAT_EPSILON = 1e-5

ARROW_FLAT = "▬"
ARROW_UP = "▲"
ARROW_DOWN = "▼"


def direction(diff: float) -> str:
    """
    Direction glyph for ``latest - previous``.

    A falling rate means fewer target units per base unit, i.e. the target
    currency got stronger, which is shown as ▲.

    Args:
        diff: latest - previous

    Returns:
        '▬' within ±1e-5, '▲' when the rate fell, '▼' when it rose
    """
    if abs(diff) <= FLAT_EPSILON:
        return ARROW_FLAT
    if diff < 0:
        return ARROW_UP
    return ARROW_DOWN


def _fmt_rate(rate: float) -> str:
    return f"{rate:.2f}"


def _fmt_pct(curr: float, prev: float) -> str:
    """
    Percentage change between two rates.

    Returns:
        '0.71%' style string, or '—' if prev <= 0
    """
    if prev <= 0:
        return "—"
    delta = (curr - prev) / prev * 100.0
    return f"{delta:+.2f}%"


def panel_label(result: Optional[RefreshResult]) -> str:
    """
    One-line summary: ``USD/ZAR: 18.42 ▼ 0.13``.

    The direction part is omitted when there is no previous value;
    ``No data`` is returned when the latest rate is unknown.
    """
    if result is None or result.latest is None:
        return NO_DATA
    label = f"{result.pair.label}: {_fmt_rate(result.latest)}"
    change = result.change
    if change is None:
        return label
    return f"{label} {direction(change)} {abs(change):.2f}"


def rate_message(result: Optional[RefreshResult], status: str) -> str:
    """
    Reply for /rate.

    Args:
        result: Last successful refresh (may be None)
        status: Current coarse status of the context

    Returns:
        Multi-line plain text
    """
    if result is None:
        return status if status != OK else NO_DATA

    lines = [panel_label(result)]
    if result.latest is not None and result.previous is not None:
        lines.append(f"Change vs previous day: {_fmt_pct(result.latest, result.previous)}")
    if result.points:
        lines.append(f"As of {result.points[-1].date}")
    if status not in (OK, NO_DATA):
        lines.append(f"({status})")
    return "\n".join(lines)


def chart_caption(result: RefreshResult, zoom: ZoomWindow) -> str:
    """Caption attached to a chart image, e.g. ``USD/ZAR · 1y``."""
    return f"{result.pair.label} · {zoom.key}"


def currencies_message(codes: Optional[Sequence[str]], per_line: int = 10) -> str:
    """
    Reply for /currencies.

    Args:
        codes: Supported identifiers, or None when the list is unavailable
        per_line: Identifiers per output line
    """
    if not codes:
        return "Currency list unavailable. Try again later."
    upper = [c.upper() for c in codes]
    rows = [" ".join(upper[i:i + per_line]) for i in range(0, len(upper), per_line)]
    return f"{len(upper)} supported currencies:\n" + "\n".join(rows)


def reset_message(notices: List[str]) -> str:
    """Chat notification after the configured pair was reset."""
    return "Currency settings changed:\n" + "\n".join(f"— {n}" for n in notices)


def help_text() -> str:
    return (
        "Commands:\n"
        "/rate — latest rate and direction\n"
        "/chart [1m|1y|max] — history chart (default 1m)\n"
        "/refresh — re-fetch today's rate\n"
        "/pair <BASE> <TARGET> — switch the tracked pair\n"
        "/currencies — list supported currencies\n"
        "/help — this message"
    )
