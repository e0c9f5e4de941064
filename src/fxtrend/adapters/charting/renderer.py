# src/fxtrend/adapters/charting/renderer.py
"""
Chart Renderer - Rate History as Draw Instructions

This module turns a chronological point series into a scaled line chart
for one zoom window. It is a pure function: no I/O, no drawing surface,
only a ChartDrawing whose instructions a rasteriser can replay.

Layout (pixels):

    +-- pad.t = 24 ------------- title -------------+
    | labels |  gridlines, area, curve, markers     | pad.r = 20
    | pad.l  |                                      |
    |  = 72  +--------------------------------------+
    |          ticks + rotated date labels (pad.b = 64)
    +-----------------------------------------------+

Files that USE this module:
- fxtrend.adapters.telegram.handlers (/chart renders then rasterises)
- tests.test_chart_renderer (unit tests)

Files that this module USES:
- fxtrend.adapters.charting.primitives (draw instructions)
- fxtrend.domain.models (ChartPoint, ZoomWindow)
- fxtrend.domain.date_ranges (parse_iso_date)
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Sequence, Set

from fxtrend.adapters.charting.primitives import (
    ChartDrawing,
    Circle,
    Line,
    Placeholder,
    Polygon,
    Polyline,
    Rect,
    Text,
)
from fxtrend.domain.date_ranges import parse_iso_date
from fxtrend.domain.models import ChartPoint, ZoomWindow

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

NOT_ENOUGH_DATA = "Not enough data for this range"

GRID_DIVISIONS = 5  # 5 divisions, 6 gridlines counting both edges
VALUE_PADDING = 0.1
LABEL_BUDGET_PX = 52
MARKER_MAX_POINTS = 30
MARKER_RADIUS = 3.0
TICK_LENGTH = 4.0
TICK_LABEL_OFFSET = 10.0
TICK_LABEL_ROTATION = 30.0

BACKGROUND = (0.1, 0.1, 0.1, 0.9)
AXIS = (0.5, 0.5, 0.5, 1.0)
GRID = (0.25, 0.25, 0.25, 0.6)
LABEL = (1.0, 1.0, 1.0, 1.0)
TITLE = (0.85, 0.85, 0.85, 1.0)
AREA = (0.5, 0.8, 1.0, 0.08)
CURVE = (0.5, 0.8, 1.0, 1.0)
MARKER = (0.3, 0.6, 1.0, 1.0)


@dataclass(frozen=True)
class Padding:
    t: int = 24
    r: int = 20
    b: int = 64
    l: int = 72  # noqa: E741


PADDING = Padding()


def visible_points(
    points: Sequence[ChartPoint], zoom: ZoomWindow, today: Optional[date] = None
) -> List[ChartPoint]:
    """
    Points inside the zoom window, oldest first.

    Daily windows keep the last ``zoom.days`` calendar dates ending at
    ``today`` (30 for MONTH, 365 for YEAR); stepped windows keep all.
    ``today`` defaults to the date of the newest point.
    """
    if zoom.step > 1 or not points:
        return list(points)
    if today is None:
        today = parse_iso_date(points[-1].date)
    cutoff = (today - timedelta(days=zoom.days - 1)).isoformat()
    return [p for p in points if p.date >= cutoff]


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def label_indices(count: int, plot_width: float) -> Set[int]:
    """
    Indices of the points whose date label is drawn.

    As many labels as fit at ``LABEL_BUDGET_PX`` each (never fewer than
    two), first and last always included, the rest spread evenly by index.
    """
    if count <= 0:
        return set()
    last = count - 1
    max_labels = max(2, int(plot_width // LABEL_BUDGET_PX))
    shown = {0, last}
    step = last / (max_labels - 1)
    for i in range(1, max_labels - 1):
        shown.add(_round_half_up(i * step))
    return shown


def spans_years(points: Sequence[ChartPoint]) -> bool:
    return points[0].date[:4] != points[-1].date[:4]


def date_label(iso: str, with_year: bool = False) -> str:
    """``2025-01-03`` -> ``3 Jan`` (or ``3 Jan 25`` with the year)."""
    day = parse_iso_date(iso)
    label = f"{day.day} {MONTHS[day.month - 1]}"
    if with_year:
        label = f"{label} {day.year % 100:02d}"
    return label


def render(
    points: Sequence[ChartPoint],
    zoom: ZoomWindow,
    width: int,
    height: int,
    *,
    today: Optional[date] = None,
) -> ChartDrawing:
    """
    Render ``points`` for ``zoom`` on a ``width`` x ``height`` canvas.

    Args:
        points: Chronological (oldest first) series
        zoom: Window selecting which points are visible
        width: Canvas width in pixels
        height: Canvas height in pixels
        today: Reference date for the window cutoff (default: newest point)

    Returns:
        ChartDrawing; a single Placeholder when fewer than two points are visible
    """
    drawing = ChartDrawing(width=width, height=height)
    pts = visible_points(points, zoom, today)
    if len(pts) < 2:
        drawing.add(Placeholder(NOT_ENOUGH_DATA))
        return drawing

    pad = PADDING
    cw = width - pad.l - pad.r
    ch = height - pad.t - pad.b
    bottom = height - pad.b
    right = width - pad.r

    rates = [p.rate for p in pts]
    lo, hi = min(rates), max(rates)
    span = (hi - lo) or 1.0
    y_lo = lo - span * VALUE_PADDING
    y_hi = hi + span * VALUE_PADDING
    y_span = y_hi - y_lo
    n = len(pts)

    def x_of(i: int) -> float:
        return pad.l + (i / (n - 1)) * cw

    def y_of(rate: float) -> float:
        return pad.t + ((y_hi - rate) / y_span) * ch

    drawing.add(Rect(0, 0, width, height, fill=BACKGROUND))

    # axes
    drawing.add(Line(pad.l, pad.t, pad.l, bottom, color=AXIS))
    drawing.add(Line(pad.l, bottom, right, bottom, color=AXIS))

    for i in range(GRID_DIVISIONS + 1):
        frac = i / GRID_DIVISIONS
        y = pad.t + frac * ch
        value = y_hi - frac * y_span
        drawing.add(Line(pad.l, y, right, y, color=GRID, width=0.5))
        drawing.add(Text(4, y + 4, f"{value:.2f}", color=LABEL, size=11, bold=True))

    curve = tuple((x_of(i), y_of(p.rate)) for i, p in enumerate(pts))
    drawing.add(Polygon(curve + ((x_of(n - 1), bottom), (x_of(0), bottom)), fill=AREA))
    drawing.add(Polyline(curve, color=CURVE, width=2))

    if n <= MARKER_MAX_POINTS:
        for x, y in curve:
            drawing.add(Circle(x, y, MARKER_RADIUS, fill=MARKER))

    with_year = spans_years(pts)
    shown = label_indices(n, cw)
    for i, p in enumerate(pts):
        x = x_of(i)
        drawing.add(Line(x, bottom, x, bottom + TICK_LENGTH, color=AXIS))
        if i in shown:
            drawing.add(Text(
                x, bottom + TICK_LABEL_OFFSET, date_label(p.date, with_year),
                color=LABEL, size=10, bold=True, rotation=TICK_LABEL_ROTATION,
            ))

    title = f"{date_label(pts[0].date, with_year)} – {date_label(pts[-1].date, with_year)}"
    drawing.add(Text(width / 2, pad.t - 7, title, color=TITLE, size=11, bold=True, anchor="middle"))
    return drawing
