# src/fxtrend/adapters/charting/png.py
"""
PNG Rasteriser - Replays a ChartDrawing with matplotlib

The only code in the project that touches a drawing surface. A figure of
exactly ``width x height`` pixels gets a single borderless axes whose data
coordinates are the pixel grid (origin top-left, y downwards), so every
instruction maps 1:1. Sizes given in pixels (font sizes, line widths) are
converted to points for matplotlib.

Files that USE this module:
- fxtrend.adapters.telegram.handlers (/chart sends the PNG)
- tests.test_chart_renderer (smoke test)

Files that this module USES:
- fxtrend.adapters.charting.primitives (instruction types)
- fxtrend.adapters.charting.renderer (placeholder colours)
"""
from __future__ import annotations

import logging
from io import BytesIO

import matplotlib

matplotlib.use("Agg")

from matplotlib.backends.backend_agg import FigureCanvasAgg  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402
from matplotlib.lines import Line2D  # noqa: E402
from matplotlib.patches import Circle as CirclePatch  # noqa: E402
from matplotlib.patches import Polygon as PolygonPatch  # noqa: E402
from matplotlib.patches import Rectangle  # noqa: E402

from fxtrend.adapters.charting.primitives import (  # noqa: E402
    ChartDrawing,
    Circle,
    Line,
    Placeholder,
    Polygon,
    Polyline,
    Rect,
    Text,
)
from fxtrend.adapters.charting.renderer import BACKGROUND  # noqa: E402

log = logging.getLogger(__name__)

PLACEHOLDER_COLOR = (0.8, 0.8, 0.8, 1.0)

_HA = {"start": "left", "middle": "center", "end": "right"}


def to_png(drawing: ChartDrawing, dpi: int = 100) -> bytes:
    """
    Rasterise ``drawing`` to PNG bytes.

    Args:
        drawing: Instructions produced by the renderer
        dpi: Resolution used to convert pixel sizes to points

    Returns:
        PNG image of exactly ``drawing.width`` x ``drawing.height`` pixels
    """
    width, height = drawing.width, drawing.height
    pt = 72.0 / dpi  # points per pixel

    fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    FigureCanvasAgg(fig)
    fig.patch.set_alpha(0.0)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_axis_off()

    for item in drawing.instructions:
        if isinstance(item, Rect):
            ax.add_patch(Rectangle((item.x, item.y), item.width, item.height,
                                   facecolor=item.fill, edgecolor="none"))
        elif isinstance(item, Line):
            ax.add_line(Line2D([item.x1, item.x2], [item.y1, item.y2],
                               color=item.color, linewidth=item.width * pt))
        elif isinstance(item, Polyline):
            xs = [p[0] for p in item.points]
            ys = [p[1] for p in item.points]
            ax.add_line(Line2D(xs, ys, color=item.color, linewidth=item.width * pt,
                               solid_joinstyle="round"))
        elif isinstance(item, Polygon):
            ax.add_patch(PolygonPatch(list(item.points), closed=True,
                                      facecolor=item.fill, edgecolor="none"))
        elif isinstance(item, Circle):
            ax.add_patch(CirclePatch((item.cx, item.cy), item.radius,
                                     facecolor=item.fill, edgecolor="none"))
        elif isinstance(item, Text):
            ax.text(item.x, item.y, item.text, color=item.color,
                    fontsize=item.size * pt, fontweight="bold" if item.bold else "normal",
                    ha=_HA.get(item.anchor, "left"), va="baseline",
                    rotation=-item.rotation, rotation_mode="anchor")
        elif isinstance(item, Placeholder):
            ax.add_patch(Rectangle((0, 0), width, height, facecolor=BACKGROUND, edgecolor="none"))
            ax.text(width / 2, height / 2, item.message, color=PLACEHOLDER_COLOR,
                    fontsize=12 * pt, ha="center", va="center")
        else:
            log.warning("Skipping unknown draw instruction %r", item)

    buf = BytesIO()
    fig.savefig(buf, format="png", dpi=dpi)
    return buf.getvalue()
