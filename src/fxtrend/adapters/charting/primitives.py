# src/fxtrend/adapters/charting/primitives.py
"""
Chart Primitives - Backend-Neutral Draw Instructions

The renderer emits these in paint order; a rasteriser (see png.py) replays
them onto a concrete surface. Coordinates are pixels with the origin at the
top-left corner and y growing downwards. Colours are RGBA tuples with
components in 0..1.

Files that USE this module:
- fxtrend.adapters.charting.renderer (builds instruction lists)
- fxtrend.adapters.charting.png (rasterises them)
- tests.test_chart_renderer (inspects instructions)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union

RGBA = Tuple[float, float, float, float]
Point = Tuple[float, float]


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: RGBA


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGBA
    width: float = 1.0


@dataclass(frozen=True)
class Polyline:
    points: Tuple[Point, ...]
    color: RGBA
    width: float = 1.0


@dataclass(frozen=True)
class Polygon:
    """Closed, filled shape; the last point connects back to the first."""
    points: Tuple[Point, ...]
    fill: RGBA


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    radius: float
    fill: RGBA


@dataclass(frozen=True)
class Text:
    """
    A single line of text anchored at (x, y).

    ``anchor`` is ``start``, ``middle`` or ``end`` along the baseline;
    ``rotation`` is in degrees, clockwise on screen, around the anchor.
    """
    x: float
    y: float
    text: str
    color: RGBA
    size: float = 10.0
    bold: bool = False
    anchor: str = "start"
    rotation: float = 0.0


@dataclass(frozen=True)
class Placeholder:
    """Stands in for the whole chart when there is not enough data."""
    message: str


Instruction = Union[Rect, Line, Polyline, Polygon, Circle, Text, Placeholder]


@dataclass
class ChartDrawing:
    """Canvas size plus the ordered instruction list."""
    width: int
    height: int
    instructions: List[Instruction] = field(default_factory=list)

    def add(self, instruction: Instruction) -> None:
        self.instructions.append(instruction)

    def of_type(self, kind: type) -> List[Instruction]:
        return [i for i in self.instructions if isinstance(i, kind)]

    @property
    def is_placeholder(self) -> bool:
        return len(self.instructions) == 1 and isinstance(self.instructions[0], Placeholder)
