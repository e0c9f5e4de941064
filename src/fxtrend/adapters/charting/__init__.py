# src/fxtrend/adapters/charting/__init__.py
"""
Charting Adapters - Rate History Charts

This package contains the pure chart renderer, its draw instruction
types and the matplotlib PNG rasteriser.
"""

from fxtrend.adapters.charting.primitives import ChartDrawing, Placeholder
from fxtrend.adapters.charting.renderer import render, visible_points

__all__ = [
    "ChartDrawing",
    "Placeholder",
    "render",
    "visible_points",
]
