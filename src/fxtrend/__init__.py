# src/fxtrend/__init__.py
"""
FxTrend - Exchange Rate History Tracker and Chart Renderer

Keeps a local, continuously extended history of one exchange rate pair
sourced from the free currency-api CDN (with its Cloudflare fallback),
and renders that history as a line chart over 1M / 1Y / Max windows.
"""

__version__ = "0.3.0"
