# src/fxtrend/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (currency-api over HTTP)
- Persistence (JSON cache files)
- Charting (draw instructions, PNG)
- Formatting (output text)
- Telegram (bot interface)
"""

__all__ = []
