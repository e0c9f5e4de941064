# src/fxtrend/config/__init__.py
"""
Configuration Module

Provides centralized configuration management using Pydantic Settings.
Supports environment variables and an optional ``.env`` file.
"""

from fxtrend.config.settings import PROVIDER_EARLIEST_DATE, Settings

__all__ = ["Settings", "PROVIDER_EARLIEST_DATE"]
