# src/fxtrend/adapters/formatting/__init__.py
"""
Formatting Adapters - Message Formatting

This package contains text formatting for the panel label and Telegram
replies.
"""

from fxtrend.adapters.formatting.formatter import (
    CONFIG_ERROR,
    ERROR,
    LOADING,
    NO_DATA,
    OK,
    UPDATING,
    direction,
    panel_label,
    rate_message,
)

__all__ = [
    "direction",
    "panel_label",
    "rate_message",
    "OK",
    "LOADING",
    "UPDATING",
    "NO_DATA",
    "ERROR",
    "CONFIG_ERROR",
]
