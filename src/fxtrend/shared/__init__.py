# src/fxtrend/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from fxtrend.shared.validators import (
    validate_bot_token,
    validate_chat_id,
    validate_currency_code,
    validate_url_template,
)
from fxtrend.shared.logging_conf import setup_logging

__all__ = [
    "validate_bot_token",
    "validate_chat_id",
    "validate_currency_code",
    "validate_url_template",
    "setup_logging",
]
