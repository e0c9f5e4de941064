# src/fxtrend/shared/validators.py
"""
Input Validation Utilities - Configuration and Command Validation

This module validates bot tokens, chat IDs, currency identifiers and URL
templates so that bad configuration or user input is rejected at the
boundary before it reaches the core.

Files that USE this module:
- fxtrend.config.settings (Settings field validators)
- fxtrend.application.context (/pair and stored preference validation)

Files that this module USES:
- None (pure utility functions)
"""
import re

# currency-api identifiers are lowercase alphanumerics (usd, zar, 1inch, ...)
_CURRENCY_RE = re.compile(r"^[a-z0-9]{2,12}$")


def validate_chat_id(chat_id: str) -> bool:
    """
    Validate Telegram chat ID format.

    Args:
        chat_id: Channel, group or user ID to validate

    Returns:
        True if valid, False otherwise
    """
    if not chat_id:
        return False

    # - @channelname (public channels)
    # - -1001234567890 (private channels/groups)
    # - 123456789 (user IDs)
    if chat_id.startswith('@'):
        return bool(re.match(r'^@[a-zA-Z0-9_]+$', chat_id))
    if chat_id.startswith('-'):
        return bool(re.match(r'^-\d+$', chat_id))
    return bool(re.match(r'^\d+$', chat_id))


def validate_bot_token(token: str) -> bool:
    """
    Validate Telegram bot token format.

    Args:
        token: Bot token to validate

    Returns:
        True if valid, False otherwise
    """
    if not token:
        return False

    # Bot tokens should be in format: 123456789:ABCDEFghijklmnopQRSTUVwxyz
    pattern = r'^\d{8,10}:[A-Za-z0-9_-]{35}$'
    return bool(re.match(pattern, token))


def validate_currency_code(code: str) -> bool:
    """
    Validate a currency identifier (case-insensitive).

    Args:
        code: Identifier such as ``usd`` or ``ZAR``

    Returns:
        True if valid, False otherwise
    """
    if not code:
        return False
    return bool(_CURRENCY_RE.match(code.strip().lower()))


def validate_url_template(template: str, *fields: str) -> bool:
    """
    Check that a URL template is https and mentions every placeholder.

    Args:
        template: URL with ``{name}`` placeholders
        fields: Placeholder names that must appear

    Returns:
        True if valid, False otherwise
    """
    if not template or not template.startswith("https://"):
        return False
    return all("{" + name + "}" in template for name in fields)
