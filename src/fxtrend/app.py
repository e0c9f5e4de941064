# src/fxtrend/app.py
"""
Application Entry Point - Bot Initialization and Startup

This module serves as the composition root for the fxtrend Telegram bot.
It loads settings, configures logging and starts the polling loop; the
runtime object graph (AppContext) is built inside the Application's
post_init hook.

Files that USE this module:
- python -m fxtrend (module entry point)
- the ``fxtrend`` console script

Files that this module USES:
- fxtrend.shared.logging_conf (setup_logging for logging configuration)
- fxtrend.config (Settings)
- fxtrend.adapters.telegram.bot (build_application)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import logging  # Standard library for logging messages and errors

from telegram.error import Conflict, NetworkError, TimedOut  # Telegram API error exceptions

from fxtrend.adapters.telegram.bot import build_application  # Application with handlers and hooks
from fxtrend.config import Settings  # Pydantic settings
from fxtrend.shared.logging_conf import setup_logging  # Configure logging with file rotation


def main() -> None:
    """
    Initialize and start the Telegram bot application.

    This function:
    1. Loads and validates settings
    2. Sets up logging
    3. Builds the Telegram application (handlers, jobs, context lifecycle)
    4. Starts the bot polling loop
    """
    settings = Settings()

    setup_logging(
        level=logging.INFO,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        log_stdout=settings.log_stdout,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    logger = logging.getLogger(__name__)

    if not settings.bot_token:
        raise RuntimeError("BOT_TOKEN missing")

    app = build_application(settings)

    logger.info(
        "Starting bot polling… pair=%s/%s refresh=%ds cache=%s",
        settings.base_currency.upper(),
        settings.target_currency.upper(),
        settings.refresh_interval_seconds,
        settings.cache_dir,
    )

    try:
        app.run_polling(drop_pending_updates=False)
    except Conflict as e:
        logger.error(
            "Telegram Conflict error: %s. Another instance is polling with the same token.", e
        )
        raise
    except (TimedOut, NetworkError) as e:
        logger.error(
            "Network error during bot operation (timeout connecting to Telegram API): %s (type: %s)",
            e,
            type(e).__name__,
            exc_info=True,
        )
        raise
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (KeyboardInterrupt)")
    except Exception as e:
        logger.exception("Unexpected error during bot operation: %s (type: %s)", e, type(e).__name__)
        raise


if __name__ == "__main__":
    main()
