# src/fxtrend/adapters/telegram/bot.py
"""
Telegram Bot - Application Builder and Lifecycle Hooks

This module builds the python-telegram-bot Application and wires the
AppContext lifecycle to it: the context is created in ``post_init`` (after
the event loop exists) and torn down in ``post_shutdown``, which cancels
the periodic jobs and aborts in-flight HTTP requests.

Files that USE this module:
- fxtrend.app (build_application)

Files that this module USES:
- fxtrend.application.context (AppContext)
- fxtrend.adapters.telegram.handlers (handlers, error handler)
- fxtrend.adapters.telegram.jobs (schedule_jobs)
- fxtrend.config.settings (Settings)
"""

from __future__ import annotations

import logging
from functools import partial

from telegram.ext import Application

from fxtrend.adapters.telegram.handlers import build_handlers, error_handler
from fxtrend.adapters.telegram.jobs import schedule_jobs
from fxtrend.application.context import AppContext
from fxtrend.config.settings import Settings

logger = logging.getLogger(__name__)


async def _post_init(app: Application, settings: Settings) -> None:
    ctx = AppContext.from_settings(settings)
    app.bot_data["ctx"] = ctx
    schedule_jobs(app, ctx)


async def _post_shutdown(app: Application) -> None:
    ctx = app.bot_data.pop("ctx", None)
    if ctx is not None:
        await ctx.aclose()


def build_application(settings: Settings) -> Application:
    """
    Build Telegram bot application with handlers and lifecycle hooks.

    Args:
        settings: Validated Settings (BOT_TOKEN must be set)

    Returns:
        Configured Application instance
    """
    app = (
        Application.builder()
        .token(settings.bot_token)
        .post_init(partial(_post_init, settings=settings))
        .post_shutdown(_post_shutdown)
        .build()
    )
    for h in build_handlers():
        app.add_handler(h)
    app.add_error_handler(error_handler)
    return app
