# src/fxtrend/adapters/telegram/jobs.py
"""
Telegram Jobs - Scheduled Tasks and Background Processing

This module holds the two periodic jobs that keep the cache and the
currency list warm:

- refresh_job: re-fetch today's rate every ``refresh_interval_seconds``
- currency_list_job: refresh the supported currency list every
  ``currency_list_ttl_seconds`` and notify the configured chat when the
  tracked pair had to be reset

Job handles are recorded on the AppContext so shutdown can cancel them.

Files that USE this module:
- fxtrend.app (schedule_jobs is called from post_init)

Files that this module USES:
- fxtrend.application.context (AppContext)
- fxtrend.adapters.formatting.formatter (reset_message)
"""
from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from telegram.error import RetryAfter, TelegramError, TimedOut
from telegram.ext import Application, ContextTypes

from fxtrend.adapters.formatting.formatter import reset_message
from fxtrend.application.context import AppContext

logger = logging.getLogger(__name__)


async def refresh_job(context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Periodic refresh of the tracked pair.

    Every run after the first re-fetches today; the startup run relies on
    the today marker.
    """
    ctx: AppContext = context.application.bot_data["ctx"]
    state = context.job.data if context.job is not None else None
    first_run = bool(state and state.pop("startup", False))
    await ctx.refresh(bust_today=not first_run)


async def currency_list_job(context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Refresh the currency list and report pair resets.

    The first run at startup uses the cached list when it is still fresh.
    """
    ctx: AppContext = context.application.bot_data["ctx"]
    state = context.job.data if context.job is not None else None
    first_run = bool(state and state.pop("startup", False))
    notices = await ctx.update_currency_list(force=not first_run)
    if not notices:
        return

    await ctx.refresh()
    chat_id = ctx.settings.chat_id
    if not chat_id:
        logger.info("No CHAT_ID configured, reset notice not sent")
        return

    text = reset_message(notices)
    try:
        await context.bot.send_message(chat_id=chat_id, text=text)
    except RetryAfter as e:
        logger.warning("Telegram rate limit (429): retry after %s seconds", e.retry_after)
        await asyncio.sleep(float(e.retry_after) + 1)
        await context.bot.send_message(chat_id=chat_id, text=text)
    except TimedOut:
        logger.warning("Telegram request timed out, reset notice not delivered")
    except TelegramError as e:
        logger.error("Failed to send reset notice: %s", e)


def schedule_jobs(app: Application, ctx: AppContext) -> None:
    """
    Register the periodic jobs on the application's JobQueue.

    Both jobs start immediately at boot.
    """
    settings = ctx.settings
    ctx.add_job(app.job_queue.run_repeating(
        callback=currency_list_job,
        interval=timedelta(seconds=settings.currency_list_ttl_seconds),
        first=0,
        name="currency_list",
        data={"startup": True},
    ))
    ctx.add_job(app.job_queue.run_repeating(
        callback=refresh_job,
        interval=timedelta(seconds=settings.refresh_interval_seconds),
        first=1,
        name="rate_refresh",
        data={"startup": True},
    ))
    logger.info(
        "Jobs scheduled: refresh every %ds, currency list every %ds",
        settings.refresh_interval_seconds,
        settings.currency_list_ttl_seconds,
    )
