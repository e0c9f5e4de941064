# src/fxtrend/adapters/telegram/handlers.py
"""
Telegram Handlers - Command Processing and User Interaction

This module contains the bot command handlers. They are thin: every
handler reads or drives the AppContext stored in ``bot_data["ctx"]`` and
replies with text from the formatter (or a chart image). Users only see
coarse states, never exception text.

Commands:
- /start, /help: usage and the current panel label
- /rate: latest rate, direction and change
- /chart [1m|1y|max]: rate history chart (PNG)
- /refresh: re-fetch today's rate
- /pair <BASE> <TARGET>: switch the tracked pair
- /currencies: list supported identifiers

Files that USE this module:
- fxtrend.app (build_handlers and error_handler are registered)

Files that this module USES:
- fxtrend.application.context (AppContext)
- fxtrend.adapters.charting (render, to_png)
- fxtrend.adapters.formatting.formatter (reply texts)
- fxtrend.domain.models (ZoomWindow)
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import BaseHandler, CommandHandler, ContextTypes

from fxtrend.adapters.charting.png import to_png
from fxtrend.adapters.charting.renderer import render
from fxtrend.adapters.formatting.formatter import (
    CONFIG_ERROR,
    ERROR,
    chart_caption,
    currencies_message,
    help_text,
    panel_label,
    rate_message,
)
from fxtrend.application.context import AppContext
from fxtrend.domain.errors import ConfigError
from fxtrend.domain.models import RefreshResult, ZoomWindow

logger = logging.getLogger(__name__)

DEFAULT_ZOOM = ZoomWindow.MONTH


def _ctx(context: ContextTypes.DEFAULT_TYPE) -> AppContext:
    return context.application.bot_data["ctx"]


async def _current_result(ctx: AppContext) -> Optional[RefreshResult]:
    """Last refresh result, refreshing first when there is none yet."""
    if ctx.last_result is None:
        await ctx.refresh()
    return ctx.last_result


# --- /start and /help ---
async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start - greet with the current label and the command list."""
    ctx = _ctx(context)
    await update.message.reply_text(f"{panel_label(ctx.last_result)}\n\n{help_text()}")


async def help_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(help_text())


# --- /rate ---
async def rate(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /rate - latest rate with direction and change vs the previous day."""
    ctx = _ctx(context)
    result = await _current_result(ctx)
    await update.message.reply_text(rate_message(result, ctx.status))


# --- /chart ---
async def chart(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /chart [1m|1y|max] - send the history chart as a PNG.

    The PNG is rasterised in a worker thread so the event loop keeps
    serving other updates.
    """
    ctx = _ctx(context)
    args: List[str] = context.args or []
    try:
        zoom = ZoomWindow.from_key(args[0]) if args else DEFAULT_ZOOM
    except ValueError:
        await update.message.reply_text("Usage: /chart [1m|1y|max]")
        return

    result = await _current_result(ctx)
    if result is None:
        await update.message.reply_text(rate_message(None, ctx.status))
        return

    drawing = render(
        result.points,
        zoom,
        ctx.settings.chart_width,
        ctx.settings.chart_height,
        today=result.today,
    )
    try:
        image = await asyncio.to_thread(to_png, drawing)
    except Exception:
        logger.exception("Failed to rasterise %s chart for %s", zoom.key, result.pair.label)
        await update.message.reply_text(ERROR)
        return

    await update.message.reply_photo(photo=image, caption=chart_caption(result, zoom))


# --- /refresh ---
async def refresh(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /refresh - drop today's cached rate and fetch it again."""
    ctx = _ctx(context)
    await ctx.refresh(bust_today=True)
    await update.message.reply_text(rate_message(ctx.last_result, ctx.status))


# --- /pair ---
async def pair(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /pair <BASE> <TARGET> - switch the tracked currency pair."""
    ctx = _ctx(context)
    args: List[str] = context.args or []
    if len(args) != 2:
        current = ctx.pair.label if ctx.pair else CONFIG_ERROR
        await update.message.reply_text(f"Current pair: {current}\nUsage: /pair <BASE> <TARGET>")
        return

    try:
        new_pair = ctx.set_pair(args[0], args[1])
    except ConfigError as e:
        logger.info("Rejected /pair %s: %s", " ".join(args), e)
        await update.message.reply_text("Unsupported currency. See /currencies for the list.")
        return

    await ctx.refresh()
    await update.message.reply_text(f"Now tracking {new_pair.label}\n{rate_message(ctx.last_result, ctx.status)}")


# --- /currencies ---
async def currencies(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /currencies - list the identifiers the provider supports."""
    ctx = _ctx(context)
    codes = await ctx.catalog.refresh()
    await update.message.reply_text(currencies_message(codes))


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors raised by handlers; tell the user only that something failed."""
    logger.error("Update %r caused error: %s", update, context.error, exc_info=context.error)
    if isinstance(update, Update) and update.effective_message is not None:
        try:
            await update.effective_message.reply_text(ERROR)
        except TelegramError as e:
            logger.warning("Failed to send error reply: %s", e)


def build_handlers() -> List[BaseHandler]:
    """
    Build the list of command handlers to register on the Application.

    Returns:
        List of CommandHandler instances
    """
    return [
        CommandHandler("start", start),
        CommandHandler("help", help_cmd),
        CommandHandler("rate", rate),
        CommandHandler("chart", chart),
        CommandHandler("refresh", refresh),
        CommandHandler("pair", pair),
        CommandHandler("currencies", currencies),
    ]
