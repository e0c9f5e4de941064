# src/fxtrend/adapters/telegram/__init__.py
"""
Telegram Adapters - Bot Interface

This package contains Telegram bot adapters:
- Bot application builder
- Command handlers
- Scheduled jobs
"""

from fxtrend.adapters.telegram.bot import build_application
from fxtrend.adapters.telegram.handlers import build_handlers
from fxtrend.adapters.telegram.jobs import (
    currency_list_job,
    refresh_job,
    schedule_jobs,
)

__all__ = [
    "build_application",
    "build_handlers",
    "refresh_job",
    "currency_list_job",
    "schedule_jobs",
]
