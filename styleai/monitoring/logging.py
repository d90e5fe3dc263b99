"""Process-wide logging setup for the API and the bot."""

from __future__ import annotations

import logging

from styleai.config.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Per-request INFO lines from these libraries drown out our own logs.
NOISY_LOGGERS = ("httpx", "openai", "aiogram.event")


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger; ``level`` defaults to ``LOG_LEVEL``."""

    desired = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, desired, logging.INFO),
        format=LOG_FORMAT,
    )
    if desired != "DEBUG":
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
