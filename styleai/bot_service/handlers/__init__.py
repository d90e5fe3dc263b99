"""Register message and command handlers."""

from __future__ import annotations

from aiogram import Router

from styleai.bot_service.context import BotContext

from . import outfit, start, trends, try_on, wardrobe


def setup_handlers(router: Router, context: BotContext) -> None:
    """Attach all handler groups to the provided router."""

    start.setup(router, context)
    # the try-on photo handler is view-filtered and must run before the generic one
    try_on.setup(router, context)
    wardrobe.setup(router, context)
    outfit.setup(router, context)
    trends.setup(router, context)
