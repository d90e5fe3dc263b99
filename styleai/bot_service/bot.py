"""Entrypoint for the StyleAI Telegram bot."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress

from aiogram import Bot, Dispatcher, Router
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from styleai.api import GenAIClient
from styleai.bot_service.context import BotContext
from styleai.bot_service.handlers import setup_handlers
from styleai.bot_service.session import SessionRegistry
from styleai.config.settings import get_settings
from styleai.monitoring.logging import configure_logging
from styleai.services.wardrobe import WardrobeService

logger = logging.getLogger(__name__)


async def main() -> None:
    """Initialise dependencies and start polling Telegram."""

    settings = get_settings()
    configure_logging(settings.log_level)
    if not settings.bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is not configured.")
    if not settings.genai_api_key:
        raise RuntimeError("GENAI_API_KEY is not configured.")

    client = GenAIClient(settings)
    context = BotContext(
        service=WardrobeService.from_settings(settings, client),
        sessions=SessionRegistry(settings.default_location),
    )

    bot = Bot(token=settings.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dispatcher = Dispatcher()
    router = Router()
    setup_handlers(router, context)
    dispatcher.include_router(router)

    try:
        logger.info("Starting StyleAI bot polling.")
        await dispatcher.start_polling(bot)
    finally:
        with suppress(Exception):
            await bot.session.close()
        with suppress(Exception):
            await client.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
