"""Trend report handler."""

from __future__ import annotations

from datetime import date
from html import escape

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from styleai.bot_service.context import BotContext
from styleai.storage.models import ViewState


def setup(router: Router, context: BotContext) -> None:
    """Register /trends handler."""

    @router.message(Command("trends"))
    async def handle_trends(message: Message) -> None:
        context.sessions.set_view(str(message.from_user.id), ViewState.TRENDS)
        text = await context.service.logic.fetch_trend_brief()
        await message.answer(
            f"<b>StyleAI Report</b> · {date.today().strftime('%d.%m.%Y')}\n\n{escape(text)}",
        )
