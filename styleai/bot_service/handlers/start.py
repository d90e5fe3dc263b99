"""Start and reset command handlers."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from styleai.bot_service.context import BotContext
from styleai.storage.models import ViewState


def setup(router: Router, context: BotContext) -> None:
    """Register /start and /reset handlers."""

    @router.message(CommandStart())
    async def handle_start(message: Message) -> None:
        context.sessions.set_view(str(message.from_user.id), ViewState.WARDROBE)
        await message.answer(
            "Salut! Trimite-mi poze cu hainele tale, le sortez eu pe categorii.\n"
            "/wardrobe garderoba, /laundry coșul de rufe, /outfit recomandare, "
            "/tryon probă virtuală, /trends noutăți, /weather oraș.",
        )

    @router.message(Command("reset"))
    async def handle_reset(message: Message) -> None:
        user_id = str(message.from_user.id)
        await context.service.reset(user_id)
        context.sessions.reset(user_id)
        await message.answer("Toate datele au fost șterse. Trimite o poză ca să începi din nou.")
