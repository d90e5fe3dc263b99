"""Custom aiogram filters used by the bot."""

from __future__ import annotations

from typing import Any

from aiogram.filters import BaseFilter
from aiogram.types import Message

from styleai.bot_service.context import BotContext
from styleai.storage.models import ViewState


class ViewFilter(BaseFilter):
    """Matches messages when the user's chat shows the expected view."""

    def __init__(self, context: BotContext, expected: ViewState) -> None:
        self._context = context
        self._expected = expected

    async def __call__(self, message: Message) -> bool | dict[str, Any]:
        user_id = str(message.from_user.id)
        session = self._context.sessions.get(user_id)
        if session.view == self._expected:
            return {"session": session}
        return False
