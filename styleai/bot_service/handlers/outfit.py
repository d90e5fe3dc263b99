"""Handlers for weather and outfit recommendations."""

from __future__ import annotations

from html import escape

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.filters.callback_data import CallbackData
from aiogram.types import CallbackQuery, InputMediaPhoto, Message
from aiogram.utils.keyboard import InlineKeyboardBuilder

from styleai.bot_service.context import BotContext
from styleai.bot_service.media import as_input_file
from styleai.logic import InvalidRequestError
from styleai.storage.models import Occasion, ViewState

OCCASIONS = list(Occasion)


class OccasionChoice(CallbackData, prefix="occ"):
    index: int


def occasion_keyboard():
    builder = InlineKeyboardBuilder()
    for index, occasion in enumerate(OCCASIONS):
        builder.button(text=occasion.value, callback_data=OccasionChoice(index=index))
    builder.adjust(2)
    return builder.as_markup()


def setup(router: Router, context: BotContext) -> None:
    """Register handlers related to outfit generation."""

    @router.message(Command("weather"))
    async def handle_weather(message: Message, command: CommandObject) -> None:
        session = context.sessions.get(str(message.from_user.id))
        try:
            weather = await context.service.logic.fetch_weather(command.args or "")
        except InvalidRequestError as exc:
            await message.answer(f"{exc} Exemplu: /weather Cluj-Napoca")
            return
        session.location = weather.location
        session.weather = weather
        await message.answer(escape(weather.describe()))

    @router.message(Command("outfit"))
    async def handle_outfit(message: Message) -> None:
        session = context.sessions.set_view(str(message.from_user.id), ViewState.OUTFIT)
        session.outfit = None
        session.weather = await context.service.logic.fetch_weather(session.location)
        await message.answer(
            f"{escape(session.weather.describe())}\n\n<b>Ce planuri ai?</b>",
            reply_markup=occasion_keyboard(),
        )

    @router.callback_query(OccasionChoice.filter())
    async def handle_occasion(query: CallbackQuery, callback_data: OccasionChoice) -> None:
        user_id = str(query.from_user.id)
        session = context.sessions.get(user_id)
        if not 0 <= callback_data.index < len(OCCASIONS):
            await query.answer()
            return
        session.occasion = OCCASIONS[callback_data.index]
        await query.answer("Procesare AI...")

        plan = await context.service.plan_outfit(user_id, session.location, session.occasion)
        session.weather = plan.weather
        session.outfit = plan.recommendation
        if query.message is None:
            return

        await query.message.answer(
            f"<b>{escape(plan.recommendation.name)}</b>\n"
            f"{escape(plan.weather.describe())}\n\n"
            f"{escape(plan.recommendation.reasoning)}",
        )
        photos = [
            as_input_file(item.image, filename=f"{item.id}.jpg")
            for item in plan.items
        ]
        if len(photos) == 1:
            await query.message.answer_photo(photos[0])
        elif photos:
            await query.message.answer_media_group(
                [InputMediaPhoto(media=photo) for photo in photos[:10]],
            )
