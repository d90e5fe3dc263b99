"""Handlers for the virtual try-on view."""

from __future__ import annotations


from aiogram import F, Router
from aiogram.filters import Command
from aiogram.filters.callback_data import CallbackData
from aiogram.types import CallbackQuery, InlineKeyboardMarkup, Message
from aiogram.utils.keyboard import InlineKeyboardBuilder

from styleai.bot_service.context import BotContext
from styleai.bot_service.filters import ViewFilter
from styleai.bot_service.media import as_input_file, download_photo
from styleai.bot_service.session import ViewSession
from styleai.imggen.try_on import TryOnError
from styleai.imgproc.encoding import InvalidImageError, to_jpeg_data_uri
from styleai.logic import InvalidRequestError
from styleai.storage.models import ViewState


class TryOnAction(CallbackData, prefix="try"):
    action: str
    item_id: str = ""


def selection_keyboard(context: BotContext, user_id: str, session: ViewSession) -> InlineKeyboardMarkup:
    """Clean items as toggle buttons plus the generate button."""

    builder = InlineKeyboardBuilder()
    for item in context.service.store(user_id).view_by_cleanliness(True):
        mark = "✅" if item.id in session.try_on_ids else "▫️"
        builder.button(
            text=f"{mark} {item.description[:28]}",
            callback_data=TryOnAction(action="select", item_id=item.id),
        )
    builder.button(text="Generează", callback_data=TryOnAction(action="run"))
    builder.adjust(1)
    return builder.as_markup()


def setup(router: Router, context: BotContext) -> None:
    """Register try-on handlers."""

    @router.message(Command("tryon"))
    async def handle_try_on(message: Message) -> None:
        user_id = str(message.from_user.id)
        session = context.sessions.set_view(user_id, ViewState.TRYON)
        photo_state = "Poza ta este salvată." if session.person_image else "Trimite o poză cu tine."
        await message.answer(
            f"<b>Probă Virtuală</b>\n{photo_state} Apoi alege hainele și apasă Generează.",
            reply_markup=selection_keyboard(context, user_id, session),
        )

    @router.message(ViewFilter(context, ViewState.TRYON), F.photo)
    async def handle_person_photo(message: Message, session: ViewSession) -> None:
        data = await download_photo(message)
        if data is None:
            await message.answer("Nu am putut descărca poza. Încearcă din nou.")
            return
        try:
            session.person_image = to_jpeg_data_uri(data)
        except InvalidImageError:
            await message.answer("Fișierul nu este o imagine validă.")
            return
        await message.answer("Poza ta a fost salvată. Alege hainele și apasă Generează.")

    @router.callback_query(TryOnAction.filter(F.action == "select"))
    async def handle_select(query: CallbackQuery, callback_data: TryOnAction) -> None:
        user_id = str(query.from_user.id)
        session = context.sessions.get(user_id)
        session.toggle_try_on(callback_data.item_id)
        await query.answer()
        if query.message:
            await query.message.edit_reply_markup(reply_markup=selection_keyboard(context, user_id, session))

    @router.callback_query(TryOnAction.filter(F.action == "run"))
    async def handle_run(query: CallbackQuery) -> None:
        user_id = str(query.from_user.id)
        session = context.sessions.get(user_id)
        try:
            result = await context.service.try_on(user_id, session.person_image, session.try_on_ids)
        except (InvalidRequestError, TryOnError) as exc:
            await query.answer(str(exc), show_alert=True)
            return
        await query.answer()
        if query.message:
            await query.message.answer_photo(
                as_input_file(result.image, filename="tryon.png"),
                caption="Rezultatul Tău",
            )
