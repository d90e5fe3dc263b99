"""Handlers for the wardrobe and laundry views and for adding clothes."""

from __future__ import annotations

import math
from html import escape

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.filters.callback_data import CallbackData
from aiogram.types import CallbackQuery, InlineKeyboardButton, InlineKeyboardMarkup, Message
from aiogram.utils.keyboard import InlineKeyboardBuilder

from styleai.bot_service.context import BotContext
from styleai.bot_service.media import download_photo
from styleai.logic import InvalidRequestError
from styleai.storage.models import ViewState
from styleai.storage.repository import WardrobeStore

TITLES = {
    ViewState.WARDROBE: "Garderobă",
    ViewState.LAUNDRY: "Coș Rufe",
}

# One page stays under Telegram's message and keyboard limits.
PAGE_SIZE = 10
DESCRIPTION_LIMIT = 120


class ItemAction(CallbackData, prefix="item"):
    action: str
    item_id: str
    page: int = 0


class ListingPage(CallbackData, prefix="page"):
    view: str
    page: int


def render_view(
    context: BotContext,
    user_id: str,
    view: ViewState,
    page: int = 0,
) -> tuple[str, InlineKeyboardMarkup | None]:
    """Return one page of the listing text and its toggle/delete keyboard."""

    result = context.service.view(user_id, view)
    lines = [f"<b>{TITLES[view]}</b> · {result.total} articole · 🧺 {result.dirty_count}"]
    if not result.total:
        lines.append("Niciun articol aici.")
        return "\n".join(lines), None

    ordered = [item for items in result.groups.values() for item in items]
    pages = math.ceil(len(ordered) / PAGE_SIZE)
    page = max(0, min(page, pages - 1))
    chunk = ordered[page * PAGE_SIZE:(page + 1) * PAGE_SIZE]

    builder = InlineKeyboardBuilder()
    toggle_icon = "🧺" if view is ViewState.WARDROBE else "✨"
    for category, items in WardrobeStore.group_by_category(chunk).items():
        lines.append(f"\n<b>{escape(category)}</b>")
        for item in items:
            lines.append(f"• {escape(item.description[:DESCRIPTION_LIMIT])}")
            builder.button(
                text=f"{toggle_icon} {item.description[:28]}",
                callback_data=ItemAction(action="toggle", item_id=item.id, page=page),
            )
            builder.button(text="🗑", callback_data=ItemAction(action="delete", item_id=item.id, page=page))
    builder.adjust(2)

    if pages > 1:
        lines.append(f"\nPagina {page + 1}/{pages}")
        nav = []
        if page > 0:
            nav.append(InlineKeyboardButton(
                text="◀️",
                callback_data=ListingPage(view=view.value, page=page - 1).pack(),
            ))
        if page < pages - 1:
            nav.append(InlineKeyboardButton(
                text="▶️",
                callback_data=ListingPage(view=view.value, page=page + 1).pack(),
            ))
        builder.row(*nav)
    return "\n".join(lines), builder.as_markup()


def setup(router: Router, context: BotContext) -> None:
    """Register wardrobe listing, upload and laundry handlers."""

    async def show(message: Message, user_id: str, view: ViewState) -> None:
        context.sessions.set_view(user_id, view)
        text, markup = render_view(context, user_id, view)
        await message.answer(text, reply_markup=markup)

    @router.message(Command("wardrobe"))
    async def handle_wardrobe(message: Message) -> None:
        await show(message, str(message.from_user.id), ViewState.WARDROBE)

    @router.message(Command("laundry"))
    async def handle_laundry(message: Message) -> None:
        await show(message, str(message.from_user.id), ViewState.LAUNDRY)

    @router.message(F.photo)
    async def handle_photo(message: Message) -> None:
        user_id = str(message.from_user.id)
        data = await download_photo(message)
        if data is None:
            await message.answer("Nu am putut descărca poza. Încearcă din nou.")
            return
        await message.answer("Procesare AI...")
        try:
            item = await context.service.add_photo(user_id, data)
        except InvalidRequestError as exc:
            await message.answer(str(exc))
            return
        await message.answer(
            f"Am adăugat <b>{escape(item.category.value)}</b>: {escape(item.description)}",
        )

    @router.callback_query(ItemAction.filter())
    async def handle_item_action(query: CallbackQuery, callback_data: ItemAction) -> None:
        user_id = str(query.from_user.id)
        if callback_data.action == "toggle":
            await context.service.toggle_clean(user_id, callback_data.item_id)
        elif callback_data.action == "delete":
            await context.service.remove(user_id, callback_data.item_id)

        view = context.sessions.current(user_id)
        if view not in TITLES:
            view = ViewState.WARDROBE
        text, markup = render_view(context, user_id, view, callback_data.page)
        await query.answer()
        if query.message:
            await query.message.edit_text(text, reply_markup=markup)

    @router.callback_query(ListingPage.filter())
    async def handle_page(query: CallbackQuery, callback_data: ListingPage) -> None:
        user_id = str(query.from_user.id)
        view = next((listed for listed in TITLES if listed.value == callback_data.view), None)
        if view is None:
            await query.answer()
            return
        context.sessions.set_view(user_id, view)
        text, markup = render_view(context, user_id, view, callback_data.page)
        await query.answer()
        if query.message:
            await query.message.edit_text(text, reply_markup=markup)
