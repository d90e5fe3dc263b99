"""Helpers for moving images between Telegram and data URIs."""

from __future__ import annotations

import logging

from aiogram.exceptions import TelegramNetworkError
from aiogram.types import BufferedInputFile, Message

from styleai.imgproc.encoding import InvalidImageError, decode_data_uri

logger = logging.getLogger(__name__)


async def download_photo(message: Message) -> bytes | None:
    """Return the bytes of the largest size of the message photo."""

    if not message.photo:
        return None
    file = message.photo[-1]
    try:
        file_info = await message.bot.get_file(file.file_id)
        file_stream = await message.bot.download_file(file_info.file_path)
    except TelegramNetworkError:
        logger.warning("Could not download photo %s", file.file_id)
        return None
    data = file_stream.read()
    file_stream.close()
    return data


def as_input_file(image: str, filename: str) -> BufferedInputFile | str:
    """Turn a data URI into an upload; plain URLs are passed through."""

    try:
        data, _ = decode_data_uri(image)
    except InvalidImageError:
        return image
    return BufferedInputFile(data, filename=filename)
