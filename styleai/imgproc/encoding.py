"""Conversions between uploaded photos, JPEG bytes and data URIs."""

from __future__ import annotations

import base64
import binascii
import re
from io import BytesIO

from PIL import Image, ImageOps, UnidentifiedImageError

_DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^,;]+)*?);base64,(?P<data>.*)$", re.DOTALL)
_IMAGE_PREFIX_PATTERN = re.compile(r"^data:image/(png|jpeg|jpg|webp);base64,")

MAX_SIDE = 1536


class InvalidImageError(ValueError):
    """Raised when bytes or a data URI do not hold a readable image."""


def to_data_uri(data: bytes, mime_type: str = "image/jpeg") -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def strip_data_uri(value: str) -> str:
    """Return the bare base64 payload of an image data URI."""

    return _IMAGE_PREFIX_PATTERN.sub("", value, count=1)


def decode_data_uri(value: str) -> tuple[bytes, str]:
    """Split a base64 data URI into ``(bytes, mime_type)``."""

    match = _DATA_URI_PATTERN.match(value.strip())
    if not match:
        raise InvalidImageError("Value is not a base64 data URI.")
    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (ValueError, binascii.Error) as exc:
        raise InvalidImageError("Data URI payload is not valid base64.") from exc
    return data, match.group("mime") or "application/octet-stream"


def to_jpeg_data_uri(data: bytes, *, max_side: int = MAX_SIDE) -> str:
    """Normalise an uploaded photo to an upright RGB JPEG data URI.

    Large photos are downscaled so the longest side is at most ``max_side``.
    """

    try:
        with Image.open(BytesIO(data)) as img:
            img = ImageOps.exif_transpose(img)
            img = img.convert("RGB")
            img.thumbnail((max_side, max_side))
            buffer = BytesIO()
            img.save(buffer, format="JPEG", quality=90)
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidImageError("File is not a supported image.") from exc
    return to_data_uri(buffer.getvalue(), "image/jpeg")
