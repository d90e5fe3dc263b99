"""Image helpers."""

from .encoding import (
    InvalidImageError,
    decode_data_uri,
    strip_data_uri,
    to_data_uri,
    to_jpeg_data_uri,
)

__all__ = [
    "InvalidImageError",
    "decode_data_uri",
    "strip_data_uri",
    "to_data_uri",
    "to_jpeg_data_uri",
]
