"""Shared fixtures for the StyleAI tests."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from styleai.storage.models import Category, ClothingItem
from styleai.storage.repository import WardrobeRepository, WardrobeStore

PIXEL = "data:image/jpeg;base64,AAAA"


def png_bytes(color: tuple[int, int, int] = (200, 30, 30), size: tuple[int, int] = (16, 24)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_item() -> Callable[..., ClothingItem]:
    def _make(
        item_id: str,
        category: Category = Category.TOPS,
        *,
        is_clean: bool = True,
        description: str | None = None,
        created_at: int = 1_700_000_000_000,
    ) -> ClothingItem:
        return ClothingItem(
            id=item_id,
            image=PIXEL,
            category=category,
            description=description or f"item {item_id}",
            is_clean=is_clean,
            created_at=created_at,
        )

    return _make


@pytest.fixture
def store(tmp_path: Path) -> WardrobeStore:
    wardrobe = WardrobeStore(tmp_path / "styleai-wardrobe.json")
    wardrobe.load()
    return wardrobe


@pytest.fixture
def repository(tmp_path: Path) -> WardrobeRepository:
    return WardrobeRepository(tmp_path / "users", tmp_path / "generated")


@pytest.fixture
def photo() -> bytes:
    return png_bytes()
