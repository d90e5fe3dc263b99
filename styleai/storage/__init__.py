"""Wardrobe persistence."""

from .models import (
    Category,
    ClothingItem,
    Occasion,
    OutfitRecommendation,
    TryOnResult,
    ViewState,
    WeatherSnapshot,
)
from .repository import WardrobeRepository, WardrobeStore

__all__ = [
    "Category",
    "ClothingItem",
    "Occasion",
    "OutfitRecommendation",
    "TryOnResult",
    "ViewState",
    "WardrobeRepository",
    "WardrobeStore",
    "WeatherSnapshot",
]
