"""Wardrobe domain types and their JSON record format."""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence


class Category(str, Enum):
    """Garment categories. Values are the labels stored on disk."""

    HEADWEAR = "Cap (Șapcă/Fes)"
    TOPS = "Tricouri/Topuri"
    HOODIES = "Hanorace"
    JACKETS = "Jachete"
    COATS = "Geci/Paltoane"
    PANTS = "Pantaloni"
    FOOTWEAR = "Încălțăminte"
    ACCESSORIES = "Accesorii"

    @classmethod
    def parse(cls, raw: Any) -> "Category":
        """Return the member whose label equals ``raw``; raise ``ValueError`` otherwise."""

        if isinstance(raw, cls):
            return raw
        return cls(raw)

    @classmethod
    def coerce(cls, raw: Any, default: "Category | None" = None) -> "Category":
        """Like :meth:`parse` but falls back to ``default`` (tops) for unknown labels."""

        try:
            return cls.parse(raw)
        except ValueError:
            return default or cls.TOPS

    @classmethod
    def labels(cls) -> list[str]:
        return [member.value for member in cls]


class Occasion(str, Enum):
    """Context labels used to bias outfit recommendations."""

    CASUAL = "Casual/Plimbare"
    UNIVERSITY = "Facultate"
    OFFICE = "Job/Office"
    DATE = "Date"
    FRIENDS = "Ieșire cu prietenii"
    FAMILY_DINNER = "Restaurant cu familia"
    SPORT = "Sport"


DEFAULT_OCCASION = Occasion.CASUAL


class ViewState(str, Enum):
    """Screens of the assistant."""

    WARDROBE = "wardrobe"
    LAUNDRY = "laundry"
    OUTFIT = "outfit"
    TRYON = "tryon"
    TRENDS = "trends"


_id_lock = threading.Lock()
_last_id = 0


def now_ms() -> int:
    return int(time.time() * 1000)


def next_item_id(timestamp_ms: int | None = None) -> str:
    """Return a creation-time id, strictly increasing within the process."""

    global _last_id
    candidate = timestamp_ms if timestamp_ms is not None else now_ms()
    with _id_lock:
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
    return str(candidate)


class InvalidRecordError(ValueError):
    """Raised when a stored record cannot be turned into a ``ClothingItem``."""


@dataclass(slots=True)
class ClothingItem:
    """A photographed garment."""

    id: str
    image: str
    category: Category
    description: str
    is_clean: bool = True
    created_at: int = field(default_factory=now_ms)

    @classmethod
    def create(cls, image: str, category: Category, description: str) -> "ClothingItem":
        """Build a new clean item stamped with the current time."""

        created_at = now_ms()
        return cls(
            id=next_item_id(created_at),
            image=image,
            category=category,
            description=description,
            is_clean=True,
            created_at=created_at,
        )

    def with_clean(self, is_clean: bool) -> "ClothingItem":
        return replace(self, is_clean=is_clean)

    def to_record(self) -> dict[str, Any]:
        """Serialise using the field names of the persisted layout."""

        return {
            "id": self.id,
            "image": self.image,
            "category": self.category.value,
            "description": self.description,
            "isClean": self.is_clean,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, record: Any) -> "ClothingItem":
        if not isinstance(record, Mapping):
            raise InvalidRecordError(f"Expected an object, got {type(record).__name__}")
        try:
            item_id = record["id"]
            image = record["image"]
            category = Category.parse(record["category"])
            description = record["description"]
            is_clean = record["isClean"]
            created_at = record["createdAt"]
        except KeyError as exc:
            raise InvalidRecordError(f"Missing field {exc.args[0]!r}") from exc
        except ValueError as exc:
            raise InvalidRecordError(str(exc)) from exc

        if not isinstance(item_id, str) or not isinstance(image, str) or not isinstance(description, str):
            raise InvalidRecordError("id, image and description must be strings")
        if not isinstance(is_clean, bool):
            raise InvalidRecordError("isClean must be a boolean")
        if isinstance(created_at, bool) or not isinstance(created_at, (int, float)):
            raise InvalidRecordError("createdAt must be a number")
        if not math.isfinite(created_at):
            raise InvalidRecordError("createdAt must be finite")
        return cls(
            id=item_id,
            image=image,
            category=category,
            description=description,
            is_clean=is_clean,
            created_at=int(created_at),
        )


@dataclass(slots=True)
class WeatherSnapshot:
    """Latest weather reading for the selected location."""

    temperature: float
    condition: str
    location: str

    @classmethod
    def offline(cls, location: str) -> "WeatherSnapshot":
        return cls(temperature=0, condition="Offline", location=location)

    def describe(self) -> str:
        return f"{self.location}: {self.temperature:g}°C, {self.condition}"


@dataclass(slots=True)
class OutfitRecommendation:
    """Outfit suggested by the stylist model."""

    selected_ids: list[str]
    name: str
    reasoning: str

    @classmethod
    def fallback(cls) -> "OutfitRecommendation":
        return cls(selected_ids=[], name="Eroare", reasoning="Verifică garderoba.")

    def resolve(self, items: Iterable[ClothingItem]) -> list[ClothingItem]:
        """Return the recommended items present in ``items``, in recommendation order."""

        by_id = {item.id: item for item in items}
        return [by_id[item_id] for item_id in self.selected_ids if item_id in by_id]


@dataclass(slots=True)
class TryOnResult:
    """Generated try-on image."""

    image: str
    image_path: str | None = None


def records(items: Sequence[ClothingItem]) -> list[dict[str, Any]]:
    return [item.to_record() for item in items]
