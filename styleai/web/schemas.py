"""Request and response bodies of the HTTP API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from styleai.storage.models import DEFAULT_OCCASION, Occasion


class AddItemRequest(BaseModel):
    image: str = Field(description="Photo of the garment as a base64 data URI.")


class OutfitRequest(BaseModel):
    location: str
    occasion: Occasion = DEFAULT_OCCASION


class TryOnRequest(BaseModel):
    person_image: str | None = Field(default=None, description="Photo of the user as a data URI.")
    item_ids: list[str] = Field(default_factory=list)


class WardrobeResponse(BaseModel):
    view: str
    total: int
    dirty_count: int
    groups: list[dict[str, Any]]


class WeatherResponse(BaseModel):
    temperature: float
    condition: str
    location: str


class OutfitResponse(BaseModel):
    weather: WeatherResponse
    name: str
    reasoning: str
    selected_ids: list[str]
    items: list[dict[str, Any]]


class TryOnResponse(BaseModel):
    image: str
    image_path: str | None = None


class TrendsResponse(BaseModel):
    text: str
