"""High-level AI operations with their fallback policy.

Every call except try-on degrades to a fixed placeholder when the service
fails, so the user is never blocked on AI availability. Try-on has no sensible
placeholder image and raises :class:`~styleai.imggen.try_on.TryOnError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from styleai.api.genai_client import GenAIClient, GenAIRequestError
from styleai.imggen.prompt_builder import PromptBuilder, StylingContext
from styleai.imggen.try_on import TryOnService
from styleai.imgproc.encoding import InvalidImageError, to_jpeg_data_uri
from styleai.storage.models import (
    Category,
    ClothingItem,
    Occasion,
    OutfitRecommendation,
    TryOnResult,
    WeatherSnapshot,
)

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Articol vestimentar"
FAILED_DESCRIPTION = "Articol nou"
UNKNOWN_CONDITION = "Indisponibil"
TRENDS_EMPTY = "Indisponibil."
TRENDS_FAILED = "Nu s-au putut încărca trendurile."


class InvalidRequestError(RuntimeError):
    """Raised for user input that must be fixed before calling the AI service."""


class ClassificationReply(BaseModel):
    category: Any = None
    description: Any = None


class WeatherReply(BaseModel):
    temp: float | None = None
    condition: str | None = None
    location: str | None = None


class OutfitReply(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    selected_ids: list[str | int] = Field(alias="selectedItemIds")
    name: str = Field(alias="outfitName")
    reasoning: str


@dataclass(slots=True)
class ItemAnalysis:
    """Category and short description of a photographed garment."""

    category: Category
    description: str


class StylistLogic:
    """Encapsulates classification, weather, outfit, try-on and trend calls."""

    def __init__(
        self,
        client: GenAIClient,
        try_on_service: TryOnService,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        self._client = client
        self._try_on = try_on_service
        self._prompt_builder = prompt_builder or PromptBuilder()

    async def classify_item(self, image: str) -> ItemAnalysis:
        """Ask the model for the category and description of a garment photo."""

        try:
            data = await self._client.chat_json(self._prompt_builder.classification(image))
            reply = ClassificationReply.model_validate(data)
        except (GenAIRequestError, ValidationError) as exc:
            logger.warning("Classification failed, using defaults: %s", exc)
            return ItemAnalysis(category=Category.TOPS, description=FAILED_DESCRIPTION)

        description = reply.description if isinstance(reply.description, str) else ""
        return ItemAnalysis(
            category=Category.coerce(reply.category),
            description=description.strip() or DEFAULT_DESCRIPTION,
        )

    async def create_item(self, photo: bytes) -> ClothingItem:
        """Normalise ``photo``, classify it and build a new clean item."""

        try:
            image = to_jpeg_data_uri(photo)
        except InvalidImageError as exc:
            raise InvalidRequestError("Fișierul nu este o imagine validă.") from exc
        analysis = await self.classify_item(image)
        return ClothingItem.create(image, analysis.category, analysis.description)

    async def fetch_weather(self, location: str) -> WeatherSnapshot:
        """Return the current weather for ``location`` or an offline placeholder."""

        location = (location or "").strip()
        if not location:
            raise InvalidRequestError("Introdu numele orașului.")
        try:
            data = await self._client.chat_json(self._prompt_builder.weather(location))
            reply = WeatherReply.model_validate(data)
        except (GenAIRequestError, ValidationError) as exc:
            logger.warning("Weather lookup for %s failed: %s", location, exc)
            return WeatherSnapshot.offline(location)

        return WeatherSnapshot(
            temperature=reply.temp or 0,
            condition=reply.condition or UNKNOWN_CONDITION,
            location=reply.location or location,
        )

    async def recommend_outfit(
        self,
        weather: WeatherSnapshot,
        wardrobe: Sequence[ClothingItem],
        occasion: Occasion,
    ) -> OutfitRecommendation:
        """Pick an outfit from the clean items of ``wardrobe``."""

        clean_items = [item for item in wardrobe if item.is_clean]
        if not clean_items:
            logger.info("No clean clothes to build an outfit from.")
            return OutfitRecommendation.fallback()

        context = StylingContext(weather=weather, occasion=occasion)
        try:
            data = await self._client.chat_json(self._prompt_builder.outfit(context, clean_items))
            reply = OutfitReply.model_validate(data)
        except (GenAIRequestError, ValidationError) as exc:
            logger.warning("Outfit recommendation failed: %s", exc)
            return OutfitRecommendation.fallback()

        known_ids = {item.id for item in clean_items}
        selected: list[str] = []
        for raw_id in reply.selected_ids:
            item_id = str(raw_id)
            if item_id in known_ids and item_id not in selected:
                selected.append(item_id)
        dropped = len(reply.selected_ids) - len(selected)
        if dropped:
            logger.info("Dropped %d unknown or repeated ids from the recommendation.", dropped)
        return OutfitRecommendation(selected_ids=selected, name=reply.name, reasoning=reply.reasoning)

    async def synthesize_try_on(
        self,
        user_id: str,
        person_image: str | None,
        items: Sequence[ClothingItem],
    ) -> TryOnResult:
        """Generate a picture of the person wearing ``items``.

        Raises ``InvalidRequestError`` before any call when the input is
        incomplete, and ``TryOnError`` when generation fails.
        """

        if not person_image or not items:
            raise InvalidRequestError("Adaugă o poză cu tine și selectează haine!")
        if any(not item.is_clean for item in items):
            raise InvalidRequestError("Hainele din coșul de rufe nu pot fi probate.")
        return await self._try_on.generate(user_id, person_image, items)

    async def fetch_trend_brief(self) -> str:
        """Return a short fashion update or a static message when unavailable."""

        try:
            text = await self._client.chat_text(self._prompt_builder.trends())
        except GenAIRequestError as exc:
            logger.warning("Trend brief failed: %s", exc)
            return TRENDS_FAILED
        return text or TRENDS_EMPTY
