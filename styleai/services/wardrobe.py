"""Commands and queries the front ends run against a user's wardrobe."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from styleai.api.genai_client import GenAIClient
from styleai.config.settings import StyleAISettings
from styleai.imggen.try_on import TryOnService
from styleai.logic import InvalidRequestError, StylistLogic
from styleai.storage.models import (
    ClothingItem,
    Occasion,
    OutfitRecommendation,
    TryOnResult,
    ViewState,
    WeatherSnapshot,
)
from styleai.storage.repository import WardrobeRepository, WardrobeStore


@dataclass(slots=True)
class WardrobeView:
    """Items of the wardrobe or laundry screen, grouped by category."""

    view: ViewState
    groups: dict[str, list[ClothingItem]]
    total: int
    dirty_count: int


@dataclass(slots=True)
class OutfitPlan:
    """Weather used for a recommendation, the recommendation and its items."""

    weather: WeatherSnapshot
    recommendation: OutfitRecommendation
    items: list[ClothingItem]


class WardrobeService:
    """Facade over the repository and the stylist logic.

    Mutations hold the user's repository lock so concurrent requests for one
    user write full snapshots one after another.
    """

    def __init__(self, repository: WardrobeRepository, logic: StylistLogic) -> None:
        self._repository = repository
        self._logic = logic

    @classmethod
    def from_settings(cls, settings: StyleAISettings, client: GenAIClient) -> "WardrobeService":
        """Wire the repository, try-on service and logic from settings."""

        repository = WardrobeRepository(
            Path(settings.storage_root),
            Path(settings.generated_root),
            key=settings.storage_key,
        )
        logic = StylistLogic(client, TryOnService(client, repository))
        return cls(repository, logic)

    @property
    def logic(self) -> StylistLogic:
        return self._logic

    def store(self, user_id: str) -> WardrobeStore:
        return self._repository.store_for(user_id)

    def view(self, user_id: str, view: ViewState) -> WardrobeView:
        """Return the wardrobe (clean) or laundry (dirty) screen."""

        if view not in (ViewState.WARDROBE, ViewState.LAUNDRY):
            raise InvalidRequestError(f"View {view.value!r} does not list clothes.")
        store = self.store(user_id)
        items = store.view_by_cleanliness(view is ViewState.WARDROBE)
        return WardrobeView(
            view=view,
            groups=store.group_by_category(items),
            total=len(items),
            dirty_count=store.count_dirty(),
        )

    async def add_photo(self, user_id: str, photo: bytes) -> ClothingItem:
        """Classify ``photo`` and put the new item at the top of the wardrobe."""

        item = await self._logic.create_item(photo)
        async with self._repository.lock_for(user_id):
            return self.store(user_id).add(item)

    async def remove(self, user_id: str, item_id: str) -> None:
        async with self._repository.lock_for(user_id):
            self.store(user_id).remove(item_id)

    async def toggle_clean(self, user_id: str, item_id: str) -> ClothingItem | None:
        async with self._repository.lock_for(user_id):
            return self.store(user_id).toggle_clean(item_id)

    async def plan_outfit(self, user_id: str, location: str, occasion: Occasion) -> OutfitPlan:
        """Refresh the weather for ``location`` and recommend an outfit for it."""

        weather = await self._logic.fetch_weather(location)
        store = self.store(user_id)
        recommendation = await self._logic.recommend_outfit(weather, store.items, occasion)
        return OutfitPlan(
            weather=weather,
            recommendation=recommendation,
            items=recommendation.resolve(store.items),
        )

    async def try_on(self, user_id: str, person_image: str | None, item_ids: list[str]) -> TryOnResult:
        """Dress the person in the selected wardrobe items."""

        unique_ids = list(dict.fromkeys(item_ids))
        items = self.store(user_id).find(unique_ids)
        if len(items) != len(unique_ids):
            raise InvalidRequestError("Unele articole selectate nu mai există în garderobă.")
        return await self._logic.synthesize_try_on(user_id, person_image, items)

    async def reset(self, user_id: str) -> None:
        await self._repository.reset_user(user_id)
