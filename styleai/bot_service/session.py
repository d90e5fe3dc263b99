"""Per-user screen state of the bot."""

from __future__ import annotations

from dataclasses import dataclass, field

from styleai.storage.models import (
    DEFAULT_OCCASION,
    Occasion,
    OutfitRecommendation,
    ViewState,
    WeatherSnapshot,
)


@dataclass(slots=True)
class ViewSession:
    """Transient state of one chat; nothing here is persisted."""

    location: str
    view: ViewState = ViewState.WARDROBE
    occasion: Occasion = DEFAULT_OCCASION
    weather: WeatherSnapshot | None = None
    outfit: OutfitRecommendation | None = None
    person_image: str | None = None
    try_on_ids: list[str] = field(default_factory=list)

    def toggle_try_on(self, item_id: str) -> bool:
        """Add or remove ``item_id`` from the try-on selection; return ``True`` if now selected."""

        if item_id in self.try_on_ids:
            self.try_on_ids.remove(item_id)
            return False
        self.try_on_ids.append(item_id)
        return True


class SessionRegistry:
    """Keeps the current view of every chat in memory."""

    def __init__(self, default_location: str) -> None:
        self._default_location = default_location
        self._sessions: dict[str, ViewSession] = {}

    def get(self, user_id: str) -> ViewSession:
        if user_id not in self._sessions:
            self._sessions[user_id] = ViewSession(location=self._default_location)
        return self._sessions[user_id]

    def current(self, user_id: str) -> ViewState:
        return self.get(user_id).view

    def set_view(self, user_id: str, view: ViewState) -> ViewSession:
        session = self.get(user_id)
        session.view = view
        return session

    def reset(self, user_id: str) -> None:
        self._sessions.pop(user_id, None)
