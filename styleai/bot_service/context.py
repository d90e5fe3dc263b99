"""Shared dependencies passed into handler setup functions."""

from __future__ import annotations

from dataclasses import dataclass

from styleai.bot_service.session import SessionRegistry
from styleai.services.wardrobe import WardrobeService


@dataclass(slots=True)
class BotContext:
    """Container for objects shared across handlers."""

    service: WardrobeService
    sessions: SessionRegistry
