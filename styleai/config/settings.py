"""Settings loader for the StyleAI services."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai"


def _load_env_file(path: str = ".env") -> None:
    """Populate environment variables from a .env file if present."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(slots=True, frozen=True)
class StyleAISettings:
    """Settings shared by the HTTP API and the Telegram bot."""

    genai_api_key: str = ""
    genai_base_url: str = GEMINI_OPENAI_BASE_URL
    genai_chat_model: str = "gemini-3-flash-preview"
    genai_image_model: str = "gemini-2.5-flash-image"
    storage_root: str = "storage/users"
    generated_root: str = "storage/generated"
    storage_key: str = "styleai-wardrobe"
    default_location: str = "București"
    request_timeout: float = 60.0
    bot_token: str = ""
    environment: str = "dev"
    log_level: str = "INFO"


def _build_settings() -> StyleAISettings:
    _load_env_file()
    return StyleAISettings(
        genai_api_key=os.getenv("GENAI_API_KEY", ""),
        genai_base_url=os.getenv("GENAI_BASE_URL", GEMINI_OPENAI_BASE_URL),
        genai_chat_model=os.getenv("GENAI_CHAT_MODEL", "gemini-3-flash-preview"),
        genai_image_model=os.getenv("GENAI_IMAGE_MODEL", "gemini-2.5-flash-image"),
        storage_root=os.getenv("STYLEAI_STORAGE_ROOT", "storage/users"),
        generated_root=os.getenv("STYLEAI_GENERATED_ROOT", "storage/generated"),
        storage_key=os.getenv("STYLEAI_STORAGE_KEY", "styleai-wardrobe"),
        default_location=os.getenv("STYLEAI_DEFAULT_LOCATION", "București"),
        request_timeout=float(os.getenv("STYLEAI_REQUEST_TIMEOUT", "60")),
        bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@lru_cache(maxsize=1)
def get_settings() -> StyleAISettings:
    """Return cached settings instance."""

    return _build_settings()
