"""Tests for the environment-driven settings."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from styleai.config.settings import GEMINI_OPENAI_BASE_URL, StyleAISettings, get_settings

ENV_KEYS = (
    "GENAI_API_KEY",
    "GENAI_BASE_URL",
    "GENAI_CHAT_MODEL",
    "GENAI_IMAGE_MODEL",
    "STYLEAI_STORAGE_ROOT",
    "STYLEAI_GENERATED_ROOT",
    "STYLEAI_STORAGE_KEY",
    "STYLEAI_DEFAULT_LOCATION",
    "STYLEAI_REQUEST_TIMEOUT",
    "TELEGRAM_BOT_TOKEN",
    "ENVIRONMENT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(os, "environ", os.environ.copy())
    monkeypatch.chdir(tmp_path)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults() -> None:
    settings = get_settings()

    assert settings == StyleAISettings()
    assert settings.genai_base_url == GEMINI_OPENAI_BASE_URL
    assert settings.default_location == "București"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GENAI_API_KEY", "secret")
    monkeypatch.setenv("STYLEAI_DEFAULT_LOCATION", "Iași")
    monkeypatch.setenv("STYLEAI_REQUEST_TIMEOUT", "12.5")

    settings = get_settings()

    assert settings.genai_api_key == "secret"
    assert settings.default_location == "Iași"
    assert settings.request_timeout == 12.5
    assert get_settings() is settings


def test_env_file_does_not_override_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "# local\nGENAI_API_KEY=from-file\nTELEGRAM_BOT_TOKEN=bot-token\nnot a pair\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GENAI_API_KEY", "from-env")

    settings = get_settings()

    assert settings.genai_api_key == "from-env"
    assert settings.bot_token == "bot-token"
