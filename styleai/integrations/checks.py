"""Connectivity checks for the external AI provider."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

from styleai.api.genai_client import GenAIClient
from styleai.config.settings import get_settings


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except Exception as exc:  # reported, not raised: this is a diagnostics tool
        return IntegrationCheckResult(name=name, success=False, message=str(exc))

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_genai() -> IntegrationCheckResult:
    """Ping the generative AI endpoint and return the result."""

    settings = get_settings()
    if not settings.genai_api_key:
        return IntegrationCheckResult(name="GenAI", success=False, message="GENAI_API_KEY is not configured.")

    client = GenAIClient(settings)

    async def _ping() -> bool:
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check(
        name="GenAI",
        factory=_ping,
        success_message=f"{settings.genai_base_url} is reachable.",
    )


async def run_all_checks() -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    return list(await asyncio.gather(check_genai()))
