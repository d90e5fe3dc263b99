"""Async wrapper around the OpenAI-compatible generative AI endpoint."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Mapping, Sequence

import httpx
import openai
from openai import AsyncOpenAI

from styleai.config.settings import StyleAISettings


class GenAIRequestError(RuntimeError):
    """Raised when the AI service fails or answers with something unusable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


logger = logging.getLogger(__name__)


def parse_json_content(content: str | None) -> Any:
    """Decode a JSON reply, tolerating Markdown code fences around it."""

    text = (content or "").strip()
    if text.startswith("```"):
        text = text.replace("```json", "").replace("```", "").strip()
    if not text:
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise GenAIRequestError(f"Model returned invalid JSON: {text[:200]}") from exc


class GenAIClient:
    """Provides helper methods for text, JSON and image-output chat calls."""

    def __init__(
        self,
        settings: StyleAISettings,
        *,
        http_client: httpx.AsyncClient | None = None,
        openai_client: AsyncOpenAI | None = None,
    ) -> None:
        base_url = settings.genai_base_url.rstrip("/")
        self._settings = settings
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=settings.request_timeout,
            headers={
                "Authorization": f"Bearer {settings.genai_api_key}",
            },
        )
        self._openai = openai_client or AsyncOpenAI(
            api_key=settings.genai_api_key,
            base_url=base_url,
            timeout=settings.request_timeout,
        )

    async def close(self) -> None:
        """Close the underlying HTTP clients."""

        await self._client.aclose()
        await self._openai.close()

    async def _request_json(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self._client.request(method, endpoint.lstrip("/"), json=json_body)
            response.raise_for_status()
            if not response.content:
                return {}
            return response.json()
        except httpx.TimeoutException as exc:
            raise GenAIRequestError("Timed out waiting for the AI service.") from exc
        except httpx.HTTPStatusError as exc:
            raise GenAIRequestError(
                f"AI service returned {exc.response.status_code}: {exc.response.text}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise GenAIRequestError(f"AI service is unreachable: {exc}") from exc
        except ValueError as exc:
            raise GenAIRequestError("AI service returned a non-JSON body.") from exc

    async def _create_completion(self, messages: Sequence[Mapping[str, Any]], **kwargs: Any) -> str:
        try:
            response = await self._openai.chat.completions.create(
                model=self._settings.genai_chat_model,
                messages=list(messages),  # type: ignore[arg-type]
                **kwargs,
            )
        except openai.APIStatusError as exc:
            raise GenAIRequestError(str(exc), status_code=exc.status_code) from exc
        except openai.APIError as exc:
            raise GenAIRequestError(str(exc)) from exc
        if not response.choices:
            raise GenAIRequestError("Model returned no choices.")
        return response.choices[0].message.content or ""

    async def chat_text(self, messages: Sequence[Mapping[str, Any]]) -> str:
        """Return the plain text answer of the chat model."""

        return (await self._create_completion(messages)).strip()

    async def chat_json(self, messages: Sequence[Mapping[str, Any]]) -> Any:
        """Call the chat model in JSON mode and return the decoded object."""

        content = await self._create_completion(messages, response_format={"type": "json_object"})
        return parse_json_content(content)

    async def chat_with_images(self, messages: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
        """Ask the image model for an image answer and return the raw payload."""

        payload = {
            "model": self._settings.genai_image_model,
            "messages": list(messages),
            "modalities": ["image", "text"],
        }
        return await self._request_json("POST", "/chat/completions", json_body=payload)

    async def ping(self) -> bool:
        """Return ``True`` if the upstream service responds to a model listing call."""

        models = await self._openai.models.list()
        return bool(models.data)

    @staticmethod
    def image_payload_to_result(payload: Mapping[str, Any]) -> tuple[bytes | None, str | None]:
        """Extract base64 image content or URL from the chat completions response."""

        choices = payload.get("choices") or []
        if not choices:
            logger.warning("Image response has no choices.")
            return None, None
        message = choices[0].get("message") or {}
        image_url = None

        images = message.get("images") or []
        if images:
            image_entry = images[0] or {}
            if isinstance(image_entry, Mapping):
                image_info = image_entry.get("image_url") or {}
                if isinstance(image_info, Mapping):
                    image_url = image_info.get("url")

        content = message.get("content")
        if image_url is None and isinstance(content, str) and content.startswith("data:"):
            image_url = content
        elif image_url is None and isinstance(content, list):
            for part in content:
                if (
                    isinstance(part, Mapping)
                    and part.get("type") == "image_url"
                    and isinstance(part.get("image_url"), Mapping)
                ):
                    image_url = part["image_url"].get("url")
                    if image_url:
                        break

        if not image_url:
            logger.warning("Image response contains no image_url field.")
            return None, None

        if image_url.startswith("data:") and "," in image_url:
            _, encoded = image_url.split(",", 1)
            try:
                return base64.b64decode(encoded, validate=True), image_url
            except (ValueError, binascii.Error):
                return None, image_url

        return None, image_url
