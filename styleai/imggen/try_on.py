"""Virtual try-on image generation service."""

from __future__ import annotations

import asyncio
import logging
import mimetypes
from datetime import datetime
from typing import Sequence

from styleai.api.genai_client import GenAIClient, GenAIRequestError
from styleai.imggen.prompt_builder import PromptBuilder
from styleai.storage.models import ClothingItem, TryOnResult
from styleai.storage.repository import WardrobeRepository

logger = logging.getLogger(__name__)


class TryOnError(RuntimeError):
    """Raised when the try-on image could not be produced."""


class TryOnService:
    """Submits try-on requests and keeps a copy of every generated image."""

    def __init__(
        self,
        client: GenAIClient,
        repository: WardrobeRepository,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        self._client = client
        self._repository = repository
        self._prompt_builder = prompt_builder or PromptBuilder()

    async def generate(
        self,
        user_id: str,
        person_image: str,
        items: Sequence[ClothingItem],
    ) -> TryOnResult:
        """
        Dress the person in ``items`` and return the generated image.

        The result always carries a data URI or URL in ``image``; ``image_path``
        is set when the image bytes were returned inline and saved to disk.
        """

        messages = self._prompt_builder.try_on(person_image, items)
        try:
            payload = await self._client.chat_with_images(messages)
        except GenAIRequestError as exc:
            logger.error("Try-on request failed: %s", exc)
            raise TryOnError("Eroare la generare. Încearcă din nou.") from exc

        image_bytes, image_url = GenAIClient.image_payload_to_result(payload)
        if not image_url:
            raise TryOnError("Modelul nu a generat nicio imagine. Încearcă din nou.")

        if image_bytes:
            generated_dir = self._repository.generated_dir(user_id)
            mime_type = image_url.split(";", 1)[0].removeprefix("data:")
            extension = mimetypes.guess_extension(mime_type) or ".png"
            output_path = generated_dir / f"tryon_{datetime.utcnow().strftime('%Y%m%d_%H%M%S_%f')}{extension}"
            await asyncio.to_thread(output_path.write_bytes, image_bytes)
            return TryOnResult(image=image_url, image_path=str(output_path))

        logger.warning("Try-on response did not include binary data; returning URL only.")
        return TryOnResult(image=image_url)
