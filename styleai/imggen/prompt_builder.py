"""Prompt construction helpers for the stylist model calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from styleai.imgproc.encoding import strip_data_uri
from styleai.storage.models import Category, ClothingItem, Occasion, WeatherSnapshot

Message = dict[str, Any]


@dataclass(slots=True)
class StylingContext:
    """Structured information the stylist uses to pick an outfit."""

    weather: WeatherSnapshot
    occasion: Occasion

    def summary(self) -> str:
        return (
            f"Location: {self.weather.location}. "
            f"Weather: {self.weather.temperature:g}°C, {self.weather.condition}. "
            f"Occasion: {self.occasion.value}."
        )


def _image_part(data_uri: str) -> dict[str, Any]:
    # the endpoint expects JPEG payloads; re-prefix whatever was stored
    return {
        "type": "image_url",
        "image_url": {"url": f"data:image/jpeg;base64,{strip_data_uri(data_uri)}"},
    }


def _text_part(text: str) -> dict[str, Any]:
    return {"type": "text", "text": text}


class PromptBuilder:
    """Builds the chat messages sent to the generative model."""

    def classification(self, image: str) -> list[Message]:
        categories = ", ".join(Category.labels())
        instructions = (
            "Analyze this clothing item. "
            f"Classify it into one of these exact categories: {categories}. "
            "Also provide a short, 5-word visual description (color, style). "
            'Answer strictly as JSON: {"category": "...", "description": "..."}.'
        )
        return [
            {
                "role": "user",
                "content": [_image_part(image), _text_part(instructions)],
            },
        ]

    def weather(self, location: str) -> list[Message]:
        return [
            {
                "role": "user",
                "content": (
                    f"Give the current temperature (in Celsius) and weather condition in {location} right now. "
                    "Return a JSON with properties: temp (number), condition (string, in Romanian), "
                    "location (string)."
                ),
            },
        ]

    def outfit(self, context: StylingContext, clean_items: Sequence[ClothingItem]) -> list[Message]:
        clothes = "\n".join(
            f"- ID: {item.id}, Category: {item.category.value}, Desc: {item.description}"
            for item in clean_items
        )
        return [
            {
                "role": "system",
                "content": (
                    "Context: personal stylist. Pick an outfit only from the wardrobe below, "
                    "never invent items. Answer strictly as JSON: "
                    '{"selectedItemIds": ["..."], "outfitName": "...", "reasoning": "..."}. '
                    "Write outfitName and reasoning in Romanian."
                ),
            },
            {
                "role": "user",
                "content": f"{context.summary()} Wardrobe:\n{clothes}\nTask: select outfit.",
            },
        ]

    def try_on(
        self,
        person_image: str,
        items: Sequence[ClothingItem],
        *,
        extra_instructions: Iterable[str] | None = None,
    ) -> list[Message]:
        """Return a request asking the image model to dress the person in ``items``."""

        garment_lines = [
            f"{index}) {item.description} ({item.category.value})"
            for index, item in enumerate(items, start=1)
        ]
        instructions = " ".join(
            part
            for part in [
                "Virtual try-on. Replace clothes on person (first image) with items provided.",
                "Garments in order: " + "; ".join(garment_lines) + "." if garment_lines else "",
                "Keep the face, body shape and background unchanged.",
                " ".join(extra_instructions or []),
            ]
            if part
        )
        parts = [_text_part(instructions), _image_part(person_image)]
        parts.extend(_image_part(item.image) for item in items)
        return [{"role": "user", "content": parts}]

    def trends(self) -> list[Message]:
        return [
            {
                "role": "user",
                "content": "Short fashion update for Romania (3 sentences), written in Romanian.",
            },
        ]
