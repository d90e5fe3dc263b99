"""Prompt building and image generation utilities."""

from .prompt_builder import PromptBuilder, StylingContext
from .try_on import TryOnError, TryOnService

__all__ = ["PromptBuilder", "StylingContext", "TryOnError", "TryOnService"]
