"""Client for the generative AI service."""

from .genai_client import GenAIClient, GenAIRequestError

__all__ = ["GenAIClient", "GenAIRequestError"]
