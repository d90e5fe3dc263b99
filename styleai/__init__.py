"""StyleAI: personal wardrobe assistant backed by a generative AI service."""

__version__ = "0.1.0"
