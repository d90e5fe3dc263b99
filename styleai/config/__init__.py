from .settings import StyleAISettings, get_settings

__all__ = ["StyleAISettings", "get_settings"]
