"""External API clients."""

from .gemini_client import GeminiClient

__all__ = ["GeminiClient"]
