"""Prompt building and image generation utilities."""

from .extractor import extract_image
from .image_gen import ImageGenerationService
from .models import (
    GenerationRequest,
    HighQualityImageConfig,
    ImagePayload,
    ImageResult,
    StandardImageConfig,
)
from .prompt_builder import PromptBuilder, compose_prompt

__all__ = [
    "GenerationRequest",
    "HighQualityImageConfig",
    "ImageGenerationService",
    "ImagePayload",
    "ImageResult",
    "PromptBuilder",
    "StandardImageConfig",
    "compose_prompt",
    "extract_image",
]
