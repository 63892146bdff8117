"""Gemini-based studio image generation with a single model fallback."""

from __future__ import annotations

import logging

from modera.api.gemini_client import GeminiClient
from modera.catalog.attributes import AttributeSet
from modera.config.settings import ModeraSettings
from modera.errors import (
    CredentialMissing,
    FailureKind,
    GeminiRequestError,
    ResponseParseError,
    classify_failure,
)
from modera.imggen.extractor import extract_image
from modera.imggen.models import (
    GenerationRequest,
    HighQualityImageConfig,
    ImagePayload,
    ImageResult,
    StandardImageConfig,
)
from modera.imggen.prompt_builder import PromptBuilder

logger = logging.getLogger(__name__)


class ImageGenerationService:
    """Tries the primary model, then the fallback model after an access failure."""

    def __init__(
        self,
        client: GeminiClient,
        settings: ModeraSettings,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        self._client = client
        self._settings = settings
        self._prompt_builder = prompt_builder or PromptBuilder()

    def primary_request(self, prompt: str, image: ImagePayload) -> GenerationRequest:
        return GenerationRequest(
            prompt=prompt,
            image=image,
            model=self._settings.primary_model,
            image_config=HighQualityImageConfig(
                aspect_ratio=self._settings.aspect_ratio,
                image_size=self._settings.image_size,
            ),
        )

    def fallback_request(self, prompt: str, image: ImagePayload) -> GenerationRequest:
        return GenerationRequest(
            prompt=prompt,
            image=image,
            model=self._settings.fallback_model,
            image_config=StandardImageConfig(aspect_ratio=self._settings.aspect_ratio),
        )

    async def generate(
        self,
        image: ImagePayload,
        config: AttributeSet,
        *,
        api_key: str | None,
    ) -> ImageResult:
        """
        Generate a studio photo of a model wearing the garment in ``image``.

        At most two remote calls are made. When the primary model fails with a
        permission or not-found error the fallback model is tried once and its
        error, if any, propagates unchanged. Other failures propagate directly.
        """

        if not api_key:
            raise CredentialMissing("API Key not found. Please select a key.")

        prompt = self._prompt_builder.build(config)
        try:
            return await self._attempt(self.primary_request(prompt, image), api_key)
        except (GeminiRequestError, ResponseParseError) as exc:
            if classify_failure(exc) is not FailureKind.ACCESS:
                logger.warning("Primary generation failed, not retrying: %s", exc)
                raise
            logger.warning(
                "Primary model %s unavailable (%s); falling back to %s.",
                self._settings.primary_model,
                exc,
                self._settings.fallback_model,
            )

        return await self._attempt(self.fallback_request(prompt, image), api_key)

    async def _attempt(self, request: GenerationRequest, api_key: str) -> ImageResult:
        response = await self._client.generate_content(request, api_key=api_key)
        return extract_image(response)
