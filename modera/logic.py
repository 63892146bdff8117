"""High-level generation flow that threads the credential state through each call."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from modera.auth.gate import AuthGate, AuthState
from modera.catalog.attributes import AttributeSet
from modera.errors import FailureKind, StudioError, classify_failure
from modera.imggen import ImageGenerationService, ImagePayload, ImageResult

logger = logging.getLogger(__name__)

ACCESS_DENIED_MESSAGE = "Access denied. Please select a valid API key with proper permissions."
KEY_REQUIRED_MESSAGE = "API Key required. Please link your Google Cloud project."
GENERIC_FAILURE_MESSAGE = "An error occurred during generation."


@dataclass(slots=True, frozen=True)
class GenerationOutcome:
    """Result of one generation request and the credential state that follows it."""

    auth_state: AuthState
    result: ImageResult | None = None
    error: StudioError | None = None
    failure: FailureKind | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


class StudioLogic:
    """Runs a generation and decides the next credential state."""

    def __init__(self, image_service: ImageGenerationService) -> None:
        self._image_service = image_service

    async def generate(
        self,
        image: ImagePayload,
        config: AttributeSet,
        *,
        auth_state: AuthState,
        api_key: str | None,
    ) -> GenerationOutcome:
        """Generate an image; failures come back as an outcome, never raised."""

        try:
            result = await self._image_service.generate(image, config, api_key=api_key)
        except StudioError as exc:
            kind = classify_failure(exc)
            next_state = AuthGate.after_failure(auth_state, kind)
            logger.error("Generation failed (%s): %s", kind.value, exc)
            return GenerationOutcome(auth_state=next_state, error=exc, failure=kind)
        return GenerationOutcome(auth_state=auth_state, result=result)

    @staticmethod
    def user_message(outcome: GenerationOutcome) -> str:
        """Return the text shown to the user for a failed outcome."""

        if outcome.failure is FailureKind.ACCESS:
            return ACCESS_DENIED_MESSAGE
        if outcome.failure is FailureKind.CREDENTIAL_MISSING:
            return KEY_REQUIRED_MESSAGE
        return str(outcome.error or "") or GENERIC_FAILURE_MESSAGE
