"""Error taxonomy and failure classification for the generation pipeline."""

from __future__ import annotations

from enum import Enum


class StudioError(RuntimeError):
    """Base class for failures surfaced by the generation pipeline."""


class CredentialMissing(StudioError):
    """Raised before any network call when no API key is available."""


class GeminiRequestError(StudioError):
    """Raised when the Gemini API responds with an error or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None, status: str | None = None) -> None:
        self.status_code = status_code
        self.status = status
        super().__init__(message)


class ResponseParseError(StudioError):
    """Raised when a generation response cannot be turned into an image."""


class MalformedResponse(ResponseParseError):
    """The response carried no content parts at all."""


class NoImageInResponse(ResponseParseError):
    """Content parts were present but none carried inline image data."""


class SelectionFailed(StudioError):
    """Raised when the interactive credential selection cannot complete."""


class FailureKind(str, Enum):
    ACCESS = "access"
    CREDENTIAL_MISSING = "credential_missing"
    OTHER = "other"


# Gemini reports permission and missing-model problems inconsistently, so
# matching is done on both status codes and message text.
ACCESS_ERROR_MARKERS: tuple[str, ...] = (
    "403",
    "PERMISSION_DENIED",
    "404",
    "NOT_FOUND",
    "Requested entity was not found",
)
ACCESS_STATUS_CODES = frozenset({403, 404})


def is_access_error(exc: BaseException) -> bool:
    """Return ``True`` when the failure looks like a permission or not-found problem."""

    # Parse errors may quote the model's own reply text.
    if isinstance(exc, ResponseParseError):
        return False
    if isinstance(exc, GeminiRequestError):
        if exc.status_code in ACCESS_STATUS_CODES:
            return True
        if exc.status and exc.status.upper() in ACCESS_ERROR_MARKERS:
            return True
    text = str(exc)
    return any(marker in text for marker in ACCESS_ERROR_MARKERS)


def classify_failure(exc: BaseException) -> FailureKind:
    """Classify a failure for the fallback decision and the credential reset."""

    if isinstance(exc, CredentialMissing):
        return FailureKind.CREDENTIAL_MISSING
    if is_access_error(exc):
        return FailureKind.ACCESS
    return FailureKind.OTHER
