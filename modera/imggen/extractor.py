"""Parsing of ``generateContent`` responses into image results."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Mapping

from modera.errors import MalformedResponse, NoImageInResponse
from modera.imggen.models import ImageResult

logger = logging.getLogger(__name__)


def extract_image(response: Mapping[str, Any]) -> ImageResult:
    """Return the first inline image of the first candidate as a PNG data URI.

    The model output is always labelled PNG, whatever MIME type the part declares.
    """

    if not isinstance(response, Mapping):
        logger.warning("Generation response is not an object: %r", response)
        raise MalformedResponse("No content received from generation model.")

    candidates = response.get("candidates") or []
    candidate = candidates[0] if isinstance(candidates, list) and candidates else {}
    if not isinstance(candidate, Mapping):
        candidate = {}
    content = candidate.get("content") or {}
    parts = content.get("parts") if isinstance(content, Mapping) else None
    if not parts or not isinstance(parts, list):
        logger.warning("Generation response has no content parts: %s", response)
        raise MalformedResponse("No content received from generation model.")

    texts: list[str] = []
    for part in parts:
        if not isinstance(part, Mapping):
            continue
        inline = part.get("inlineData") or part.get("inline_data")
        if isinstance(inline, Mapping) and inline.get("data"):
            return _decoded_result(str(inline["data"]))
        if part.get("text"):
            texts.append(str(part["text"]).strip())

    logger.warning(
        "Generation response has no inline image (finishReason=%s).",
        candidate.get("finishReason"),
    )
    message = "No image data found in response."
    if texts:
        message = f"{message} Model replied: {' '.join(texts)}"
    raise NoImageInResponse(message)


def _decoded_result(encoded: str) -> ImageResult:
    try:
        base64.b64decode(encoded, validate=True)
    except (ValueError, binascii.Error) as exc:
        logger.warning("Inline image data is not valid base64: %s", exc)
        raise MalformedResponse("Image data in response is not valid base64.") from exc
    return ImageResult.from_base64(encoded)
