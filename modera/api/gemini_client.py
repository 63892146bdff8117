"""Async wrapper around the Gemini ``generateContent`` REST endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from modera.config.settings import ModeraSettings
from modera.errors import GeminiRequestError

if TYPE_CHECKING:
    from modera.imggen.models import GenerationRequest

logger = logging.getLogger(__name__)


class GeminiClient:
    """Sends generation requests with a caller-supplied API key."""

    def __init__(
        self,
        settings: ModeraSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.gemini_base_url.rstrip("/"),
            timeout=httpx.Timeout(settings.request_timeout),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def _request_json(
        self,
        method: str,
        endpoint: str,
        *,
        api_key: str,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self._client.request(
                method,
                endpoint,
                json=json_body,
                headers={"x-goog-api-key": api_key},
            )
        except httpx.HTTPError as exc:
            raise GeminiRequestError(f"Could not reach Gemini: {exc}") from exc

        if not response.is_success:
            raise _error_from_response(response)
        if not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Gemini returned a non-JSON body: %s", response.text[:200])
            raise GeminiRequestError(
                "Gemini returned an unreadable response.",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise GeminiRequestError(
                "Gemini returned an unexpected response.",
                status_code=response.status_code,
            )
        return payload

    async def generate_content(self, request: GenerationRequest, *, api_key: str) -> dict[str, Any]:
        """Run one ``generateContent`` call and return the decoded JSON body."""

        logger.info(
            "Generating with %s (image size directive: %s).",
            request.model,
            "yes" if request.is_high_quality else "no",
        )
        return await self._request_json(
            "POST",
            f"/models/{request.model}:generateContent",
            api_key=api_key,
            json_body=request.to_payload(),
        )

    async def get_model(self, model: str, *, api_key: str) -> bool:
        """Return ``True`` when the key can see the given model."""

        payload = await self._request_json("GET", f"/models/{model}", api_key=api_key)
        return bool(payload.get("name"))


def _error_from_response(response: httpx.Response) -> GeminiRequestError:
    status: str | None = None
    detail = response.text
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        error = body["error"]
        status = error.get("status")
        detail = error.get("message") or detail
    label = f"{response.status_code} {status}" if status else str(response.status_code)
    logger.error("Gemini API error: %s - %s", label, detail)
    return GeminiRequestError(
        f"Gemini returned {label}: {detail}",
        status_code=response.status_code,
        status=status,
    )
