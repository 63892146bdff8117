"""Tests for the Gemini REST wrapper using a mocked transport."""

from __future__ import annotations

import json

import httpx
import pytest

from modera.api.gemini_client import GeminiClient
from modera.config.settings import ModeraSettings
from modera.errors import GeminiRequestError, is_access_error
from modera.imggen.models import GenerationRequest, HighQualityImageConfig, ImagePayload


def _request() -> GenerationRequest:
    return GenerationRequest(
        prompt="studio prompt",
        image=ImagePayload(b"X", "image/jpeg"),
        model="gemini-3-pro-image-preview",
        image_config=HighQualityImageConfig(),
    )


def _client(handler) -> GeminiClient:
    settings = ModeraSettings(gemini_base_url="https://gemini.test/v1beta")
    return GeminiClient(settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_generate_content_posts_to_model_endpoint() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"candidates": []})

    client = _client(handler)
    try:
        payload = await client.generate_content(_request(), api_key="user-key")
    finally:
        await client.close()

    assert payload == {"candidates": []}
    assert seen["url"] == "https://gemini.test/v1beta/models/gemini-3-pro-image-preview:generateContent"
    assert seen["key"] == "user-key"
    assert seen["body"]["generationConfig"]["imageConfig"]["imageSize"] == "2K"


@pytest.mark.asyncio
async def test_error_body_is_parsed_into_request_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            403,
            json={
                "error": {
                    "code": 403,
                    "message": "The caller does not have permission",
                    "status": "PERMISSION_DENIED",
                },
            },
        )

    client = _client(handler)
    try:
        with pytest.raises(GeminiRequestError) as excinfo:
            await client.generate_content(_request(), api_key="user-key")
    finally:
        await client.close()

    exc = excinfo.value
    assert exc.status_code == 403
    assert exc.status == "PERMISSION_DENIED"
    assert str(exc) == "Gemini returned 403 PERMISSION_DENIED: The caller does not have permission"
    assert is_access_error(exc)


@pytest.mark.asyncio
async def test_non_json_error_keeps_raw_text() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="upstream overloaded")

    client = _client(handler)
    try:
        with pytest.raises(GeminiRequestError) as excinfo:
            await client.generate_content(_request(), api_key="user-key")
    finally:
        await client.close()

    assert excinfo.value.status_code == 503
    assert "upstream overloaded" in str(excinfo.value)
    assert not is_access_error(excinfo.value)


@pytest.mark.asyncio
async def test_transport_failure_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    try:
        with pytest.raises(GeminiRequestError) as excinfo:
            await client.generate_content(_request(), api_key="user-key")
    finally:
        await client.close()

    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_get_model_reports_visible_model() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        return httpx.Response(200, json={"name": "models/gemini-2.5-flash-image"})

    client = _client(handler)
    try:
        assert await client.get_model("gemini-2.5-flash-image", api_key="k") is True
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_non_json_success_body_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy</html>", headers={"Content-Type": "text/html"})

    client = _client(handler)
    try:
        with pytest.raises(GeminiRequestError) as excinfo:
            await client.generate_content(_request(), api_key="user-key")
    finally:
        await client.close()

    assert excinfo.value.status_code == 200
    assert "unreadable" in str(excinfo.value)
    assert not is_access_error(excinfo.value)


@pytest.mark.asyncio
async def test_non_object_success_body_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"candidates": []}])

    client = _client(handler)
    try:
        with pytest.raises(GeminiRequestError):
            await client.generate_content(_request(), api_key="user-key")
    finally:
        await client.close()
