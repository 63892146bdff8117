"""Tests for the primary/fallback generation policy."""

from __future__ import annotations

import pytest
import pytest_mock

from modera.api.gemini_client import GeminiClient
from modera.catalog.attributes import AttributeSet
from modera.config.settings import ModeraSettings
from modera.errors import CredentialMissing, GeminiRequestError, NoImageInResponse
from modera.imggen.image_gen import ImageGenerationService
from modera.imggen.models import HighQualityImageConfig, ImagePayload, StandardImageConfig

SETTINGS = ModeraSettings()
IMAGE = ImagePayload(data=b"X", mime_type="image/jpeg")


def _image_response(data: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"inlineData": {"mimeType": "image/png", "data": data}}]}}]}


def _service(mocker: pytest_mock.MockerFixture, *responses) -> tuple[ImageGenerationService, object]:
    client = mocker.Mock(spec=GeminiClient)
    client.generate_content = mocker.AsyncMock(side_effect=list(responses))
    return ImageGenerationService(client, SETTINGS), client


def _requests(client) -> list:
    return [call.args[0] for call in client.generate_content.await_args_list]


@pytest.mark.asyncio
async def test_primary_success_makes_single_call(mocker: pytest_mock.MockerFixture) -> None:
    service, client = _service(mocker, _image_response("YWJjMTIz"))

    result = await service.generate(IMAGE, AttributeSet(), api_key="key")

    assert result.data_uri == "data:image/png;base64,YWJjMTIz"
    requests = _requests(client)
    assert len(requests) == 1
    assert requests[0].model == SETTINGS.primary_model
    assert requests[0].image_config == HighQualityImageConfig(aspect_ratio="3:4", image_size="2K")
    assert client.generate_content.await_args.kwargs == {"api_key": "key"}


@pytest.mark.asyncio
async def test_access_error_falls_back_once_without_size(mocker: pytest_mock.MockerFixture) -> None:
    service, client = _service(
        mocker,
        GeminiRequestError("Gemini returned 403 PERMISSION_DENIED: denied", status_code=403),
        _image_response("eHl6Nzg5"),
    )

    result = await service.generate(IMAGE, AttributeSet(), api_key="key")

    assert result.data_uri == "data:image/png;base64,eHl6Nzg5"
    primary, fallback = _requests(client)
    assert primary.model == SETTINGS.primary_model
    assert fallback.model == SETTINGS.fallback_model
    assert fallback.image_config == StandardImageConfig(aspect_ratio="3:4")
    assert "imageSize" not in fallback.to_payload()["generationConfig"]["imageConfig"]
    assert fallback.prompt == primary.prompt
    assert fallback.image is IMAGE


@pytest.mark.asyncio
async def test_fallback_error_propagates_unchanged(mocker: pytest_mock.MockerFixture) -> None:
    fallback_error = GeminiRequestError("Gemini returned 403 PERMISSION_DENIED: bad key", status_code=403)
    service, client = _service(
        mocker,
        GeminiRequestError("Gemini returned 404 NOT_FOUND: no such model", status_code=404),
        fallback_error,
    )

    with pytest.raises(GeminiRequestError) as excinfo:
        await service.generate(IMAGE, AttributeSet(), api_key="key")

    assert excinfo.value is fallback_error
    assert client.generate_content.await_count == 2


@pytest.mark.asyncio
async def test_other_error_is_not_retried(mocker: pytest_mock.MockerFixture) -> None:
    overloaded = GeminiRequestError("Gemini returned 503 UNAVAILABLE: The model is overloaded.", status_code=503)
    service, client = _service(mocker, overloaded)

    with pytest.raises(GeminiRequestError) as excinfo:
        await service.generate(IMAGE, AttributeSet(), api_key="key")

    assert excinfo.value is overloaded
    assert client.generate_content.await_count == 1


@pytest.mark.asyncio
async def test_text_only_primary_response_is_not_retried(mocker: pytest_mock.MockerFixture) -> None:
    service, client = _service(
        mocker,
        {"candidates": [{"content": {"parts": [{"text": "Blocked by safety filter"}]}}]},
    )

    with pytest.raises(NoImageInResponse):
        await service.generate(IMAGE, AttributeSet(), api_key="key")

    assert client.generate_content.await_count == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", [None, ""])
async def test_missing_key_fails_without_network(mocker: pytest_mock.MockerFixture, api_key) -> None:
    service, client = _service(mocker)

    with pytest.raises(CredentialMissing):
        await service.generate(IMAGE, AttributeSet(), api_key=api_key)

    client.generate_content.assert_not_awaited()
