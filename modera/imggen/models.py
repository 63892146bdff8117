"""Value objects exchanged with the Gemini image models."""

from __future__ import annotations

import base64
import time
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Union

from PIL import Image, UnidentifiedImageError

PNG_DATA_URI_PREFIX = "data:image/png;base64,"
DOWNLOAD_NAME_PREFIX = "modera-studio"


@dataclass(slots=True, frozen=True)
class ImagePayload:
    """Encoded garment image exactly as uploaded by the user."""

    data: bytes
    mime_type: str

    @classmethod
    def from_upload(cls, data: bytes, mime_type: str | None = None) -> "ImagePayload":
        """Wrap uploaded bytes, identifying the format when the host gave no MIME type."""

        if mime_type:
            return cls(data=data, mime_type=mime_type)
        try:
            with Image.open(BytesIO(data)) as img:
                image_format = img.format
        except UnidentifiedImageError as exc:
            raise ValueError("Uploaded file is not a supported image.") from exc
        detected = Image.MIME.get(image_format or "")
        if not detected:
            raise ValueError(f"Cannot determine MIME type for image format {image_format!r}.")
        return cls(data=data, mime_type=detected)

    def as_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


@dataclass(slots=True, frozen=True)
class StandardImageConfig:
    """Image settings accepted by every model: aspect ratio only."""

    aspect_ratio: str = "3:4"

    def to_payload(self) -> dict[str, str]:
        return {"aspectRatio": self.aspect_ratio}


@dataclass(slots=True, frozen=True)
class HighQualityImageConfig:
    """Image settings for the primary model, which also accepts a size tier."""

    aspect_ratio: str = "3:4"
    image_size: str = "2K"

    def to_payload(self) -> dict[str, str]:
        return {"aspectRatio": self.aspect_ratio, "imageSize": self.image_size}


ImageConfig = Union[StandardImageConfig, HighQualityImageConfig]


@dataclass(slots=True, frozen=True)
class GenerationRequest:
    """A single attempt against one model."""

    prompt: str
    image: ImagePayload
    model: str
    image_config: ImageConfig

    @property
    def is_high_quality(self) -> bool:
        return isinstance(self.image_config, HighQualityImageConfig)

    def to_payload(self) -> dict[str, Any]:
        """Render the ``generateContent`` request body."""

        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": self.prompt},
                        {
                            "inline_data": {
                                "mime_type": self.image.mime_type,
                                "data": self.image.as_base64(),
                            },
                        },
                    ],
                },
            ],
            "generationConfig": {
                "responseModalities": ["TEXT", "IMAGE"],
                "imageConfig": self.image_config.to_payload(),
            },
        }


@dataclass(slots=True, frozen=True)
class ImageResult:
    """Generated image as a PNG data URI."""

    data_uri: str

    @classmethod
    def from_base64(cls, encoded: str) -> "ImageResult":
        return cls(data_uri=f"{PNG_DATA_URI_PREFIX}{encoded}")

    @property
    def mime_type(self) -> str:
        return "image/png"

    @property
    def base64_data(self) -> str:
        return self.data_uri.split(",", 1)[1]

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.base64_data)

    @staticmethod
    def download_name(timestamp_ms: int | None = None) -> str:
        """Return a collision-resistant file name for saving the result."""

        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        return f"{DOWNLOAD_NAME_PREFIX}-{timestamp_ms}.png"
