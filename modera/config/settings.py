"""Settings loader for the studio bot."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate environment variables from a .env file if present."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def _optional_float(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    return float(raw)


@dataclass(slots=True, frozen=True)
class ModeraSettings:
    """Settings required by the generation pipeline and the Telegram host."""

    bot_token: str = ""
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    primary_model: str = "gemini-3-pro-image-preview"
    fallback_model: str = "gemini-2.5-flash-image"
    aspect_ratio: str = "3:4"
    image_size: str = "2K"
    # ``None`` leaves request duration to the remote transport.
    request_timeout: float | None = None
    status_interval: float = 2.0
    storage_root: str = "storage/users"
    generated_root: str = "storage/generated"
    log_level: str = "INFO"


def _build_settings() -> ModeraSettings:
    _load_env_file()
    return ModeraSettings(
        bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY", ""),
        gemini_base_url=os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"),
        primary_model=os.getenv("MODERA_PRIMARY_MODEL", "gemini-3-pro-image-preview"),
        fallback_model=os.getenv("MODERA_FALLBACK_MODEL", "gemini-2.5-flash-image"),
        aspect_ratio=os.getenv("MODERA_ASPECT_RATIO", "3:4"),
        image_size=os.getenv("MODERA_IMAGE_SIZE", "2K"),
        request_timeout=_optional_float(os.getenv("MODERA_REQUEST_TIMEOUT")),
        status_interval=float(os.getenv("MODERA_STATUS_INTERVAL", "2.0")),
        storage_root=os.getenv("MODERA_STORAGE_ROOT", "storage/users"),
        generated_root=os.getenv("MODERA_GENERATED_ROOT", "storage/generated"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@lru_cache(maxsize=1)
def get_settings() -> ModeraSettings:
    """Return cached settings instance."""

    return _build_settings()
