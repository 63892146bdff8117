"""Connectivity checks for the configured Gemini image models."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

from modera.api.gemini_client import GeminiClient
from modera.config.settings import ModeraSettings, get_settings
from modera.errors import GeminiRequestError


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except GeminiRequestError as exc:
        return IntegrationCheckResult(name=name, success=False, message=str(exc))

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_model(name: str, model: str, settings: ModeraSettings | None = None) -> IntegrationCheckResult:
    """Check that the operator key can see ``model``."""

    settings = settings or get_settings()
    if not settings.gemini_api_key:
        return IntegrationCheckResult(name=name, success=False, message="GEMINI_API_KEY is not configured.")

    client = GeminiClient(settings)

    async def _ping() -> bool:
        try:
            return await client.get_model(model, api_key=settings.gemini_api_key)
        finally:
            await client.close()

    return await _run_check(
        name=name,
        factory=_ping,
        success_message=f"Model {model} is available.",
    )


async def check_primary_model(settings: ModeraSettings | None = None) -> IntegrationCheckResult:
    settings = settings or get_settings()
    return await check_model("Primary model", settings.primary_model, settings)


async def check_fallback_model(settings: ModeraSettings | None = None) -> IntegrationCheckResult:
    settings = settings or get_settings()
    return await check_model("Fallback model", settings.fallback_model, settings)


async def run_all_checks() -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    return list(await asyncio.gather(check_primary_model(), check_fallback_model()))
