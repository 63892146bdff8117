"""Entrypoint for the studio Telegram bot."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from pathlib import Path

from aiogram import Bot, Dispatcher, Router

from modera.api import GeminiClient
from modera.bot_service.context import BotContext
from modera.bot_service.handlers import setup_handlers
from modera.bot_service.state_machine import StateMachine
from modera.config.settings import get_settings
from modera.imggen import ImageGenerationService
from modera.logic import StudioLogic
from modera.monitoring.logging import configure_logging
from modera.storage import UserStorage

logger = logging.getLogger(__name__)


async def main() -> None:
    """Initialise dependencies and start polling Telegram."""

    settings = get_settings()
    configure_logging(settings)
    if not settings.bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is not configured.")
    if not settings.gemini_api_key:
        logger.info("GEMINI_API_KEY is not set; users must link their own key with /key.")

    storage = UserStorage(Path(settings.storage_root), Path(settings.generated_root))
    client = GeminiClient(settings)
    logic = StudioLogic(ImageGenerationService(client, settings))
    context = BotContext(
        settings=settings,
        storage=storage,
        logic=logic,
        state_machine=StateMachine(storage),
    )

    # Plain text: error details from the API may contain markup characters.
    bot = Bot(token=settings.bot_token)
    dispatcher = Dispatcher()
    router = Router()
    setup_handlers(router, context)
    dispatcher.include_router(router)

    try:
        logger.info("Starting studio bot polling.")
        await dispatcher.start_polling(bot)
    finally:
        with suppress(Exception):
            await bot.session.close()
        with suppress(Exception):
            await client.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
