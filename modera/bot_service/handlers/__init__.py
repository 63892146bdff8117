"""Register message and command handlers."""

from __future__ import annotations

from aiogram import Router

from modera.bot_service.context import BotContext

from . import configure, credentials, generate, reset, start, upload


def setup_handlers(router: Router, context: BotContext) -> None:
    """Attach all handler groups to the provided router."""

    start.setup(router, context)
    reset.setup(router, context)
    credentials.setup(router, context)
    configure.setup(router, context)
    generate.setup(router, context)
    upload.setup(router, context)
