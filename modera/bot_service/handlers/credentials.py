"""Handlers for linking a Gemini API key."""

from __future__ import annotations

import logging
from contextlib import suppress

from aiogram import F, Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.types import Message

from modera.bot_service.context import BotContext
from modera.bot_service.filters import StageFilter
from modera.bot_service.state_machine import ConversationState
from modera.errors import SelectionFailed
from modera.storage import UserProfile

logger = logging.getLogger(__name__)


def setup(router: Router, context: BotContext) -> None:
    """Register API key selection handlers."""

    @router.message(Command("key"))
    async def request_key(message: Message) -> None:
        profile = await context.storage.load(str(message.from_user.id))
        await context.state_machine.set_state(profile, ConversationState.AWAITING_API_KEY)
        await message.answer(
            "Send your Gemini API key from a paid Google Cloud project. "
            "I will delete the message right after reading it.",
        )

    @router.message(StageFilter(context, ConversationState.AWAITING_API_KEY), F.text, ~F.text.startswith("/"))
    async def handle_key(message: Message, profile: UserProfile) -> None:
        # The key should not stay in the chat history.
        with suppress(TelegramBadRequest):
            await message.delete()

        gate = context.auth_gate(profile, submitted_key=message.text)
        try:
            state = await gate.select()
        except SelectionFailed as exc:
            await message.answer(str(exc))
            return

        await context.storage.set_auth_state(profile, state.value)
        await context.state_machine.settle(profile)
        logger.info("User %s linked an API key.", profile.user_id)
        await message.answer("API key linked. Use /generate when your garment is ready.")
