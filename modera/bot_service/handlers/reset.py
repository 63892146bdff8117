"""Handler that clears stored user data."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message, ReplyKeyboardRemove

from modera.bot_service.context import BotContext


def setup(router: Router, context: BotContext) -> None:
    """Register /reset handler."""

    @router.message(Command("reset"))
    async def handle_reset(message: Message) -> None:
        user_id = str(message.from_user.id)
        await context.storage.reset_user(user_id)
        profile = await context.storage.load(user_id)
        state = await context.auth_gate(profile).initial_state()
        await context.storage.set_auth_state(profile, state.value)
        await message.answer(
            "All data cleared. Send a garment photo to start again.",
            reply_markup=ReplyKeyboardRemove(),
        )
