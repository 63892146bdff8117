"""Start command handler."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import CommandStart
from aiogram.types import Message

from modera.auth.gate import AuthState
from modera.bot_service.context import BotContext


def setup(router: Router, context: BotContext) -> None:
    """Register /start handler."""

    @router.message(CommandStart())
    async def handle_start(message: Message) -> None:
        user_id = str(message.from_user.id)
        profile = await context.storage.load(user_id)
        state = await context.auth_gate(profile).initial_state()
        await context.storage.set_auth_state(profile, state.value)
        await context.state_machine.settle(profile)

        text = (
            "Welcome to Modera Studio. Send me a photo of a garment and I will dress a model in it.\n"
            "Use /configure to pick the model, pose and style, /settings to review them, "
            "and /generate to shoot."
        )
        if state is AuthState.NO_CREDENTIAL:
            text += "\n\nFirst, link a Gemini API key with /key."
        await message.answer(text)
