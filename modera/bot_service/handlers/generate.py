"""Command handler that runs the studio photoshoot."""

from __future__ import annotations

import logging
from contextlib import suppress

from aiogram import Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.types import FSInputFile, Message

from modera.auth.gate import AuthState
from modera.bot_service.context import BotContext
from modera.bot_service.status_ticker import STUDIO_STATUS_MESSAGES, StatusTicker
from modera.catalog.attributes import AttributeSet
from modera.imggen import ImagePayload
from modera.logic import KEY_REQUIRED_MESSAGE, StudioLogic

logger = logging.getLogger(__name__)


def setup(router: Router, context: BotContext) -> None:
    """Register the /generate handler."""

    @router.message(Command("generate"))
    async def handle_generate(message: Message) -> None:
        await generate_photo(message, context)


async def generate_photo(message: Message, context: BotContext) -> None:
    """Run one photoshoot for the sender, refusing while another is still running."""

    user_id = str(message.from_user.id)
    if user_id in context.in_flight:
        await message.answer("A photoshoot is already in progress. Please wait for it to finish.")
        return

    context.in_flight.add(user_id)
    try:
        await _run_generation(message, context, user_id)
    finally:
        context.in_flight.discard(user_id)


async def _run_generation(message: Message, context: BotContext, user_id: str) -> None:
    profile = await context.storage.load(user_id)
    garment = await context.storage.read_garment(profile)
    if garment is None or not profile.garment_mime_type:
        await message.answer("Send a garment photo first.")
        return

    auth_state = await context.resolve_auth_state(profile)
    if auth_state is AuthState.NO_CREDENTIAL:
        await message.answer(f"{KEY_REQUIRED_MESSAGE} Use /key to link one.")
        return

    image = ImagePayload(data=garment, mime_type=profile.garment_mime_type)
    config = AttributeSet.from_mapping(profile.attributes)
    api_key = context.credentials(profile).api_key

    status = await message.answer(STUDIO_STATUS_MESSAGES[0])
    ticker = StatusTicker(_status_editor(status), interval=context.settings.status_interval)
    async with ticker:
        outcome = await context.logic.generate(image, config, auth_state=auth_state, api_key=api_key)

    with suppress(TelegramBadRequest):
        await status.delete()

    if outcome.auth_state is not auth_state:
        await context.storage.set_auth_state(profile, outcome.auth_state.value)

    if not outcome.ok:
        text = StudioLogic.user_message(outcome)
        if outcome.auth_state is AuthState.NO_CREDENTIAL:
            text += " Use /key to link a key."
        await message.answer(text)
        return

    output_path = await context.storage.save_result(profile, outcome.result)
    logger.info("Generated studio photo for %s at %s.", user_id, output_path)
    await message.answer_photo(FSInputFile(output_path), caption="Your studio photo is ready.")
    await message.answer_document(FSInputFile(output_path, filename=output_path.name))


def _status_editor(status: Message):
    async def edit(text: str) -> None:
        await status.edit_text(text)

    return edit
