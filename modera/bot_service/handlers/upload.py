"""Handlers that receive the garment photo."""

from __future__ import annotations

import mimetypes

from aiogram import F, Router
from aiogram.exceptions import TelegramNetworkError
from aiogram.types import Message, ReplyKeyboardRemove

from modera.bot_service.context import BotContext
from modera.imggen import ImagePayload


def setup(router: Router, context: BotContext) -> None:
    """Register media upload handlers."""

    @router.message(F.photo)
    async def handle_photo(message: Message) -> None:
        # Telegram re-encodes photos as JPEG; the largest size is last.
        await _store_upload(message, context, message.photo[-1].file_id, "image/jpeg")

    @router.message(F.document)
    async def handle_document(message: Message) -> None:
        document = message.document
        mime_type = document.mime_type or ""
        if mime_type and not mime_type.startswith("image/"):
            await message.answer("Please send an image file of the garment.")
            return
        await _store_upload(message, context, document.file_id, mime_type or None)


async def _store_upload(message: Message, context: BotContext, file_id: str, mime_type: str | None) -> None:
    try:
        file_info = await message.bot.get_file(file_id)
        file_stream = await message.bot.download_file(file_info.file_path)
    except TelegramNetworkError:
        await message.answer("Could not download the photo from Telegram. Please try again.")
        return

    data = file_stream.read()
    file_stream.close()

    try:
        payload = ImagePayload.from_upload(data, mime_type)
    except ValueError as exc:
        await message.answer(str(exc))
        return

    profile = await context.storage.load(str(message.from_user.id))
    suffix = mimetypes.guess_extension(payload.mime_type) or ".img"
    await context.storage.store_garment(profile, payload.data, payload.mime_type, suffix)
    await context.state_machine.settle(profile)
    await message.answer(
        "Garment saved. Use /configure to adjust the shot or /generate to start the photoshoot.",
        reply_markup=ReplyKeyboardRemove(),
    )
