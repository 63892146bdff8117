"""Handlers that walk the user through the six shot attributes."""

from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import KeyboardButton, Message, ReplyKeyboardMarkup, ReplyKeyboardRemove

from modera.bot_service.context import BotContext
from modera.bot_service.filters import StageFilter
from modera.bot_service.state_machine import ConversationState
from modera.catalog.attributes import (
    ATTRIBUTE_FIELDS,
    ATTRIBUTE_LABELS,
    AttributeSet,
    attribute_choices,
    parse_choice,
)
from modera.storage import UserProfile

ATTRIBUTE_ORDER = list(ATTRIBUTE_FIELDS)
KEEP_CURRENT = "Keep current"


def attribute_keyboard(name: str) -> ReplyKeyboardMarkup:
    """Two buttons per row, plus a button that keeps the stored value."""

    choices = attribute_choices(name)
    rows = [
        [KeyboardButton(text=value) for value in choices[index:index + 2]]
        for index in range(0, len(choices), 2)
    ]
    rows.append([KeyboardButton(text=KEEP_CURRENT)])
    return ReplyKeyboardMarkup(
        keyboard=rows,
        resize_keyboard=True,
        one_time_keyboard=True,
        input_field_placeholder=f"Choose {ATTRIBUTE_LABELS[name].lower()}",
    )


def describe(config: AttributeSet) -> str:
    values = config.as_dict()
    return "\n".join(f"{ATTRIBUTE_LABELS[name]}: {values[name]}" for name in ATTRIBUTE_ORDER)


def setup(router: Router, context: BotContext) -> None:
    """Register attribute configuration handlers."""

    @router.message(Command("configure"))
    async def start_configuration(message: Message) -> None:
        profile = await context.storage.load(str(message.from_user.id))
        await _ask(message, context, profile, ATTRIBUTE_ORDER[0])

    @router.message(Command("settings"))
    async def show_settings(message: Message) -> None:
        profile = await context.storage.load(str(message.from_user.id))
        config = AttributeSet.from_mapping(profile.attributes)
        await message.answer(f"Current shot settings:\n{describe(config)}")

    @router.message(StageFilter(context, ConversationState.AWAITING_ATTRIBUTE), F.text, ~F.text.startswith("/"))
    async def handle_choice(message: Message, profile: UserProfile) -> None:
        name = profile.pending_attribute
        if name not in ATTRIBUTE_FIELDS:
            await context.storage.set_pending_attribute(profile, None)
            await context.state_machine.settle(profile)
            await message.answer("Configuration was interrupted. Use /configure to start over.")
            return

        text = message.text or ""
        if text != KEEP_CURRENT:
            choice = parse_choice(name, text)
            if choice is None:
                await message.answer(
                    "Please pick one of the options on the keyboard.",
                    reply_markup=attribute_keyboard(name),
                )
                return
            await context.storage.set_attribute(profile, name, choice.value)

        position = ATTRIBUTE_ORDER.index(name)
        if position + 1 < len(ATTRIBUTE_ORDER):
            await _ask(message, context, profile, ATTRIBUTE_ORDER[position + 1])
            return

        await context.storage.set_pending_attribute(profile, None)
        await context.state_machine.settle(profile)
        config = AttributeSet.from_mapping(profile.attributes)
        await message.answer(
            f"Shot settings saved:\n{describe(config)}",
            reply_markup=ReplyKeyboardRemove(),
        )


async def _ask(message: Message, context: BotContext, profile: UserProfile, name: str) -> None:
    await context.storage.set_pending_attribute(profile, name)
    await context.state_machine.set_state(profile, ConversationState.AWAITING_ATTRIBUTE)
    current = profile.attributes.get(name, "")
    await message.answer(
        f"{ATTRIBUTE_LABELS[name]} (now: {current})",
        reply_markup=attribute_keyboard(name),
    )
