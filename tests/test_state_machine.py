"""Tests for conversation state tracking."""

from __future__ import annotations

from pathlib import Path

import pytest

from modera.bot_service.state_machine import ConversationState, StateMachine
from modera.storage import UserStorage


@pytest.mark.asyncio
async def test_unknown_stage_falls_back_to_upload(tmp_path: Path) -> None:
    storage = UserStorage(tmp_path / "users", tmp_path / "generated")
    profile = await storage.load("user-1")
    profile.stage = "awaiting_selfie"

    assert StateMachine(storage).current(profile) is ConversationState.AWAITING_GARMENT


@pytest.mark.asyncio
async def test_settle_depends_on_uploaded_garment(tmp_path: Path) -> None:
    storage = UserStorage(tmp_path / "users", tmp_path / "generated")
    machine = StateMachine(storage)
    profile = await storage.load("user-2")

    assert await machine.settle(profile) is ConversationState.AWAITING_GARMENT

    await storage.store_garment(profile, b"bytes", "image/jpeg", ".jpg")
    assert await machine.settle(profile) is ConversationState.READY
    assert (await storage.load("user-2")).stage == "ready"
