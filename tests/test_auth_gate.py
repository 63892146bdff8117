"""Tests for credential gating and the profile-backed capability."""

from __future__ import annotations

from pathlib import Path

import pytest

from modera.auth.credentials import ProfileCredentials
from modera.auth.gate import AuthGate, AuthState
from modera.errors import FailureKind, SelectionFailed
from modera.storage import UserStorage


class FullCapability:
    def __init__(self, selected: bool) -> None:
        self.selected = selected
        self.opened = 0

    async def has_selected_api_key(self) -> bool:
        return self.selected

    async def open_select_key(self) -> None:
        self.opened += 1
        self.selected = True


class CheckOnlyCapability:
    async def has_selected_api_key(self) -> bool:
        return True


class BrokenSelector:
    async def has_selected_api_key(self) -> bool:
        return False

    async def open_select_key(self) -> None:
        raise OSError("dialog crashed")


@pytest.mark.asyncio
async def test_missing_capability_means_no_credential() -> None:
    gate = AuthGate(None)

    assert await gate.check_credential() is False
    assert await gate.initial_state() is AuthState.NO_CREDENTIAL
    with pytest.raises(SelectionFailed):
        await gate.request_credential_selection()


@pytest.mark.asyncio
async def test_missing_select_operation_fails_selection() -> None:
    gate = AuthGate(CheckOnlyCapability())

    assert await gate.initial_state() is AuthState.HAS_CREDENTIAL
    with pytest.raises(SelectionFailed):
        await gate.select()


@pytest.mark.asyncio
async def test_selection_moves_to_has_credential() -> None:
    capability = FullCapability(selected=False)
    gate = AuthGate(capability)

    assert await gate.initial_state() is AuthState.NO_CREDENTIAL
    assert await gate.select() is AuthState.HAS_CREDENTIAL
    assert capability.opened == 1


@pytest.mark.asyncio
async def test_selection_errors_are_wrapped() -> None:
    gate = AuthGate(BrokenSelector())

    with pytest.raises(SelectionFailed) as excinfo:
        await gate.request_credential_selection()

    assert isinstance(excinfo.value.__cause__, OSError)


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (FailureKind.ACCESS, AuthState.NO_CREDENTIAL),
        (FailureKind.CREDENTIAL_MISSING, AuthState.NO_CREDENTIAL),
        (FailureKind.OTHER, AuthState.HAS_CREDENTIAL),
    ],
)
def test_after_failure_transitions(kind: FailureKind, expected: AuthState) -> None:
    assert AuthGate.after_failure(AuthState.HAS_CREDENTIAL, kind) is expected


@pytest.mark.asyncio
async def test_profile_credentials_store_submitted_key(tmp_path: Path) -> None:
    storage = UserStorage(tmp_path / "users", tmp_path / "generated")
    profile = await storage.load("user-1")
    gate = AuthGate(ProfileCredentials(storage, profile, submitted_key="  AIza-test-key \n"))

    assert await gate.check_credential() is False
    assert await gate.select() is AuthState.HAS_CREDENTIAL

    reloaded = await storage.load("user-1")
    assert reloaded.api_key == "AIza-test-key"
    assert await ProfileCredentials(storage, reloaded).has_selected_api_key()


@pytest.mark.asyncio
@pytest.mark.parametrize("submitted", [None, "   ", "two words"])
async def test_profile_credentials_reject_bad_submission(tmp_path: Path, submitted) -> None:
    storage = UserStorage(tmp_path / "users", tmp_path / "generated")
    profile = await storage.load("user-2")
    gate = AuthGate(ProfileCredentials(storage, profile, submitted_key=submitted))

    with pytest.raises(SelectionFailed):
        await gate.select()
    assert (await storage.load("user-2")).api_key is None


@pytest.mark.asyncio
async def test_operator_key_counts_as_selected(tmp_path: Path) -> None:
    storage = UserStorage(tmp_path / "users", tmp_path / "generated")
    profile = await storage.load("user-3")
    credentials = ProfileCredentials(storage, profile, default_key="operator-key")

    assert await credentials.has_selected_api_key()
    assert credentials.api_key == "operator-key"
