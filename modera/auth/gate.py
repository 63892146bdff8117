"""API key presence checks and the credential state machine."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from modera.errors import FailureKind, SelectionFailed

logger = logging.getLogger(__name__)


class AuthState(str, Enum):
    """Whether the user currently has a usable API key selected."""

    NO_CREDENTIAL = "no_credential"
    HAS_CREDENTIAL = "has_credential"


class CredentialCapability(Protocol):
    """Host-provided credential operations. Either may be missing."""

    async def has_selected_api_key(self) -> bool: ...

    async def open_select_key(self) -> None: ...


class AuthGate:
    """Wraps an optional credential capability exposed by the hosting environment."""

    def __init__(self, capability: CredentialCapability | None) -> None:
        self._capability = capability

    async def check_credential(self) -> bool:
        """Return whether a key is selected; a missing capability means no key."""

        check = getattr(self._capability, "has_selected_api_key", None)
        if check is None:
            return False
        return bool(await check())

    async def request_credential_selection(self) -> None:
        """Run the interactive key selection flow.

        Raises ``SelectionFailed`` when the host cannot select keys or the flow errors.
        """

        select = getattr(self._capability, "open_select_key", None)
        if select is None:
            raise SelectionFailed("API key selection is not supported here.")
        try:
            await select()
        except SelectionFailed:
            raise
        except Exception as exc:
            logger.error("API key selection failed: %s", exc)
            raise SelectionFailed("Failed to select API key.") from exc

    async def initial_state(self) -> AuthState:
        if await self.check_credential():
            return AuthState.HAS_CREDENTIAL
        return AuthState.NO_CREDENTIAL

    async def select(self) -> AuthState:
        await self.request_credential_selection()
        return AuthState.HAS_CREDENTIAL

    @staticmethod
    def after_failure(state: AuthState, kind: FailureKind) -> AuthState:
        """Return the state that follows a failed generation of the given kind."""

        if kind in (FailureKind.ACCESS, FailureKind.CREDENTIAL_MISSING):
            return AuthState.NO_CREDENTIAL
        return state
