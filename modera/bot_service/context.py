"""Shared dependencies passed into handler setup functions."""

from __future__ import annotations

from dataclasses import dataclass, field

from modera.auth.credentials import ProfileCredentials
from modera.auth.gate import AuthGate, AuthState
from modera.bot_service.state_machine import StateMachine
from modera.config.settings import ModeraSettings
from modera.logic import StudioLogic
from modera.storage import UserProfile, UserStorage


@dataclass(slots=True)
class BotContext:
    """Container for objects shared across handlers."""

    settings: ModeraSettings
    storage: UserStorage
    logic: StudioLogic
    state_machine: StateMachine
    # Users with a generation in flight; new requests are refused until it settles.
    in_flight: set[str] = field(default_factory=set)

    def credentials(self, profile: UserProfile, submitted_key: str | None = None) -> ProfileCredentials:
        return ProfileCredentials(
            self.storage,
            profile,
            default_key=self.settings.gemini_api_key,
            submitted_key=submitted_key,
        )

    def auth_gate(self, profile: UserProfile, submitted_key: str | None = None) -> AuthGate:
        return AuthGate(self.credentials(profile, submitted_key))

    async def resolve_auth_state(self, profile: UserProfile) -> AuthState:
        """Return the stored credential state, running the initial check if it never ran."""

        if profile.auth_state is not None:
            return AuthState(profile.auth_state)
        state = await self.auth_gate(profile).initial_state()
        await self.storage.set_auth_state(profile, state.value)
        return state
