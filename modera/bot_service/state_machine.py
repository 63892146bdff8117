"""Simple finite state machine that tracks where each user is in the flow."""

from __future__ import annotations

from enum import Enum

from modera.storage import UserProfile, UserStorage


class ConversationState(str, Enum):
    """Conversation stages of the studio bot."""

    AWAITING_GARMENT = "awaiting_garment"
    AWAITING_API_KEY = "awaiting_api_key"
    AWAITING_ATTRIBUTE = "awaiting_attribute"
    READY = "ready"


class StateMachine:
    """Wrapper that keeps the profile state in sync with storage."""

    def __init__(self, storage: UserStorage) -> None:
        self._storage = storage

    def current(self, profile: UserProfile) -> ConversationState:
        """Return the current conversation state."""

        try:
            return ConversationState(profile.stage)
        except ValueError:
            return ConversationState.AWAITING_GARMENT

    async def set_state(self, profile: UserProfile, state: ConversationState) -> None:
        """Persist the new state."""

        await self._storage.set_stage(profile, state.value)

    async def settle(self, profile: UserProfile) -> ConversationState:
        """Move to READY when a garment is stored, otherwise back to the upload step."""

        state = ConversationState.READY if profile.garment_path else ConversationState.AWAITING_GARMENT
        await self.set_state(profile, state)
        return state
