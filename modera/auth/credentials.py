"""Credential capability backed by the bot's profile store."""

from __future__ import annotations

from modera.errors import SelectionFailed
from modera.storage import UserProfile, UserStorage


class ProfileCredentials:
    """Lets a Telegram user select an API key by sending it to the bot.

    The operator key from the environment, when configured, counts as a
    selected key for every user.
    """

    def __init__(
        self,
        storage: UserStorage,
        profile: UserProfile,
        *,
        default_key: str = "",
        submitted_key: str | None = None,
    ) -> None:
        self._storage = storage
        self._profile = profile
        self._default_key = default_key
        self._submitted_key = submitted_key

    @property
    def api_key(self) -> str | None:
        return self._profile.api_key or self._default_key or None

    async def has_selected_api_key(self) -> bool:
        return self.api_key is not None

    async def open_select_key(self) -> None:
        key = (self._submitted_key or "").strip()
        if not key or any(char.isspace() for char in key):
            raise SelectionFailed("That does not look like an API key. Send the key as a single line.")
        await self._storage.set_api_key(self._profile, key)
