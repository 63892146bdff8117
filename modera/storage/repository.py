"""Simple JSON-backed storage for user profiles and generated images."""

from __future__ import annotations

import asyncio
import json
import shutil
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from modera.catalog.attributes import DEFAULT_ATTRIBUTES
from modera.imggen.models import ImageResult


@dataclass(slots=True)
class UserProfile:
    """Serializable representation of a Telegram user interacting with the bot."""

    user_id: str
    stage: str = "awaiting_garment"
    garment_path: Optional[str] = None
    garment_mime_type: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=DEFAULT_ATTRIBUTES.as_dict)
    pending_attribute: Optional[str] = None
    api_key: Optional[str] = None
    # None until the credential check first runs for this user.
    auth_state: Optional[str] = None
    last_result_path: Optional[str] = None
    updated_at: Optional[str] = None

    def touch(self) -> None:
        """Update the modification timestamp."""

        self.updated_at = datetime.utcnow().isoformat()


class UserStorage:
    """Manages reading and writing user profiles as JSON files."""

    def __init__(self, root: Path, generated_root: Path) -> None:
        self._root = root
        self._generated_root = generated_root
        self._root.mkdir(parents=True, exist_ok=True)
        self._generated_root.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, asyncio.Lock] = {}

    def _profile_path(self, user_id: str) -> Path:
        return self._root / user_id / "profile.json"

    def ensure_user_dirs(self, user_id: str) -> tuple[Path, Path]:
        """Ensure directories exist and return (user_root, generated_root)."""

        user_dir = self._root / user_id
        generated_dir = self._generated_root / user_id
        user_dir.mkdir(parents=True, exist_ok=True)
        generated_dir.mkdir(parents=True, exist_ok=True)
        return user_dir, generated_dir

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        if user_id not in self._locks:
            self._locks[user_id] = asyncio.Lock()
        return self._locks[user_id]

    async def load(self, user_id: str) -> UserProfile:
        """Load an existing profile or create a new one."""

        async with self._lock_for(user_id):
            self.ensure_user_dirs(user_id)
            path = self._profile_path(user_id)
            if not path.exists():
                profile = UserProfile(user_id=user_id)
                profile.touch()
                await self._write_profile(path, profile)
                return profile
            data = await asyncio.to_thread(path.read_text, encoding="utf-8")
            payload = json.loads(data)
            return UserProfile(**payload)

    async def save(self, profile: UserProfile) -> None:
        """Persist the profile to disk."""

        profile.touch()
        async with self._lock_for(profile.user_id):
            path = self._profile_path(profile.user_id)
            await self._write_profile(path, profile)

    async def _write_profile(self, path: Path, profile: UserProfile) -> None:
        body = json.dumps(asdict(profile), ensure_ascii=False, indent=2)
        await asyncio.to_thread(self._write_file, path, body)

    @staticmethod
    def _write_file(path: Path, body: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")

    async def set_stage(self, profile: UserProfile, stage: str) -> None:
        """Update the conversational stage."""

        profile.stage = stage
        await self.save(profile)

    async def store_garment(self, profile: UserProfile, data: bytes, mime_type: str, suffix: str) -> Path:
        """Write the uploaded garment image and remember it as the current one."""

        user_dir, _ = self.ensure_user_dirs(profile.user_id)
        timestamp = datetime.utcnow().strftime("%Y%m%d_%H%M%S")
        garment_path = user_dir / f"garment_{timestamp}{suffix}"
        await asyncio.to_thread(garment_path.write_bytes, data)
        profile.garment_path = str(garment_path)
        profile.garment_mime_type = mime_type
        await self.save(profile)
        return garment_path

    async def read_garment(self, profile: UserProfile) -> bytes | None:
        """Return the stored garment bytes, or ``None`` when nothing was uploaded."""

        if not profile.garment_path:
            return None
        path = Path(profile.garment_path)
        if not path.exists():
            return None
        return await asyncio.to_thread(path.read_bytes)

    async def set_attribute(self, profile: UserProfile, name: str, value: str) -> None:
        """Store one attribute value."""

        profile.attributes[name] = value
        await self.save(profile)

    async def set_pending_attribute(self, profile: UserProfile, name: Optional[str]) -> None:
        """Remember which attribute the user is choosing right now."""

        profile.pending_attribute = name
        await self.save(profile)

    async def set_api_key(self, profile: UserProfile, api_key: Optional[str]) -> None:
        """Store the user's own API key."""

        profile.api_key = api_key
        await self.save(profile)

    async def set_auth_state(self, profile: UserProfile, state: str) -> None:
        """Persist the credential state."""

        profile.auth_state = state
        await self.save(profile)

    async def save_result(self, profile: UserProfile, result: ImageResult) -> Path:
        """Write a generated image to the user's generated directory."""

        _, generated_dir = self.ensure_user_dirs(profile.user_id)
        output_path = generated_dir / ImageResult.download_name()
        await asyncio.to_thread(output_path.write_bytes, result.to_bytes())
        profile.last_result_path = str(output_path)
        await self.save(profile)
        return output_path

    async def reset_user(self, user_id: str) -> None:
        """Remove stored data for the given user."""

        async with self._lock_for(user_id):
            user_dir = self._root / user_id
            generated_dir = self._generated_root / user_id
            await asyncio.gather(
                asyncio.to_thread(self._delete_dir, user_dir),
                asyncio.to_thread(self._delete_dir, generated_dir),
            )

    @staticmethod
    def _delete_dir(path: Path) -> None:
        if path.exists():
            shutil.rmtree(path)
