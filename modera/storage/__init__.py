"""Persistent per-user state."""

from .repository import UserProfile, UserStorage

__all__ = ["UserProfile", "UserStorage"]
