"""Configuration helpers."""

from .settings import ModeraSettings, get_settings

__all__ = ["ModeraSettings", "get_settings"]
