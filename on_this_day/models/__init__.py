"""Typed models used across the application."""

from .event import EventRecord
from .provider import FeedProvider
from .settings import DEFAULT_SETTINGS, Settings, SettingsError, clamp_amount

__all__ = ["EventRecord", "FeedProvider", "Settings", "SettingsError", "DEFAULT_SETTINGS", "clamp_amount"]
