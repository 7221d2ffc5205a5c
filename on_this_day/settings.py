"""Settings lifecycle: load once at startup, persist on every change."""

from __future__ import annotations

from .models import DEFAULT_SETTINGS, Settings
from .utils.data_store import DataStore
from .utils.logging import get_logger

logger = get_logger("otd.settings")


def load_settings(store: DataStore) -> Settings:
    settings = Settings.from_dict(store.load_data() or {})
    logger.debug("Loaded settings from %s", store.path)
    return settings


def save_settings(store: DataStore, settings: Settings) -> None:
    store.save_data(settings.to_dict())


def reset_settings(store: DataStore) -> Settings:
    save_settings(store, DEFAULT_SETTINGS)
    logger.info("Settings reset to default in %s", store.path)
    return DEFAULT_SETTINGS
