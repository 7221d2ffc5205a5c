from __future__ import annotations

from typing import Dict, Mapping, Optional

from ..models import FeedProvider
from ..utils.config_loader import ConfigError

_EVENTS_PATH = "/api/v1/events/that-happened-on/{month}/{day}"

BUILTIN_PROVIDERS: Dict[str, FeedProvider] = {
    "onthisday": FeedProvider(
        name="onthisday",
        base_url="https://on-this-day-api.helopsokken.nl",
        path_template=_EVENTS_PATH,
        decoder="data-array",
    ),
    "onthisday-regular": FeedProvider(
        name="onthisday-regular",
        base_url="https://on-this-day-api.helopsokken.nl",
        path_template=_EVENTS_PATH,
        decoder="data-array",
        query={"category": "regular"},
        requires_token=True,
        zero_pad=False,
    ),
    "wikipedia": FeedProvider(
        name="wikipedia",
        base_url="https://en.wikipedia.org",
        path_template="/api/rest_v1/feed/onthisday/all/{month}/{day}",
        decoder="category-map",
    ),
}


def get_provider(name: str, extra: Optional[Mapping[str, FeedProvider]] = None) -> FeedProvider:
    """Resolve a provider by name; entries in ``extra`` override built-ins."""
    available = {**BUILTIN_PROVIDERS, **(extra or {})}
    try:
        return available[name]
    except KeyError:
        raise ConfigError(f"Unknown feed provider '{name}'. Available: {sorted(available)}") from None
