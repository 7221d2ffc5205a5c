from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List
from urllib.parse import urlparse

import yaml

from ..models import FeedProvider


class ConfigError(Exception):
    """Raised when the configuration file is invalid or missing required fields."""


REQUIRED_FIELDS = {"name", "base_url", "path_template", "decoder"}

# Mirrors fetchers.decoders.DECODERS; kept here so typos fail at load time
ALLOWED_DECODERS = {"data-array", "category-map"}


def _validate_provider_dict(entry: dict) -> None:
    """Validate a single provider mapping from YAML.

    Required fields: name (str), base_url (http/https), path_template (with
    ``{month}`` and ``{day}``), decoder (one of ALLOWED_DECODERS).
    Optional fields:
      - query: mapping[str, str]
      - requires_token: bool
      - zero_pad: bool
    """
    missing = REQUIRED_FIELDS - set(entry)
    if missing:
        raise ConfigError(f"Missing required fields: {sorted(missing)} in {entry}")

    # base_url
    url_str = str(entry["base_url"]).strip()
    parsed = urlparse(url_str)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"Invalid base_url '{url_str}'. Must be absolute http(s) URL.")

    # path_template
    template = str(entry["path_template"])
    if "{month}" not in template or "{day}" not in template:
        raise ConfigError(f"path_template '{template}' must contain {{month}} and {{day}}")
    if not template.startswith("/"):
        raise ConfigError(f"path_template '{template}' must start with '/'")

    # decoder
    if entry["decoder"] not in ALLOWED_DECODERS:
        raise ConfigError(
            f"Invalid decoder '{entry['decoder']}'. Allowed: {sorted(ALLOWED_DECODERS)}"
        )

    # query
    if "query" in entry and entry["query"] is not None:
        query = entry["query"]
        if not isinstance(query, dict) or not all(isinstance(k, str) for k in query):
            raise ConfigError("'query' must be a mapping of string keys if provided")

    for flag in ("requires_token", "zero_pad"):
        if flag in entry and not isinstance(entry[flag], bool):
            raise ConfigError(f"'{flag}' must be true or false if provided")


def _coerce_provider(entry: dict) -> FeedProvider:
    query = entry.get("query") or {}
    return FeedProvider(
        name=str(entry["name"]).strip(),
        base_url=str(entry["base_url"]).strip(),
        path_template=str(entry["path_template"]).strip(),
        decoder=str(entry["decoder"]).strip(),
        query={str(k): str(v) for k, v in query.items()},
        requires_token=bool(entry.get("requires_token", False)),
        zero_pad=bool(entry.get("zero_pad", True)),
    )


def load_providers_config(path: Path | str) -> Dict[str, FeedProvider]:
    """Load a providers YAML file into typed ``FeedProvider`` instances.

    YAML structure:
      - Top-level mapping
      - Key ``providers``: list of provider mappings with fields
          - name: string (required)
          - base_url: http/https URL (required)
          - path_template: string containing {month} and {day} (required)
          - decoder: 'data-array' | 'category-map' (required)
          - query: mapping[string, string] (optional)
          - requires_token: bool (optional, default false)
          - zero_pad: bool (optional, default true)

    Unknown top-level keys are ignored for forward compatibility.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Providers configuration must be a mapping")

    providers_raw: Iterable[dict] = (data.get("providers") or [])
    if not isinstance(providers_raw, list):
        raise ConfigError("'providers' must be a list in the YAML configuration")

    providers: List[FeedProvider] = []
    for item in providers_raw:
        if not isinstance(item, dict):
            raise ConfigError(f"Each provider must be a mapping, got: {type(item)}")
        _validate_provider_dict(item)
        providers.append(_coerce_provider(item))
    return {p.name: p for p in providers}
