from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Literal

from ..utils.logging import get_logger

logger = get_logger("otd.models.settings")

SelectionMode = Literal["first", "random"]

MIN_AMOUNT = 1
MAX_AMOUNT = 10

_leading_int_re = re.compile(r"^\s*([+-]?\d+)")

_TRUE_WORDS = {"true", "yes", "1", "on"}
_FALSE_WORDS = {"false", "no", "0", "off"}


class SettingsError(Exception):
    """Raised when a settings edit cannot be applied."""


@dataclass(frozen=True, slots=True)
class Settings:
    """User settings persisted as a flat JSON object."""

    amount_of_events: int = 3
    insert_title: bool = True
    title_template: str = "## On this day ({{currentdate}})\n\n"
    item_template: str = "* {{description}} {{if year}}({{year}}){{endif}}\n"
    title_date_format: str = "MMMM Do"
    access_token: str = ""
    provider: str = "onthisday"
    selection_mode: SelectionMode = "first"
    categories: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        values = asdict(self)
        return {_PERSISTED_KEYS[name]: value for name, value in values.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "Settings":
        """Merge persisted data over the defaults, field by field.

        Values of the wrong shape are ignored so the default for that field
        survives. Unknown keys are ignored for forward compatibility.
        """
        merged: Dict[str, Any] = {}
        for name, key in _PERSISTED_KEYS.items():
            if not data or key not in data:
                continue
            raw = data[key]
            if name == "amount_of_events":
                merged[name] = clamp_amount(raw)
                continue
            if not _has_expected_shape(name, raw):
                logger.debug("Ignoring persisted %s of unexpected shape: %r", key, raw)
                continue
            merged[name] = list(raw) if name == "categories" else raw
        return cls(**merged)

    def update(self, name: str, value: Any) -> "Settings":
        """Apply a single edit from the settings surface."""
        if name not in _PERSISTED_KEYS:
            raise SettingsError(f"Unknown setting '{name}'. Known: {sorted(_PERSISTED_KEYS)}")

        if name == "amount_of_events":
            return replace(self, amount_of_events=clamp_amount(value))
        if name == "title_template":
            text = str(value or "")
            return replace(self, title_template=DEFAULT_SETTINGS.title_template if text == "" else text.strip() + "\n\n")
        if name == "item_template":
            text = str(value or "")
            return replace(self, item_template=DEFAULT_SETTINGS.item_template if text == "" else text.strip() + "\n")
        if name == "insert_title":
            return replace(self, insert_title=_parse_bool(value))
        if name == "selection_mode":
            mode = str(value).strip().lower()
            if mode not in ("first", "random"):
                raise SettingsError(f"Invalid selection mode '{value}'. Must be 'first' or 'random'.")
            return replace(self, selection_mode=mode)
        if name == "categories":
            if isinstance(value, str):
                items = value.split(",")
            else:
                items = list(value or [])
            return replace(self, categories=[str(c).strip() for c in items if str(c).strip()])
        return replace(self, **{name: "" if value is None else str(value)})


_PERSISTED_KEYS: Dict[str, str] = {
    "amount_of_events": "amountOfEvents",
    "insert_title": "insertTitle",
    "title_template": "titleTemplate",
    "item_template": "itemTemplate",
    "title_date_format": "titleDateFormat",
    "access_token": "accessToken",
    "provider": "provider",
    "selection_mode": "selectionMode",
    "categories": "categories",
}

DEFAULT_SETTINGS = Settings()


def clamp_amount(value: Any) -> int:
    """Parse ``value`` like an integer text field and clamp it to [1, 10].

    Unparseable input falls back to the default amount.
    """
    parsed: int | None = None
    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        parsed = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        match = _leading_int_re.match(value)
        parsed = int(match.group(1)) if match else None

    if parsed is None:
        return DEFAULT_SETTINGS.amount_of_events
    return max(MIN_AMOUNT, min(MAX_AMOUNT, parsed))


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise SettingsError(f"Invalid boolean '{value}'")


def _has_expected_shape(name: str, raw: Any) -> bool:
    if name == "insert_title":
        return isinstance(raw, bool)
    if name == "selection_mode":
        return raw in ("first", "random")
    if name == "categories":
        return isinstance(raw, list) and all(isinstance(c, str) for c in raw)
    return isinstance(raw, str)

