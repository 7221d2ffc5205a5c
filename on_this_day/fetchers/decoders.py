"""Versioned decoders mapping provider payloads onto ``EventRecord``.

Each decoder fails closed: any shape it does not recognise raises
``DecodeError`` instead of yielding partially typed records.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from ..models import EventRecord
from ..processors.normalize import clean_html_to_text

_DESCRIPTION_KEYS = ("eventdescription", "description", "text")
_YEAR_KEYS = ("eventyear", "year")
_CATEGORY_KEYS = ("eventtype", "category")

CATEGORY_MAP_KEYS = ("selected", "births", "deaths", "events", "holidays")


class DecodeError(ValueError):
    """Raised when a feed payload does not match the expected schema."""


def _first_present(item: Dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in item and item[key] is not None:
            return item[key]
    return None


def _decode_item(item: Any, *, category: Optional[str] = None) -> EventRecord:
    if not isinstance(item, dict):
        raise DecodeError(f"Event entry must be an object, got {type(item).__name__}")

    description_val = _first_present(item, _DESCRIPTION_KEYS)
    if not isinstance(description_val, str):
        raise DecodeError("Event entry has no description string")
    description = clean_html_to_text(description_val)
    if not description:
        raise DecodeError("Event entry has an empty description")

    year_val = _first_present(item, _YEAR_KEYS)
    if year_val is not None and (isinstance(year_val, bool) or not isinstance(year_val, int)):
        raise DecodeError(f"Invalid year '{year_val}'")

    if category is None:
        category_val = _first_present(item, _CATEGORY_KEYS)
        if category_val is not None and not isinstance(category_val, str):
            raise DecodeError(f"Invalid category '{category_val}'")
        category = category_val or None

    return EventRecord(description=description, category=category, year=year_val)


def decode_data_array(payload: Any) -> List[EventRecord]:
    """Decode ``{"data": [{"eventdescription": ..., "eventyear": ...}, ...]}``."""
    if not isinstance(payload, dict):
        raise DecodeError("Payload must be a JSON object")
    data = payload.get("data")
    if not isinstance(data, list):
        raise DecodeError("'data' must be a list")
    return [_decode_item(item) for item in data]


def decode_category_map(payload: Any) -> List[EventRecord]:
    """Decode ``{"selected": [...], "births": [...], ...}``.

    Categories follow the payload's own key order; the key becomes the
    record's category.
    """
    if not isinstance(payload, dict):
        raise DecodeError("Payload must be a JSON object")
    present = [key for key in payload if key in CATEGORY_MAP_KEYS]
    if not present:
        raise DecodeError(f"Payload has none of the category keys {list(CATEGORY_MAP_KEYS)}")

    events: List[EventRecord] = []
    for key in present:
        items = payload[key]
        if not isinstance(items, list):
            raise DecodeError(f"'{key}' must be a list")
        events.extend(_decode_item(item, category=key) for item in items)
    return events


DECODERS: Dict[str, Callable[[Any], List[EventRecord]]] = {
    "data-array": decode_data_array,
    "category-map": decode_category_map,
}


def decode_events(payload: Any, decoder: str) -> List[EventRecord]:
    try:
        fn = DECODERS[decoder]
    except KeyError:
        raise DecodeError(f"Unknown decoder '{decoder}'. Known: {sorted(DECODERS)}") from None
    return fn(payload)
