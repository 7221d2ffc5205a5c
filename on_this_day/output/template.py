"""Template rendering for the inserted text block.

Item templates are rendered in two explicit passes: conditional blocks
(``{{if year}}...{{endif}}``) are resolved first, then placeholder tokens are
substituted in a single pass. Substituted values are never re-scanned, so an
event description that happens to contain ``{{year}}`` is inserted verbatim.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Dict, List, Optional, Sequence

import arrow

from ..models import EventRecord

CURRENT_DATE_TOKEN = "{{currentdate}}"

_current_date_re = re.compile(re.escape(CURRENT_DATE_TOKEN))
_conditional_re = re.compile(r"\{\{if (\w+)\}\}([\s\S]*?)\{\{endif\}\}")
_stray_marker_re = re.compile(r"\{\{(?:if \w+|endif)\}\}")
_token_re = re.compile(r"\{\{(\w+)\}\}")

# Token names used by earlier templates
_ALIASES = {
    "eventdescription": "description",
    "eventyear": "year",
    "eventtype": "category",
}


def format_current_date(date_format: str, today: Optional[date] = None) -> str:
    moment = arrow.get(today) if today is not None else arrow.now()
    return moment.format(date_format)


def render_title(title_template: str, date_format: str, *, today: Optional[date] = None) -> str:
    date_text = format_current_date(date_format, today)
    return _current_date_re.sub(lambda _m: date_text, title_template)


def _field_values(event: EventRecord) -> Dict[str, str]:
    return {
        "description": event.description,
        "year": str(event.year) if event.has_year else "",
        "category": event.category or "",
    }


def resolve_conditionals(template: str, values: Dict[str, str]) -> str:
    """Drop ``{{if X}}...{{endif}}`` blocks whose field is empty, unwrap the rest."""

    def _block(match: re.Match) -> str:
        name = _ALIASES.get(match.group(1), match.group(1))
        return match.group(2) if values.get(name) else ""

    text = _conditional_re.sub(_block, template)
    return _stray_marker_re.sub("", text)


def substitute_tokens(template: str, values: Dict[str, str]) -> str:
    def _token(match: re.Match) -> str:
        name = _ALIASES.get(match.group(1), match.group(1))
        if name not in values:
            return match.group(0)
        return values[name]

    return _token_re.sub(_token, template)


def render_item(item_template: str, event: EventRecord) -> str:
    values = _field_values(event)
    return substitute_tokens(resolve_conditionals(item_template, values), values)


def render(
    events: Sequence[EventRecord],
    count: int,
    title_template: str,
    item_template: str,
    date_format: str,
    *,
    include_title: bool = True,
    today: Optional[date] = None,
) -> str:
    """Render the title followed by the first ``count`` events.

    Returns an empty string when there are no events or no item template;
    callers treat that as "nothing to insert".
    """
    if not events or not item_template:
        return ""

    parts: List[str] = []
    if include_title:
        parts.append(render_title(title_template, date_format, today=today))
    for event in events[: max(0, count)]:
        parts.append(render_item(item_template, event))
    return "".join(parts)
