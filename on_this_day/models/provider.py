from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict
from urllib.parse import urlencode


@dataclass(frozen=True, slots=True)
class FeedProvider:
    """Where to fetch events for a calendar day and how to decode them."""

    name: str
    base_url: str
    path_template: str
    decoder: str
    query: Dict[str, str] = field(default_factory=dict)
    requires_token: bool = False
    zero_pad: bool = True

    def url_for(self, day: date) -> str:
        month_s = f"{day.month:02d}" if self.zero_pad else str(day.month)
        day_s = f"{day.day:02d}" if self.zero_pad else str(day.day)
        url = self.base_url.rstrip("/") + self.path_template.format(month=month_s, day=day_s)
        if self.query:
            url += "?" + urlencode(self.query)
        return url
