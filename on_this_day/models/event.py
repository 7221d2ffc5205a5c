from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class EventRecord:
    """A single historical fact returned by the feed."""

    description: str
    category: Optional[str] = None
    # 0 or None means the year is unknown
    year: Optional[int] = None

    @property
    def has_year(self) -> bool:
        return bool(self.year)

    def identity_key(self) -> Tuple[str, Optional[int], Optional[str]]:
        return (self.description, self.year or None, self.category or None)
