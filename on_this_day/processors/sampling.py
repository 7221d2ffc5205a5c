from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence

from ..models import EventRecord


def dedupe_events(events: Iterable[EventRecord]) -> List[EventRecord]:
    """Drop repeated records, keeping first occurrences in order."""
    seen = set()
    unique: List[EventRecord] = []
    for ev in events:
        key = ev.identity_key()
        if key in seen:
            continue
        seen.add(key)
        unique.append(ev)
    return unique


def select_events(
    events: Sequence[EventRecord],
    count: int,
    *,
    mode: str = "first",
    categories: Iterable[str] = (),
    rng: Optional[random.Random] = None,
) -> List[EventRecord]:
    """Pick the records to render.

    ``first`` keeps feed order. ``random`` samples without replacement from
    the category-filtered, de-duplicated pool, so asking for more records
    than exist simply returns the whole pool.
    """
    count = max(0, count)
    if mode == "first":
        return list(events[:count])
    if mode != "random":
        raise ValueError(f"Unknown selection mode '{mode}'")

    wanted = {c.strip().lower() for c in categories if c.strip()}
    pool = [ev for ev in events if not wanted or (ev.category or "").lower() in wanted]
    pool = dedupe_events(pool)
    rng = rng or random.Random()
    return rng.sample(pool, min(count, len(pool)))
