from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

import requests

from ..models import EventRecord, FeedProvider
from ..utils.logging import get_logger
from .decoders import DecodeError, decode_events

logger = get_logger("otd.fetchers.feed")


class MissingCredentialError(Exception):
    """Raised before fetching when the provider needs a token and none is set."""


_DEFAULT_HEADERS: Dict[str, str] = {
    "Api-User-Agent": "on-this-day-cli",
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class FeedClient:
    """Single-shot client for a day-of-year event feed.

    An empty list is the only failure signal: callers must read it as
    "unavailable", not as "nothing happened today".
    """

    def __init__(
        self,
        provider: FeedProvider,
        *,
        access_token: str = "",
        timeout: int = 30,
    ) -> None:
        self.provider = provider
        self.access_token = access_token
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = dict(_DEFAULT_HEADERS)
        if self.provider.requires_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def fetch_today_events(self, today: Optional[date] = None) -> List[EventRecord]:
        if self.provider.requires_token and not self.access_token:
            raise MissingCredentialError(
                f"Feed provider '{self.provider.name}' requires an access token"
            )

        day = today or date.today()
        url = self.provider.url_for(day)
        logger.debug("Fetching events from %s", url)
        try:
            resp = requests.get(url, headers=self._headers(), timeout=self.timeout)
            resp.raise_for_status()
            events = decode_events(resp.json(), self.provider.decoder)
        except (requests.RequestException, ValueError) as exc:
            # DecodeError and JSON errors are both ValueErrors
            kind = "decode" if isinstance(exc, DecodeError) else type(exc).__name__
            logger.error("Fetching events from %s failed (%s): %s", url, kind, exc)
            return []

        logger.info("Fetched %d event(s) from %s", len(events), self.provider.name)
        return events
