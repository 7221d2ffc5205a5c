from __future__ import annotations

import os
import random
import sys
from datetime import date
from typing import Any, Callable, List, Mapping, Optional

from .fetchers import FeedClient, MissingCredentialError, get_provider
from .models import EventRecord, FeedProvider, Settings
from .output.editor import EditorState
from .output.template import render
from .processors import select_events
from .settings import load_settings, reset_settings, save_settings
from .utils.data_store import DataStore
from .utils.logging import get_logger

logger = get_logger("otd.session")

Notify = Callable[[str], None]

FETCH_FAILED_NOTICE = "Error fetching text for today"
EMPTY_RENDER_NOTICE = "Nothing to insert: check the item template"
RESET_NOTICE = "Settings reset to default (On this day)"
NO_MATCHING_CATEGORY_NOTICE = "No events today match the category filter: {categories}"


def print_notice(message: str) -> None:
    print(message, file=sys.stderr)


class Session:
    """State shared by one load: settings, the feed client and the response cache.

    Everything that used to hang off a long-lived plugin object is passed
    through here explicitly.
    """

    def __init__(
        self,
        settings: Settings,
        store: DataStore,
        *,
        client: Optional[FeedClient] = None,
        providers: Optional[Mapping[str, FeedProvider]] = None,
        notify: Notify = print_notice,
        rng: Optional[random.Random] = None,
        today: Optional[date] = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.providers = dict(providers or {})
        self.notify = notify
        self.rng = rng
        self.today = today
        self._client = client
        self.cache: List[EventRecord] = []

    @classmethod
    def load(cls, store: DataStore, **kwargs: Any) -> "Session":
        return cls(load_settings(store), store, **kwargs)

    def _build_client(self, settings: Optional[Settings] = None) -> FeedClient:
        settings = settings or self.settings
        provider = get_provider(settings.provider, self.providers)
        token = settings.access_token or os.environ.get("ON_THIS_DAY_ACCESS_TOKEN", "")
        return FeedClient(provider, access_token=token)

    @property
    def client(self) -> FeedClient:
        if self._client is None:
            self._client = self._build_client()
        return self._client

    # Response cache

    def refresh(self) -> List[EventRecord]:
        self.cache = self.client.fetch_today_events(self.today)
        return self.cache

    def events(self) -> List[EventRecord]:
        if not self.cache:
            self.refresh()
        return self.cache

    # Rendering and insertion

    def render_text(self, *, include_title: bool = True) -> str:
        s = self.settings
        chosen = select_events(
            self.events(),
            s.amount_of_events,
            mode=s.selection_mode,
            categories=s.categories,
            rng=self.rng,
        )
        return render(
            chosen,
            s.amount_of_events,
            s.title_template,
            s.item_template,
            s.title_date_format,
            include_title=include_title and s.insert_title,
            today=self.today,
        )

    def empty_render_notice(self) -> str:
        """Explain why rendering produced no text for the cached events."""
        s = self.settings
        if s.selection_mode == "random" and s.categories and not select_events(
            self.cache, s.amount_of_events, mode="random", categories=s.categories, rng=self.rng
        ):
            return NO_MATCHING_CATEGORY_NOTICE.format(categories=", ".join(s.categories))
        return EMPTY_RENDER_NOTICE

    def insert(self, editor: EditorState, *, include_title: bool = True) -> bool:
        """Insert rendered text at the cursor, or over the selection.

        Returns False (after raising a notice) when nothing was inserted.
        """
        try:
            events = self.events()
        except MissingCredentialError as exc:
            logger.warning("%s", exc)
            self.notify(f"{exc}. Set it with: on-this-day settings set access_token <token>")
            return False

        if not events:
            self.notify(FETCH_FAILED_NOTICE)
            return False

        text = self.render_text(include_title=include_title)
        if not text:
            self.notify(self.empty_render_notice())
            return False

        if editor.something_selected():
            editor.replace_selection(text)
        else:
            editor.replace_range(text, editor.cursor)
        logger.info("Inserted %d character(s) of event text", len(text))
        return True

    # Settings surface

    def update_setting(self, name: str, value: Any) -> Settings:
        updated = self.settings.update(name, value)
        if name in ("provider", "access_token"):
            # Unknown providers fail here, before anything is persisted
            self._client = self._build_client(updated)
            self.cache = []
        self.settings = updated
        save_settings(self.store, self.settings)
        return self.settings

    def reset_settings(self) -> Settings:
        self.settings = reset_settings(self.store)
        self._client = None
        self.cache = []
        self.notify(RESET_NOTICE)
        return self.settings
