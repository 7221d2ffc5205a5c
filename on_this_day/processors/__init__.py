"""Event processing: description cleanup and selection."""

from .normalize import clean_html_to_text
from .sampling import dedupe_events, select_events

__all__ = ["clean_html_to_text", "dedupe_events", "select_events"]
