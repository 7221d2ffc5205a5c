"""Top-level package for the On This Day note helper.

Fetches historical "on this day" events from a remote feed and renders a
handful of them into a note through configurable templates.
"""

__all__ = []
