from __future__ import annotations

import html
import re

from bs4 import BeautifulSoup

_whitespace_re = re.compile(r"\s+")


def clean_html_to_text(raw_html: str | None) -> str:
    """Clean an event description to plain text.

    - Strip tags
    - Unescape HTML entities
    - Collapse whitespace
    """
    if not raw_html:
        return ""

    if "<" in raw_html:
        raw_html = BeautifulSoup(raw_html, "html.parser").get_text(" ")
    text = html.unescape(raw_html)
    text = _whitespace_re.sub(" ", text)
    return text.strip()
