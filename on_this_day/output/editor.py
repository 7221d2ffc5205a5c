from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ..utils.logging import get_logger

logger = get_logger("otd.output.editor")


@dataclass(frozen=True, slots=True)
class Position:
    """Zero-based line and column in a document."""

    line: int
    ch: int


class EditorState:
    """In-memory text buffer with a cursor and an optional selection."""

    def __init__(
        self,
        text: str,
        cursor: Optional[Position] = None,
        selection: Optional[Tuple[Position, Position]] = None,
    ) -> None:
        self.text = text
        self.cursor = self.clip(cursor) if cursor is not None else self.end()
        self.selection: Optional[Tuple[Position, Position]] = None
        if selection is not None:
            self.select(*selection)

    def _lines(self) -> List[str]:
        return self.text.split("\n")

    def end(self) -> Position:
        lines = self._lines()
        return Position(len(lines) - 1, len(lines[-1]))

    def clip(self, pos: Position) -> Position:
        lines = self._lines()
        line = min(max(pos.line, 0), len(lines) - 1)
        ch = min(max(pos.ch, 0), len(lines[line]))
        return Position(line, ch)

    def offset(self, pos: Position) -> int:
        pos = self.clip(pos)
        lines = self._lines()
        return sum(len(l) + 1 for l in lines[: pos.line]) + pos.ch

    def position(self, offset: int) -> Position:
        offset = min(max(offset, 0), len(self.text))
        before = self.text[:offset]
        line = before.count("\n")
        return Position(line, offset - (before.rfind("\n") + 1))

    def select(self, anchor: Position, head: Position) -> None:
        anchor, head = self.clip(anchor), self.clip(head)
        self.selection = None if anchor == head else (anchor, head)

    def something_selected(self) -> bool:
        return self.selection is not None

    def replace_selection(self, replacement: str) -> None:
        if self.selection is None:
            raise ValueError("Nothing selected")
        start, end = sorted((self.offset(p) for p in self.selection))
        self.text = self.text[:start] + replacement + self.text[end:]
        self.selection = None
        self.cursor = self.position(start + len(replacement))

    def replace_range(self, replacement: str, pos: Position) -> None:
        """Insert ``replacement`` at ``pos``; the cursor keeps its offset."""
        at = self.offset(pos)
        cursor_at = self.offset(self.cursor)
        self.text = self.text[:at] + replacement + self.text[at:]
        if cursor_at > at:
            cursor_at += len(replacement)
        self.cursor = self.position(cursor_at)


class NoteDocument:
    """A note file on disk opened as an ``EditorState``.

    The buffer always uses LF line endings; a CRLF note gets CRLF back on
    save so untouched lines keep their bytes.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.newline = "\n"

    def open(
        self,
        *,
        cursor: Optional[Position] = None,
        selection: Optional[Tuple[Position, Position]] = None,
    ) -> EditorState:
        text = ""
        if self.path.exists():
            with self.path.open("r", encoding="utf-8", newline="") as f:
                text = f.read()
        self.newline = "\r\n" if "\r\n" in text else "\n"
        text = text.replace("\r\n", "\n")
        return EditorState(text, cursor=cursor, selection=selection)

    def save(self, state: EditorState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8", newline="") as f:
            f.write(state.text.replace("\n", self.newline))
        logger.info("Wrote %d characters to %s", len(state.text), self.path)
