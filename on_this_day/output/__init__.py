"""Rendering of event text and insertion into notes."""

from .editor import EditorState, NoteDocument, Position
from .template import render, render_item, render_title

__all__ = ["EditorState", "NoteDocument", "Position", "render", "render_item", "render_title"]
