"""Infer the active editing mode from cursor style and selection state."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

from mode_styles.styles.models import Mode


class CursorStyle(IntEnum):
    """Cursor styles as numbered by the host editor."""

    LINE = 1
    BLOCK = 2
    UNDERLINE = 3
    LINE_THIN = 4
    BLOCK_OUTLINE = 5
    UNDERLINE_THIN = 6


def detect_mode(cursor_style: Optional[int], has_selection: bool) -> Mode:
    """Map editor state onto a mode label.

    A selection means visual mode unless the insert (line) cursor is
    showing; otherwise the cursor shape decides. Unknown styles read as
    insert mode, which is also what the host shows without a modal editor.
    """

    if has_selection and cursor_style != CursorStyle.LINE:
        return "visual"

    if cursor_style in (CursorStyle.BLOCK, CursorStyle.BLOCK_OUTLINE):
        return "normal"
    if cursor_style in (CursorStyle.UNDERLINE, CursorStyle.UNDERLINE_THIN):
        return "search"
    if cursor_style == CursorStyle.LINE_THIN:
        return "visual" if has_selection else "insert"
    return "insert"


__all__ = ["CursorStyle", "detect_mode"]
