# lined/core/EditEngine.py
"""Text-mutating operations on the editor's document.

Each operation mutates the document at the cursor's absolute position and
moves the cursor through the shared `Navigator`, so scrolling after an edit
follows the same rules as plain arrow-key movement. Every handler returns
``True`` when the document changed (and a redraw is needed), ``False`` for
a no-op.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lined.core.Coordinates import Coordinates, Direction

if TYPE_CHECKING:
    from lined.core.Lined import Lined

logger = logging.getLogger("lined")


class EditEngine:
    """Insert, split, backspace and forward-delete at the cursor.

    Args:
        editor (Lined): Owner of the document, viewport, cursor and navigator.
    """

    def __init__(self, editor: "Lined") -> None:
        self.editor = editor

    def _position(self) -> Coordinates:
        """Settle the cursor and return its absolute document position."""
        ed = self.editor
        ed.cursor = ed.navigator.settle(ed.cursor, ed.viewport, ed.document)
        return ed.viewport.to_absolute(ed.cursor)

    def _move(self, direction: Direction) -> None:
        ed = self.editor
        ed.cursor = ed.navigator.move(direction, ed.cursor, ed.viewport, ed.document)

    def _mark_modified(self) -> None:
        self.editor.modified = True

    def insert_char(self, ch: str) -> bool:
        """Insert ``ch`` at the cursor and step right past it."""
        if len(ch) != 1 or ch in "\r\n":
            logger.warning("insert_char: refusing to insert %r", ch)
            return False

        pos = self._position()
        self.editor.document.insert_char(pos.y, pos.x, ch)
        self._move(Direction.RIGHT)
        self._mark_modified()
        logger.debug("Inserted %r at %s", ch, pos)
        return True

    def insert_newline(self) -> bool:
        """Split the current line at the cursor; the cursor lands at column 0 below."""
        ed = self.editor
        pos = self._position()
        ed.document.split_line(pos.y, pos.x)
        self._move(Direction.DOWN)
        ed.viewport.reset_col_offset()
        ed.cursor = Coordinates(0, ed.cursor.y)
        self._mark_modified()
        logger.debug("Split line %d at column %d", pos.y, pos.x)
        return True

    def backspace(self) -> bool:
        """Delete the character before the cursor, joining lines at column 0."""
        ed = self.editor
        pos = self._position()
        if pos == Coordinates.origin():
            return False

        self._move(Direction.LEFT)
        if pos.x == 0:
            ed.document.merge_with_next(pos.y - 1)
            logger.debug("Joined line %d onto line %d", pos.y, pos.y - 1)
        else:
            removed = ed.document.delete_char(pos.y, pos.x - 1)
            logger.debug("Backspace removed %r at (%d, %d)", removed, pos.x - 1, pos.y)
        self._mark_modified()
        return True

    def delete_forward(self) -> bool:
        """Delete the character under the cursor, joining the next line at end of line."""
        ed = self.editor
        pos = self._position()
        if pos.x >= ed.document.line_length(pos.y):
            if not ed.document.merge_with_next(pos.y):
                return False
            logger.debug("Joined line %d onto line %d", pos.y + 1, pos.y)
        else:
            removed = ed.document.delete_char(pos.y, pos.x)
            logger.debug("Delete removed %r at %s", removed, pos)
        self._mark_modified()
        return True
