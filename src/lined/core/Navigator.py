# lined/core/Navigator.py
"""lined.core.Navigator
=======================

Cursor navigation for the four arrow keys.

The cursor is stored relative to the viewport. Every move works on the
absolute document position (``cursor + offsets``), decides the new absolute
position and whether the viewport has to scroll, then hands back the new
viewport-relative cursor. The viewport is mutated in place.

Behaviour at the edges:

- Up/Down step one row and clamp the column to the target line's length. At
  the top/bottom viewport row the viewport scrolls by one instead. Down never
  moves past the last line; Up never moves above the first.
- Left inside a line steps one column (scrolling left by one at the left
  edge). At column 0 it wraps to the end of the previous line, scrolling right
  far enough to show that end. At the very start of the document it is a no-op.
- Right inside a line steps one column (scrolling right by one at the right
  edge). At the end of a line it wraps to the start of the next line and
  resets the column offset. At the end of the last line it is a no-op.

Navigation never raises; a move that cannot happen returns the cursor as is.
"""

from __future__ import annotations

import logging

from lined.core.Coordinates import Coordinates, Direction
from lined.core.Document import Document
from lined.core.Viewport import Viewport

logger = logging.getLogger("lined")


class Navigator:
    """Stateless navigation engine shared by the editor, edit engine and search."""

    def move(
        self,
        direction: Direction,
        cursor: Coordinates,
        viewport: Viewport,
        document: Document,
    ) -> Coordinates:
        """Return the new viewport-relative cursor after moving in ``direction``."""
        cursor = self.settle(cursor, viewport, document)
        handlers = {
            Direction.UP: self._move_up,
            Direction.DOWN: self._move_down,
            Direction.LEFT: self._move_left,
            Direction.RIGHT: self._move_right,
        }
        new_cursor = handlers[direction](cursor, viewport, document)
        logger.debug(
            "cursor %s %s -> %s, offsets (row=%d, col=%d)",
            direction, cursor, new_cursor, viewport.row_offset, viewport.col_offset,
        )
        return new_cursor

    @staticmethod
    def cursor_end_of_line(document: Document, row: int) -> Coordinates:
        """Absolute end-of-line position of ``row``, clamped to the last line."""
        row = document.clamp_row(row)
        return Coordinates(document.line_length(row), row)

    def absolute_position(
        self, cursor: Coordinates, viewport: Viewport, document: Document
    ) -> Coordinates:
        """Absolute position of ``cursor`` clamped into the document."""
        position = viewport.to_absolute(cursor)
        row = document.clamp_row(position.y)
        col = min(max(position.x, 0), document.line_length(row))
        return Coordinates(col, row)

    def settle(
        self, cursor: Coordinates, viewport: Viewport, document: Document
    ) -> Coordinates:
        """Clamp ``cursor`` into the document and scroll it into view."""
        position = self.absolute_position(cursor, viewport, document)
        self.scroll_into_view(position, viewport)
        return viewport.to_relative(position)

    @staticmethod
    def scroll_into_view(position: Coordinates, viewport: Viewport) -> None:
        """Scroll the viewport by the smallest amount that shows ``position``."""
        if position.y < viewport.row_offset:
            viewport.scroll_up(viewport.row_offset - position.y)
        elif position.y >= viewport.row_offset + viewport.height:
            viewport.scroll_down(position.y - viewport.row_offset - viewport.height + 1)

        if position.x < viewport.col_offset:
            viewport.scroll_left(viewport.col_offset - position.x)
        elif position.x >= viewport.col_offset + viewport.width:
            viewport.scroll_right(position.x - viewport.col_offset - viewport.width + 1)

    @staticmethod
    def _realign_column(col: int, viewport: Viewport) -> None:
        # A line shorter than the column offset restarts at the left edge.
        if col < viewport.col_offset:
            viewport.reset_col_offset()
        if col >= viewport.col_offset + viewport.width:
            viewport.scroll_right(col - viewport.col_offset - viewport.width + 1)

    # --- directions ---
    def _move_up(self, cursor: Coordinates, viewport: Viewport, document: Document) -> Coordinates:
        position = viewport.to_absolute(cursor)
        if position.y == 0:
            return cursor

        eol = self.cursor_end_of_line(document, position.y - 1)
        target = Coordinates(min(eol.x, position.x), eol.y)

        if cursor.try_bounded_up_by(1, viewport.rows()) is None:
            viewport.scroll_up(1)
        self._realign_column(target.x, viewport)
        return viewport.to_relative(target)

    def _move_down(self, cursor: Coordinates, viewport: Viewport, document: Document) -> Coordinates:
        position = viewport.to_absolute(cursor)
        if position.y >= document.last_row:
            return cursor

        eol = self.cursor_end_of_line(document, position.y + 1)
        target = Coordinates(min(eol.x, position.x), eol.y)

        if cursor.try_bounded_down_by(1, viewport.rows()) is None:
            viewport.scroll_down(1)
        self._realign_column(target.x, viewport)
        return viewport.to_relative(target)

    def _move_left(self, cursor: Coordinates, viewport: Viewport, document: Document) -> Coordinates:
        stepped = cursor.try_bounded_left_by(1, viewport.columns())
        if stepped is not None:
            return stepped

        position = viewport.to_absolute(cursor)
        if position == Coordinates.origin():
            return cursor

        if viewport.col_offset > 0:
            viewport.scroll_left(1)
            return cursor

        # Column 0 of a later row: wrap to the end of the previous line.
        eol = self.cursor_end_of_line(document, position.y - 1)
        if cursor.try_bounded_up_by(1, viewport.rows()) is None:
            viewport.scroll_up(1)
        if eol.x >= viewport.width:
            viewport.scroll_right(eol.x - viewport.width + 1)
        return viewport.to_relative(eol)

    def _move_right(self, cursor: Coordinates, viewport: Viewport, document: Document) -> Coordinates:
        position = viewport.to_absolute(cursor)
        eol = self.cursor_end_of_line(document, position.y)

        if position.x >= eol.x:
            if position.y >= document.last_row:
                return cursor
            viewport.reset_col_offset()
            if cursor.try_bounded_down_by(1, viewport.rows()) is None:
                viewport.scroll_down(1)
            return viewport.to_relative(Coordinates(0, position.y + 1))

        stepped = cursor.try_bounded_right_by(1, viewport.columns())
        if stepped is None:
            viewport.scroll_right(1)
            return cursor
        return stepped
