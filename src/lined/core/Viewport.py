# lined/core/Viewport.py
"""lined.core.Viewport
======================

The visible window into the document.

A `Viewport` knows its size in terminal cells and which document row/column
sits at its top-left corner. Scroll mutators saturate at zero; there is no
upper clamp, callers decide whether scrolling past the document is warranted.

The cursor is kept relative to the viewport, so the absolute document
position of a viewport cell ``(c, r)`` is ``(c + col_offset, r + row_offset)``.
"""

from __future__ import annotations

from lined.core.Coordinates import Coordinates


class Viewport:
    """Tracks width, height and the row/column scroll offsets.

    Attributes:
        width (int): Number of text columns on screen.
        height (int): Number of text rows on screen (status row excluded).
    """

    # One terminal row is reserved for the status bar / message line.
    STATUS_ROWS = 1

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport needs a positive size, got {width}x{height}")
        self.width = width
        self.height = height
        self._row_offset = 0
        self._col_offset = 0

    @classmethod
    def from_terminal_size(cls, columns: int, lines: int) -> "Viewport":
        """Build a viewport for a terminal of ``columns`` x ``lines`` cells."""
        return cls(max(1, columns), max(1, lines - cls.STATUS_ROWS))

    def __repr__(self) -> str:
        return (
            f"Viewport(width={self.width}, height={self.height}, "
            f"row_offset={self._row_offset}, col_offset={self._col_offset})"
        )

    # --- offsets ---
    @property
    def row_offset(self) -> int:
        return self._row_offset

    @property
    def col_offset(self) -> int:
        return self._col_offset

    def scroll_up(self, by: int = 1) -> None:
        self._row_offset = max(0, self._row_offset - by)

    def scroll_down(self, by: int = 1) -> None:
        self._row_offset = max(0, self._row_offset + by)

    def scroll_left(self, by: int = 1) -> None:
        self._col_offset = max(0, self._col_offset - by)

    def scroll_right(self, by: int = 1) -> None:
        self._col_offset = max(0, self._col_offset + by)

    def reset_row_offset(self) -> None:
        self._row_offset = 0

    def reset_col_offset(self) -> None:
        self._col_offset = 0

    def snapshot(self) -> tuple[int, int]:
        """Return ``(row_offset, col_offset)`` for a later `restore`."""
        return self._row_offset, self._col_offset

    def restore(self, snapshot: tuple[int, int]) -> None:
        row_offset, col_offset = snapshot
        self._row_offset = max(0, row_offset)
        self._col_offset = max(0, col_offset)

    # --- coordinate conversion ---
    def to_absolute(self, cursor: Coordinates) -> Coordinates:
        return Coordinates(cursor.x + self._col_offset, cursor.y + self._row_offset)

    def to_relative(self, position: Coordinates) -> Coordinates:
        return Coordinates(position.x - self._col_offset, position.y - self._row_offset)

    def contains(self, position: Coordinates) -> bool:
        """True when the absolute ``position`` falls inside the visible window."""
        rel = self.to_relative(position)
        return rel.x in self.columns() and rel.y in self.rows()

    def columns(self) -> range:
        return range(0, self.width)

    def rows(self) -> range:
        return range(0, self.height)
