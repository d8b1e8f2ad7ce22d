# lined/core/SearchNavigator.py
"""Find-in-document and cycling through the matches.

`find` returns, in document order, the leftmost occurrence of the query on
each line that contains it. The navigator keeps the current match list and
an index into it; stepping past either end wraps around. Focusing a match
recenters the viewport on it.
"""

from __future__ import annotations

import logging
from typing import Optional

from lined.core.Coordinates import Coordinates, Direction
from lined.core.Document import Document
from lined.core.Viewport import Viewport

logger = logging.getLogger("lined")


class SearchNavigator:
    """Holds the matches of the last search and the index of the focused one.

    Args:
        case_sensitive (bool): When False, queries and lines are compared casefolded.
    """

    def __init__(self, case_sensitive: bool = True) -> None:
        self.case_sensitive = case_sensitive
        self.query: Optional[str] = None
        self.matches: list[Coordinates] = []
        self.index = 0

    def find(self, query: str, document: Document) -> list[Coordinates]:
        """Leftmost match per line, in line order. An empty query matches nothing."""
        if not query:
            return []
        needle = query if self.case_sensitive else query.casefold()
        matches: list[Coordinates] = []
        for row, line in enumerate(document.lines()):
            haystack = line if self.case_sensitive else line.casefold()
            col = haystack.find(needle)
            if col >= 0:
                matches.append(Coordinates(col, row))
        return matches

    def start(self, query: str, document: Document) -> int:
        """Run a search, focus the first match and return the match count."""
        self.query = query
        self.matches = self.find(query, document)
        self.index = 0
        logger.info("Search for %r: %d match(es)", query, len(self.matches))
        return len(self.matches)

    def clear(self) -> None:
        self.query = None
        self.matches = []
        self.index = 0

    @property
    def current(self) -> Coordinates:
        if not self.matches:
            raise ValueError("No search matches to focus")
        return self.matches[self.index]

    def next(self) -> Coordinates:
        if not self.matches:
            raise ValueError("No search matches to cycle through")
        self.index = (self.index + 1) % len(self.matches)
        return self.matches[self.index]

    def previous(self) -> Coordinates:
        if not self.matches:
            raise ValueError("No search matches to cycle through")
        self.index = (self.index - 1) % len(self.matches)
        return self.matches[self.index]

    def step(self, direction: Direction, viewport: Viewport) -> Coordinates:
        """Up/Left focus the previous match, Down/Right the next one."""
        if direction in (Direction.UP, Direction.LEFT):
            self.previous()
        else:
            self.next()
        return self.focus(viewport)

    def focus(self, viewport: Viewport) -> Coordinates:
        """Recenter ``viewport`` on the current match; return the relative cursor.

        Both offsets become ``match - size // 2``, saturating at zero.
        """
        match = self.current
        viewport.reset_row_offset()
        viewport.reset_col_offset()
        viewport.scroll_down(max(0, match.y - viewport.height // 2))
        viewport.scroll_right(max(0, match.x - viewport.width // 2))
        logger.debug("Focused match %d/%d at %s", self.index + 1, len(self.matches), match)
        return viewport.to_relative(match)

    def describe(self) -> str:
        """Status line text for the focused match."""
        return f"Match {self.index + 1} of {len(self.matches)} for '{self.query}'"
