# lined/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen renders the editor state onto the curses screen.

Each frame it paints:
- the visible slice of the document, one line per text row, clipped to the
  viewport's column window;
- ``~`` on rows past the end of the document, plus a centred greeting on an
  empty, unmodified buffer;
- the bottom row: a prompt when one is active, else the transient status
  message while it is fresh, else the status bar (file name, dirty flag and
  1-based ``row:col``).

Rendering reads only the editor's document, viewport, cursor and status
state. All output is queued and flushed once per frame; a failure to flush
is fatal and raised as `TerminalIOError`.
"""

import curses
import logging
from typing import TYPE_CHECKING, Any, Optional

from wcwidth import wcwidth

from lined.core.errors import TerminalIOError

if TYPE_CHECKING:
    from lined.core.Lined import Lined

logger = logging.getLogger("lined")

DEFAULT_GREETING = "lined -- version 1"

# C0 controls, DEL and C1 controls occupy exactly one cell on screen.
CONTROL_CHAR_MAP: dict[int, str] = {
    code: "?" for code in (*range(0x20), 0x7F, *range(0x80, 0xA0))
}


## ================= class DrawScreen ==============================
class DrawScreen:
    """Renders the text area and the bottom row.

    Attributes:
        STATUS_PAIR (int): Color pair number used for the status bar.
        editor (Lined): Reference to the main editor instance.
        config (dict[str, Any]): Editor configuration dictionary.
        stdscr (curses.window): The main curses window object.
        colors (dict[str, int]): Mapping of color names to curses attributes.
    """

    STATUS_PAIR = 1

    def __init__(self, editor: "Lined", config: dict[str, Any]) -> None:
        self.editor = editor
        self.config = config
        self.stdscr = editor.stdscr
        self.colors = editor.colors
        self.greeting: str = str(config.get("editor", {}).get("greeting", DEFAULT_GREETING))

        self._init_status_colors()

    def _init_status_colors(self) -> None:
        """Create the status bar pair; fall back to reverse video without colors."""
        colors_cfg = self.config.get("colors", {})
        fg_name = str(colors_cfg.get("status_fg", "black")).upper()
        bg_name = str(colors_cfg.get("status_bg", "white")).upper()

        try:
            if not curses.has_colors():
                raise curses.error("terminal has no color support")
            fg_idx = getattr(curses, f"COLOR_{fg_name}", curses.COLOR_BLACK)
            bg_idx = getattr(curses, f"COLOR_{bg_name}", curses.COLOR_WHITE)
            curses.init_pair(self.STATUS_PAIR, fg_idx, bg_idx)
        except curses.error as exc:
            logger.warning("init_pair failed (%s) - falling back to A_REVERSE", exc)
            self.colors["status"] = curses.A_REVERSE | curses.A_BOLD
        else:
            self.colors["status"] = curses.color_pair(self.STATUS_PAIR) | curses.A_BOLD
        self.colors["tilde"] = curses.A_DIM
        self.colors["message"] = curses.A_NORMAL

    def get_char_width(self, ch: str) -> int:
        """Screen cells taken by ``ch``: 2 for wide glyphs, 1 for non-printables."""
        w = wcwidth(ch)
        return 1 if w < 0 else w

    def get_string_width(self, text: str) -> int:
        return sum(self.get_char_width(ch) for ch in text)

    @staticmethod
    def printable(text: str) -> str:
        """Replace control characters with ``?`` so each takes a single cell."""
        return text.translate(CONTROL_CHAR_MAP)

    def truncate_string(self, s: str, max_width: int) -> str:
        """Return ``s`` clipped to visual width ``max_width`` (wide glyphs count as two)."""
        result: list[str] = []
        consumed = 0

        for ch in s:
            w = self.get_char_width(ch)
            if consumed + w > max_width:
                break
            result.append(ch)
            consumed += w

        return "".join(result)

    def draw(self, prompt: Optional[str] = None) -> None:
        """Paint one full frame.

        Args:
            prompt: Text of an active prompt; replaces the bottom row and
                takes the cursor.

        Raises:
            TerminalIOError: the terminal rejected the output.
        """
        self._set_cursor_visibility(False)
        try:
            self._draw_rows()
            if prompt is not None:
                self._draw_bottom_line(prompt, self.colors["message"])
            elif self.editor.status_message_visible():
                self._draw_bottom_line(self.editor.status_message, self.colors["message"])
            else:
                self._draw_status_bar()
            self._position_cursor(prompt)
            self._set_cursor_visibility(True)
        except curses.error as e:
            logger.error(f"Curses error in DrawScreen.draw(): {e}", exc_info=True)
            raise TerminalIOError(f"Cannot draw to terminal: {e}") from e

        self._update_display()

    # --- text area ---
    def _draw_rows(self) -> None:
        editor = self.editor
        viewport = editor.viewport
        document = editor.document
        show_greeting = document.is_blank() and not editor.modified

        for screen_row in viewport.rows():
            self.stdscr.move(screen_row, 0)
            self.stdscr.clrtoeol()

            doc_row = screen_row + viewport.row_offset
            if doc_row < document.line_count:
                line = document.line(doc_row)
                segment = line[viewport.col_offset : viewport.col_offset + viewport.width]
                segment = self.truncate_string(self.printable(segment), viewport.width)
                if segment:
                    self.stdscr.addstr(screen_row, 0, segment)
            elif show_greeting and screen_row == viewport.height // 3:
                self._draw_greeting(screen_row)
            else:
                self.stdscr.addstr(screen_row, 0, "~", self.colors["tilde"])

    def _draw_greeting(self, screen_row: int) -> None:
        width = self.editor.viewport.width
        text = self.truncate_string(self.greeting, max(0, width - 1))
        padding = max(1, (width - self.get_string_width(text)) // 2)
        self.stdscr.addstr(screen_row, 0, "~", self.colors["tilde"])
        if text and padding < width:
            self.stdscr.addstr(screen_row, padding, self.truncate_string(text, width - padding))

    # --- bottom row ---
    def _status_row(self) -> int:
        return self.editor.viewport.height

    def _paint_bottom_row(self, line: str, attr: int) -> None:
        """Fill the whole bottom row with ``line`` (exactly ``width`` cells wide).

        The final cell goes through ``insch`` because ``addstr`` into the
        bottom-right corner moves the cursor off-screen and reports an error.
        The last character must therefore be a single-cell one.
        """
        y = self._status_row()
        self.stdscr.move(y, 0)
        self.stdscr.clrtoeol()
        if not line:
            return
        if len(line) > 1:
            self.stdscr.addstr(y, 0, line[:-1], attr)
        self.stdscr.insch(y, self.get_string_width(line[:-1]), line[-1], attr)

    def _fit_bottom_text(self, text: str, max_width: int) -> str:
        """Clip ``text`` to ``max_width`` cells and pad it to exactly that width."""
        clipped = self.truncate_string(self.printable(text), max_width)
        used = self.get_string_width(clipped)
        if used == max_width and clipped and self.get_char_width(clipped[-1]) != 1:
            # A wide glyph cannot take the bottom-right cell
            clipped = self.truncate_string(clipped, max_width - 1)
            used = self.get_string_width(clipped)
        return clipped + " " * (max_width - used)

    def _draw_bottom_line(self, text: str, attr: int) -> None:
        self._paint_bottom_row(self._fit_bottom_text(text, self.editor.viewport.width), attr)

    def _draw_status_bar(self) -> None:
        """``name (modified)`` on the left, 1-based ``row:col`` on the right."""
        editor = self.editor
        width = editor.viewport.width
        position = editor.absolute_cursor

        left = editor.display_name + (" (modified)" if editor.modified else "")
        right = f"{position.y + 1}:{position.x + 1}"[:width]

        # At least one blank cell between the name and the position
        left = self.truncate_string(self.printable(left), max(0, width - len(right) - 1))
        gap = width - self.get_string_width(left) - len(right)
        self._paint_bottom_row(left + " " * gap + right, self.colors["status"])

    def _position_cursor(self, prompt: Optional[str] = None) -> None:
        viewport = self.editor.viewport
        if prompt is not None:
            x = min(self.get_string_width(self.printable(prompt)), viewport.width - 1)
            self.stdscr.move(self._status_row(), x)
            return
        cursor = self.editor.cursor
        y = min(max(cursor.y, 0), viewport.height - 1)
        x = min(max(cursor.x, 0), viewport.width - 1)
        self.stdscr.move(y, x)

    def _set_cursor_visibility(self, visible: bool) -> None:
        try:
            curses.curs_set(1 if visible else 0)
        except curses.error as e:
            # Terminal cannot change cursor visibility
            logger.debug("curs_set(%d) unsupported: %s", int(visible), e)

    def _update_display(self) -> None:
        """Flush queued output: ``noutrefresh`` then one ``doupdate``."""
        try:
            self.stdscr.noutrefresh()
            curses.doupdate()
        except curses.error as e:
            logger.error(f"Curses doupdate error: {e}")
            raise TerminalIOError(f"Cannot flush terminal output: {e}") from e
