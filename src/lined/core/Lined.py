# lined/core/Lined.py
"""lined.core.Lined
===================
Lined: the editor controller.

The `Lined` class owns the editor state (document, viewport, cursor, dirty
flag, filename, status message) and wires the components together:

- `Navigator` for arrow-key movement,
- `EditEngine` for insertions and deletions,
- `SearchNavigator` for incremental find,
- `DrawScreen` for rendering,
- `KeyBinder` for reading keys and dispatching them to handlers.

The main loop polls for a key with a short timeout, dispatches it, and
redraws. Handlers return ``True`` when the screen needs to be redrawn.
Fatal conditions (terminal I/O failure, failed save) are raised as
`LinedError` subclasses and end the session; a file that cannot be opened
leaves an empty, untitled buffer.
"""

import curses
import logging
import os
import time
from typing import Any, Callable, Optional

from lined.core.Coordinates import Coordinates, Direction
from lined.core.Document import DEFAULT_ENCODING, Document
from lined.core.EditEngine import EditEngine
from lined.core.Navigator import Navigator
from lined.core.SearchNavigator import SearchNavigator
from lined.core.Viewport import Viewport
from lined.core.errors import FileSaveError, TerminalIOError
from lined.ui.DrawScreen import DrawScreen
from lined.ui.KeyBinder import KeyBinder

logger = logging.getLogger("lined")

KEY_ESCAPE = 27
ENTER_KEYS = (10, 13)
BACKSPACE_KEYS = (127, 8)


class Lined:
    """Central controller of the editor.

    Attributes:
        stdscr (curses.window): The curses main window.
        config (dict[str, Any]): Merged configuration.
        document (Document): The line buffer being edited.
        viewport (Viewport): Visible window and scroll offsets.
        cursor (Coordinates): Cursor position relative to the viewport.
        modified (bool): True once the document differs from what was loaded/saved.
        filename (Optional[str]): Target file; None for an untitled buffer.
        encoding (str): Encoding used when saving.
        status_message (str): Transient message shown instead of the status bar.
        status_message_time (float): `time.time()` at which the message was set.
        running (bool): Main loop flag; cleared by `exit_editor`.
    """

    def _set_status_message(self, message: str) -> None:
        """Show ``message`` on the bottom row for the configured duration."""
        self.status_message = str(message)
        self.status_message_time = time.time()
        logger.debug(f"Status message set to: '{self.status_message}'")

    # -- Initialization and Setup ---
    def __init__(
        self,
        stdscr: "curses.window",
        config: dict[str, Any],
    ) -> None:
        self.stdscr = stdscr
        self.config: dict[str, Any] = config

        self._initialize_state()
        self._initialize_components()
        self._setup_environment()
        logger.info("Lined initialized: %r", self.viewport)

    def _editor_setting(self, key: str, default: Any) -> Any:
        return self.config.get("editor", {}).get(key, default)

    def _initialize_state(self) -> None:
        self.document: Document = Document()
        self.cursor: Coordinates = Coordinates.origin()
        self.modified: bool = False
        self.filename: Optional[str] = None
        self.encoding: str = DEFAULT_ENCODING
        self.status_message: str = ""
        self.status_message_time: float = 0.0
        self.running: bool = False
        self._force_full_redraw: bool = False
        self._status_was_visible: bool = False

        try:
            height, width = self.stdscr.getmaxyx()
        except curses.error as e:
            raise TerminalIOError(f"Cannot query terminal size: {e}") from e
        self.viewport: Viewport = Viewport.from_terminal_size(width, height)

        try:
            self.status_message_seconds = float(
                self._editor_setting("status_message_seconds", 1.0)
            )
        except (TypeError, ValueError):
            self.status_message_seconds = 1.0
        try:
            self.poll_timeout_ms = int(self._editor_setting("poll_timeout_ms", 50))
        except (TypeError, ValueError):
            self.poll_timeout_ms = 50

    def _initialize_components(self) -> None:
        self.colors: dict[str, int] = {}

        self.navigator: Navigator = Navigator()
        self.edit_engine: EditEngine = EditEngine(self)
        case_sensitive = bool(self.config.get("search", {}).get("case_sensitive", True))
        self.search: SearchNavigator = SearchNavigator(case_sensitive=case_sensitive)
        self.drawer: DrawScreen = DrawScreen(self, self.config)

        # KeyBinder is initialized last as its action map points at editor methods
        self.keybinder: KeyBinder = KeyBinder(self)

    def _setup_environment(self) -> None:
        try:
            self.stdscr.keypad(True)
            self.stdscr.nodelay(True)
            self.stdscr.timeout(self.poll_timeout_ms)
        except curses.error as e:
            raise TerminalIOError(f"Cannot configure terminal input: {e}") from e

    # --- State queries ---
    @property
    def absolute_cursor(self) -> Coordinates:
        """Cursor position in document coordinates."""
        return self.viewport.to_absolute(self.cursor)

    @property
    def display_name(self) -> str:
        return os.path.basename(self.filename) if self.filename else "[No Name]"

    def status_message_visible(self, now: Optional[float] = None) -> bool:
        if not self.status_message:
            return False
        now = time.time() if now is None else now
        return now - self.status_message_time < self.status_message_seconds

    # --- Navigation ---
    def _move_cursor(self, direction: Direction) -> bool:
        self.cursor = self.navigator.move(direction, self.cursor, self.viewport, self.document)
        return True

    def handle_up(self) -> bool:
        return self._move_cursor(Direction.UP)

    def handle_down(self) -> bool:
        return self._move_cursor(Direction.DOWN)

    def handle_left(self) -> bool:
        return self._move_cursor(Direction.LEFT)

    def handle_right(self) -> bool:
        return self._move_cursor(Direction.RIGHT)

    # --- Editing ---
    def insert_character(self, ch: str) -> bool:
        return self.edit_engine.insert_char(ch)

    def handle_enter(self) -> bool:
        return self.edit_engine.insert_newline()

    def handle_backspace(self) -> bool:
        return self.edit_engine.backspace()

    def handle_delete(self) -> bool:
        return self.edit_engine.delete_forward()

    # --- File operations ---
    def _reset_view(self) -> None:
        self.cursor = Coordinates.origin()
        self.viewport.reset_row_offset()
        self.viewport.reset_col_offset()
        self.search.clear()

    def open_file(self, filename_to_open: str) -> bool:
        """Load ``filename_to_open`` into the buffer.

        A missing or unreadable file leaves an empty, untitled buffer and a
        status message; it never raises.
        """
        self._reset_view()
        self.modified = False
        try:
            self.document, self.encoding = Document.load(filename_to_open)
        except FileNotFoundError:
            logger.info("File not found: '%s'. Starting an empty buffer.", filename_to_open)
            self.document, self.encoding, self.filename = Document(), DEFAULT_ENCODING, None
            self._set_status_message(f"'{filename_to_open}' not found; new buffer")
            return True
        except OSError as e:
            logger.error("Cannot open '%s': %s", filename_to_open, e)
            self.document, self.encoding, self.filename = Document(), DEFAULT_ENCODING, None
            self._set_status_message(f"Cannot open '{filename_to_open}': {e.strerror or e}")
            return True

        self.filename = filename_to_open
        self._set_status_message(
            f"Opened {self.display_name} ({self.document.line_count} lines, {self.encoding})"
        )
        return True

    def save_file(self) -> bool:
        """Write the buffer to its file, prompting for a name if untitled.

        Raises:
            FileSaveError: the write failed. The failure is shown on screen first.
        """
        if not self.filename:
            name = self.prompt("Save as: ")
            if not name:
                self._set_status_message("Save aborted")
                logger.info("Save aborted by user.")
                return True
            self.filename = name

        trailing_newline = bool(self._editor_setting("ensure_trailing_newline", True))
        try:
            written = self.document.save(self.filename, self.encoding, trailing_newline)
        except OSError as e:
            reason = e.strerror or str(e)
            logger.error("Can't save '%s': %s", self.filename, reason, exc_info=True)
            self._set_status_message(f"Can't save! I/O error: {reason}")
            self.drawer.draw()
            raise FileSaveError(self.filename, reason) from e

        self.modified = False
        self._set_status_message(f"{written} bytes written to {self.filename}")
        return True

    def exit_editor(self) -> bool:
        """Stop the main loop, asking first if there are unsaved changes."""
        if self.modified:
            ans = self.prompt("Save changes before exiting? (y/n): ", is_yes_no_prompt=True)
            if ans == "y":
                self.save_file()
                if self.modified:
                    # Untitled buffer whose "Save as" prompt was cancelled
                    return True
            elif ans != "n":
                self._set_status_message("Exit cancelled")
                logger.info("User cancelled exit at the save prompt.")
                return True

        self.running = False
        logger.info("Main loop stop signaled.")
        return False

    # --- Prompt ---
    def prompt(
        self,
        message: str,
        callback: Optional[Callable[[str], None]] = None,
        is_yes_no_prompt: bool = False,
        max_len: int = 1024,
    ) -> Optional[str]:
        """Read a line of input on the bottom row.

        Returns the entered text on Enter, or None on Escape. ``callback`` is
        invoked with the current input after every edit. A yes/no prompt
        returns as soon as ``y`` or ``n`` is typed and treats any other key
        as cancel.
        """
        logger.debug(f"Prompt called. Message: '{message}'")
        input_buffer: list[str] = []

        try:
            while True:
                self.drawer.draw(prompt=f"{message}{''.join(input_buffer)}")
                key = self.keybinder.get_key_input()
                if key == curses.ERR:
                    continue

                if key == curses.KEY_ENTER or key in ENTER_KEYS:
                    return "".join(input_buffer).strip()
                if key == KEY_ESCAPE:
                    return None
                if is_yes_no_prompt:
                    if isinstance(key, int) and 32 <= key < 127 and chr(key).lower() in ("y", "n"):
                        return chr(key).lower()
                    return None
                if key == curses.KEY_BACKSPACE or key in BACKSPACE_KEYS:
                    if input_buffer:
                        input_buffer.pop()
                elif isinstance(key, int) and 32 <= key < 127:
                    if len(input_buffer) < max_len:
                        input_buffer.append(chr(key))
                else:
                    continue

                if callback is not None:
                    callback("".join(input_buffer))
        finally:
            self._force_full_redraw = True

    # --- Search ---
    def find_prompt(self) -> bool:
        """Incremental search.

        The view jumps to the first match as the query is typed. Enter keeps
        the match and lets the arrow keys cycle through the rest; Escape puts
        the cursor and view back where they were.
        """
        saved_cursor = self.cursor
        saved_offsets = self.viewport.snapshot()

        def restore_view() -> None:
            self.cursor = saved_cursor
            self.viewport.restore(saved_offsets)

        def jump_to_first_match(query: str) -> None:
            if query and self.search.start(query, self.document):
                self.cursor = self.search.focus(self.viewport)
            else:
                restore_view()

        query = self.prompt("Search (ESC to cancel): ", callback=jump_to_first_match)
        if query is None:
            restore_view()
            self.search.clear()
            self._set_status_message("Search cancelled")
            return True
        if not query:
            restore_view()
            return True

        if not self.search.start(query, self.document):
            restore_view()
            self._set_status_message(f"No matches for '{query}'")
            return True

        self.cursor = self.search.focus(self.viewport)
        self._set_status_message(self.search.describe())
        self._cycle_matches()
        return True

    def _cycle_matches(self) -> None:
        """Arrow keys step through the matches; any other key ends the cycle."""
        while True:
            self.drawer.draw()
            key = self.keybinder.get_key_input()
            if key == curses.ERR:
                continue
            direction = self.keybinder.direction_for(key)
            if direction is None:
                logger.debug("Search cycle ended by key %r", key)
                return
            self.cursor = self.search.step(direction, self.viewport)
            self._set_status_message(self.search.describe())

    # --- Main loop ---
    def run(self) -> None:
        """Poll, dispatch and redraw until `exit_editor` clears `running`."""
        logger.info("Editor main loop started.")
        self.running = True
        self._force_full_redraw = True

        while self.running:
            try:
                redraw_needed = self._process_events_and_input()
                self._render_screen(redraw_needed)
            except KeyboardInterrupt:
                logger.info("Main loop interrupted by KeyboardInterrupt.")
                self.exit_editor()

        logger.info("Editor main loop finished.")

    def _process_events_and_input(self) -> bool:
        key_input = self.keybinder.get_key_input()
        if key_input == curses.ERR or key_input == -1:
            return False
        if key_input == curses.KEY_RESIZE:
            # Terminal size is fixed for the session
            logger.debug("Ignoring terminal resize event.")
            return False
        return self.keybinder.handle_input(key_input)

    def _render_screen(self, redraw_needed: bool) -> None:
        status_visible = self.status_message_visible()
        if status_visible != self._status_was_visible:
            redraw_needed = True
        if not redraw_needed and not self._force_full_redraw:
            return

        self.drawer.draw()
        self._status_was_visible = status_visible
        self._force_full_redraw = False
