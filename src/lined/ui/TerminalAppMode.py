# src/lined/ui/TerminalAppMode.py
from __future__ import annotations

import curses
import logging
from types import TracebackType
from typing import Optional

from lined.core.errors import TerminalIOError

logger = logging.getLogger("lined")


class TerminalAppMode:
    """
    Put the terminal into the editor's input mode for the duration of a session:

    - Alternate screen buffer (smcup/rmcup) so the shell prompt is hidden.
    - Application cursor keys (smkx/rmkx).
    - raw + noecho, keypad(True), so ^Q/^S reach the editor instead of flow control.
    - No curses-level scrolling.

    Use as a context manager; the previous modes are restored on every exit
    path, including exceptions.
    """

    def __init__(self, stdscr: curses.window) -> None:
        self._stdscr = stdscr
        self._entered: bool = False

    def __enter__(self) -> "TerminalAppMode":
        self.enter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.exit()

    def enter(self) -> None:
        """Switch to raw, alternate-screen mode.

        Raises:
            TerminalIOError: raw mode could not be enabled.
        """
        stdscr = self._stdscr

        self._tputs("smcup")
        self._tputs("smkx")

        try:
            curses.raw()
            curses.noecho()
            stdscr.keypad(True)
        except curses.error as e:
            raise TerminalIOError(f"Cannot enable raw mode: {e}") from e
        self._entered = True

        try:
            curses.set_escdelay(25)
        except curses.error as e:
            logger.debug("set_escdelay failed: %r", e)

        stdscr.scrollok(False)
        stdscr.leaveok(False)
        stdscr.clearok(True)
        stdscr.erase()
        logger.debug("TerminalAppMode: entered (raw mode, alternate screen).")

    def exit(self) -> None:
        if not self._entered:
            return

        try:
            self._stdscr.keypad(False)
            curses.noraw()
            curses.echo()
        except curses.error as e:
            logger.warning("TerminalAppMode: could not restore input modes: %r", e)

        self._tputs("rmkx")
        self._tputs("rmcup")

        self._entered = False
        logger.debug("TerminalAppMode: exited (restored terminal modes).")

    # -- helpers ---------------------------------------------------------------

    def _tputs(self, capname: str) -> None:
        try:
            s = curses.tigetstr(capname)
            if s:
                curses.putp(s)
        except curses.error as e:
            # Capability missing on this terminal
            logger.debug("tputs(%s) skipped: %r", capname, e)
