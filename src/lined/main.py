# src/lined/main.py
"""
lined Main Entry Point
======================

Startup sequence:
1) Environment loading: reads ~/.config/lined/.env (e.g. LINED_KEYTRACE).
2) Configuration & logging: loads config and initializes logging.
3) Curses wrapper: initializes/tears down curses safely.
4) Application run: puts the terminal into raw mode for the session,
   instantiates Lined, opens the file named on the command line and runs
   the main loop.

Exit status is 0 after a normal quit and 1 after a fatal error (terminal
I/O failure or failed save). The error is printed once the terminal has
been restored.
"""

from __future__ import annotations

import curses
import locale
import logging
import sys
from typing import Any, Optional

from dotenv import load_dotenv

from lined.core.Lined import Lined
from lined.core.errors import LinedError
from lined.ui.TerminalAppMode import TerminalAppMode
from lined.utils.logging_config import setup_logging
from lined.utils.utils import get_config_dir, load_config

logger = logging.getLogger("lined")


def _load_user_env() -> None:
    """Load ~/.config/lined/.env; existing environment variables win."""
    dotenv_path = get_config_dir() / ".env"
    if dotenv_path.is_file():
        load_dotenv(dotenv_path=dotenv_path, override=False)


def main_app_runner(stdscr: curses.window, config: dict[str, Any], file_to_open: Optional[str]) -> None:
    """
    Target for `curses.wrapper`: run one editing session.

    Raises:
        LinedError: fatal terminal or save failure; propagates after the
            terminal modes have been restored.
    """
    with TerminalAppMode(stdscr):
        editor = Lined(stdscr, config=config)
        if file_to_open:
            editor.open_file(file_to_open)
        editor.run()


def _reset_terminal_display() -> None:
    # Best-effort final clear to avoid artifacts after exit.
    if sys.stdout.isatty():
        print("\033c", end="", flush=True)


def start(argv: Optional[list[str]] = None) -> int:
    """
    Run the editor and return the process exit status.

    Args:
        argv: Command line; defaults to ``sys.argv``. ``argv[1]`` names the
            file to edit.
    """
    argv = sys.argv if argv is None else argv
    _load_user_env()
    config: dict[str, Any] = load_config()
    setup_logging(config)
    logger.info("lined editor starting up...")

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    file_to_open = argv[1] if len(argv) > 1 and argv[1].strip() else None

    exit_code = 0
    fatal: Optional[BaseException] = None
    try:
        curses.wrapper(main_app_runner, config, file_to_open)
        logger.info("lined editor shut down gracefully.")
    except LinedError as e:
        logger.critical("Fatal error: %s", e, exc_info=True)
        fatal, exit_code = e, e.exit_code
    except curses.error as e:
        logger.critical("Terminal error: %s", e, exc_info=True)
        fatal, exit_code = e, 1
    except Exception as e:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        fatal, exit_code = e, 1
    finally:
        if exit_code != 0:
            _reset_terminal_display()

    if fatal is not None:
        print(f"lined: {fatal}", file=sys.stderr)
    return exit_code


if __name__ == "__main__":
    sys.exit(start())
