# tests/conftest.py
"""Pytest configuration with shared fixtures for the lined editor tests.

Curses functions that need an initialized screen (`initscr`) are replaced
with mocks for every test; curses constants (key codes, attributes) stay
real. `mock_stdscr` stands in for the terminal window: 24x80 cells, and
`getch` returns `curses.ERR` unless keys are queued with `queue_keys`.
"""

from __future__ import annotations

import copy
import curses
from typing import Any, Generator
from unittest.mock import MagicMock

import pytest

from lined.core.Lined import Lined
from lined.utils.utils import DEFAULT_CONFIG
from tests.stubs import queue_keys

# curses functions that fail without initscr()
_SCREEN_FUNCTIONS = (
    "curs_set",
    "doupdate",
    "has_colors",
    "init_pair",
    "raw",
    "noraw",
    "echo",
    "noecho",
    "set_escdelay",
    "tigetstr",
    "putp",
)


# --- Automatic mocking of the curses module ---
@pytest.fixture(autouse=True)
def mock_curses_functions(monkeypatch: pytest.MonkeyPatch) -> Generator[dict[str, MagicMock], None, None]:
    """Replace screen-bound `curses` functions with mocks.

    Yields:
        dict[str, MagicMock]: The installed mocks by function name.
    """
    mocks: dict[str, MagicMock] = {}
    for name in _SCREEN_FUNCTIONS:
        mocks[name] = MagicMock(name=f"curses.{name}", return_value=None)
        monkeypatch.setattr(curses, name, mocks[name], raising=False)
    mocks["has_colors"].return_value = True
    monkeypatch.setattr(curses, "color_pair", lambda n: n << 8)
    yield mocks


# --- Base fixtures for curses and configuration ---
@pytest.fixture
def mock_stdscr() -> MagicMock:
    """Create a mock of the curses stdscr.

    Returns:
        MagicMock: A mocked `stdscr` with terminal size (24, 80) and no pending keys.
    """
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    queue_keys(stdscr, [])
    return stdscr


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Provide the built-in default configuration (deep-copied per test)."""
    return copy.deepcopy(DEFAULT_CONFIG)


# --- Lined fixtures ---
@pytest.fixture
def real_editor(mock_stdscr: MagicMock, mock_config: dict[str, Any]) -> Lined:
    """Create a real `Lined` instance drawing into the mocked window.

    Returns:
        Lined: Editor with an empty untitled buffer on an 80x23 viewport.
    """
    return Lined(mock_stdscr, mock_config)


@pytest.fixture
def sample_text() -> list[str]:
    """Provide a small document as a list of lines."""
    return [
        "def hello_world():",
        "    # This is a comment",
        "    print('Hello, world!')",
        "    return True",
        "",
    ]
