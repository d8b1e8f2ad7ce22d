# tests/test_core/test_lined_editor.py
"""Integration tests for the `Lined` controller.
===============================================

Runs a real `Lined` against the mocked curses window from ``conftest``.
Keyboard input is scripted with `queue_keys`; every prompt-driven test
queues a terminating key (Enter, Escape, y/n) so no loop waits forever.
"""

import curses
import time
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from lined.core.Coordinates import Coordinates
from lined.core.Document import Document
from lined.core.Lined import KEY_ESCAPE, Lined
from lined.core.errors import FileSaveError, TerminalIOError
from tests.stubs import queue_keys

CTRL_Q = 17
CTRL_S = 19
CTRL_F = 6
ENTER = 10


def type_keys(text: str) -> list[int]:
    return [ord(c) for c in text]


class TestInitialization:
    def test_starts_with_blank_untitled_buffer(self, real_editor: Lined) -> None:
        assert real_editor.document.is_blank()
        assert real_editor.filename is None
        assert real_editor.display_name == "[No Name]"
        assert real_editor.cursor == Coordinates(0, 0)
        assert (real_editor.viewport.width, real_editor.viewport.height) == (80, 23)
        assert real_editor.modified is False

    def test_terminal_size_failure_is_fatal(
        self, mock_stdscr: MagicMock, mock_config: dict[str, Any]
    ) -> None:
        mock_stdscr.getmaxyx.side_effect = curses.error("no tty")
        with pytest.raises(TerminalIOError):
            Lined(mock_stdscr, mock_config)

    def test_poll_timeout_is_configured(
        self, mock_stdscr: MagicMock, mock_config: dict[str, Any]
    ) -> None:
        mock_config["editor"]["poll_timeout_ms"] = 120
        Lined(mock_stdscr, mock_config)
        mock_stdscr.timeout.assert_called_with(120)


class TestOpenFile:
    def test_open_existing_file(self, real_editor: Lined, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("one\ntwo\n", encoding="utf-8")

        real_editor.open_file(str(path))

        assert real_editor.document.lines() == ("one", "two")
        assert real_editor.filename == str(path)
        assert real_editor.display_name == "notes.txt"
        assert real_editor.status_message.startswith("Opened notes.txt (2 lines")
        assert real_editor.modified is False

    def test_open_missing_file_gives_empty_untitled_buffer(
        self, real_editor: Lined, tmp_path: Path
    ) -> None:
        missing = tmp_path / "nope.txt"
        real_editor.open_file(str(missing))
        assert real_editor.document.is_blank()
        assert real_editor.filename is None
        assert "not found" in real_editor.status_message

    def test_open_directory_gives_empty_untitled_buffer(
        self, real_editor: Lined, tmp_path: Path
    ) -> None:
        real_editor.open_file(str(tmp_path))
        assert real_editor.document.is_blank()
        assert real_editor.filename is None
        assert real_editor.status_message.startswith("Cannot open")

    def test_open_resets_cursor_and_view(self, real_editor: Lined, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("x\n", encoding="utf-8")
        real_editor.viewport.scroll_down(5)
        real_editor.cursor = Coordinates(3, 3)
        real_editor.open_file(str(path))
        assert real_editor.cursor == Coordinates(0, 0)
        assert real_editor.viewport.snapshot() == (0, 0)


class TestStatusMessage:
    def test_visible_for_configured_duration(self, real_editor: Lined) -> None:
        real_editor._set_status_message("hello")
        start = real_editor.status_message_time
        assert real_editor.status_message_visible(now=start + 0.5)
        assert not real_editor.status_message_visible(now=start + 1.5)

    def test_empty_message_is_never_visible(self, real_editor: Lined) -> None:
        real_editor.status_message = ""
        real_editor.status_message_time = time.time()
        assert not real_editor.status_message_visible()


class TestSave:
    def test_save_named_file(self, real_editor: Lined, tmp_path: Path) -> None:
        path = tmp_path / "out.txt"
        real_editor.filename = str(path)
        real_editor.document = Document(["alpha", "beta"])
        real_editor.modified = True

        real_editor.save_file()

        assert path.read_text(encoding="utf-8") == "alpha\nbeta\n"
        assert real_editor.modified is False
        assert real_editor.status_message == f"11 bytes written to {path}"

    def test_save_without_trailing_newline(
        self, real_editor: Lined, mock_config: dict[str, Any], tmp_path: Path
    ) -> None:
        mock_config["editor"]["ensure_trailing_newline"] = False
        path = tmp_path / "out.txt"
        real_editor.filename = str(path)
        real_editor.document = Document(["alpha"])
        real_editor.save_file()
        assert path.read_bytes() == b"alpha"

    def test_untitled_buffer_prompts_for_name(
        self, real_editor: Lined, mock_stdscr: MagicMock, tmp_path: Path
    ) -> None:
        path = tmp_path / "new.txt"
        real_editor.document = Document(["hi"])
        real_editor.modified = True
        queue_keys(mock_stdscr, type_keys(str(path)) + [ENTER])

        real_editor.save_file()

        assert real_editor.filename == str(path)
        assert path.read_text(encoding="utf-8") == "hi\n"
        assert real_editor.modified is False

    def test_save_as_cancelled(self, real_editor: Lined, mock_stdscr: MagicMock) -> None:
        real_editor.modified = True
        queue_keys(mock_stdscr, [KEY_ESCAPE])
        real_editor.save_file()
        assert real_editor.filename is None
        assert real_editor.modified is True
        assert real_editor.status_message == "Save aborted"

    def test_save_failure_is_shown_then_raised(
        self, real_editor: Lined, mock_stdscr: MagicMock, tmp_path: Path
    ) -> None:
        target = tmp_path / "missing" / "out.txt"
        real_editor.filename = str(target)
        real_editor.modified = True

        with pytest.raises(FileSaveError) as excinfo:
            real_editor.save_file()

        assert excinfo.value.filename == str(target)
        assert excinfo.value.exit_code == 1
        assert real_editor.status_message.startswith("Can't save! I/O error:")
        mock_stdscr.noutrefresh.assert_called()
        assert real_editor.modified is True


class TestExit:
    def test_exit_unmodified_stops_immediately(self, real_editor: Lined) -> None:
        real_editor.running = True
        assert real_editor.exit_editor() is False
        assert real_editor.running is False

    def test_exit_discarding_changes(self, real_editor: Lined, mock_stdscr: MagicMock) -> None:
        real_editor.running = True
        real_editor.modified = True
        queue_keys(mock_stdscr, [ord("n")])
        real_editor.exit_editor()
        assert real_editor.running is False

    def test_exit_saving_changes(
        self, real_editor: Lined, mock_stdscr: MagicMock, tmp_path: Path
    ) -> None:
        path = tmp_path / "keep.txt"
        real_editor.filename = str(path)
        real_editor.document = Document(["data"])
        real_editor.running = True
        real_editor.modified = True
        queue_keys(mock_stdscr, [ord("Y")])

        real_editor.exit_editor()

        assert path.read_text(encoding="utf-8") == "data\n"
        assert real_editor.running is False

    def test_other_key_cancels_exit(self, real_editor: Lined, mock_stdscr: MagicMock) -> None:
        real_editor.running = True
        real_editor.modified = True
        queue_keys(mock_stdscr, [ord("x")])
        assert real_editor.exit_editor() is True
        assert real_editor.running is True
        assert real_editor.status_message == "Exit cancelled"

    def test_cancelled_save_as_keeps_editor_running(
        self, real_editor: Lined, mock_stdscr: MagicMock
    ) -> None:
        real_editor.running = True
        real_editor.modified = True
        queue_keys(mock_stdscr, [ord("y"), KEY_ESCAPE])
        real_editor.exit_editor()
        assert real_editor.running is True
        assert real_editor.status_message == "Save aborted"


class TestPrompt:
    def test_backspace_edits_input(self, real_editor: Lined, mock_stdscr: MagicMock) -> None:
        queue_keys(mock_stdscr, type_keys("abx") + [127] + type_keys("c") + [ENTER])
        assert real_editor.prompt("Name: ") == "abc"
        assert real_editor._force_full_redraw is True

    def test_callback_sees_every_edit(self, real_editor: Lined, mock_stdscr: MagicMock) -> None:
        seen: list[str] = []
        queue_keys(mock_stdscr, type_keys("ab") + [ENTER])
        real_editor.prompt("Q: ", callback=seen.append)
        assert seen == ["a", "ab"]

    def test_max_len_caps_input(self, real_editor: Lined, mock_stdscr: MagicMock) -> None:
        queue_keys(mock_stdscr, type_keys("abcdef") + [ENTER])
        assert real_editor.prompt("Q: ", max_len=3) == "abc"


class TestFind:
    def test_find_then_cycle_with_arrows(self, real_editor: Lined, mock_stdscr: MagicMock) -> None:
        real_editor.document = Document(["abc", "dba"])
        queue_keys(mock_stdscr, type_keys("b") + [ENTER, curses.KEY_DOWN, ord("x")])

        real_editor.find_prompt()

        assert real_editor.absolute_cursor == Coordinates(1, 1)
        assert real_editor.status_message == "Match 2 of 2 for 'b'"
        # The key that ends the cycle is consumed
        assert real_editor.document.lines() == ("abc", "dba")

    def test_find_recenters_on_distant_match(
        self, real_editor: Lined, mock_stdscr: MagicMock
    ) -> None:
        lines = ["" for _ in range(100)]
        lines[80] = "needle"
        real_editor.document = Document(lines)
        queue_keys(mock_stdscr, type_keys("needle") + [ENTER, ord("q")])

        real_editor.find_prompt()

        assert real_editor.absolute_cursor == Coordinates(0, 80)
        assert real_editor.viewport.row_offset == 80 - 23 // 2
        assert real_editor.cursor == Coordinates(0, 23 // 2)

    def test_cancel_restores_cursor_and_view(
        self, real_editor: Lined, mock_stdscr: MagicMock
    ) -> None:
        lines = ["" for _ in range(100)]
        lines[80] = "needle"
        real_editor.document = Document(lines)
        real_editor.cursor = Coordinates(0, 4)
        queue_keys(mock_stdscr, type_keys("nee") + [KEY_ESCAPE])

        real_editor.find_prompt()

        assert real_editor.cursor == Coordinates(0, 4)
        assert real_editor.viewport.snapshot() == (0, 0)
        assert real_editor.status_message == "Search cancelled"
        assert real_editor.search.matches == []

    def test_no_matches_restores_view(self, real_editor: Lined, mock_stdscr: MagicMock) -> None:
        real_editor.document = Document(["abc"])
        real_editor.cursor = Coordinates(2, 0)
        queue_keys(mock_stdscr, type_keys("zz") + [ENTER])

        real_editor.find_prompt()

        assert real_editor.cursor == Coordinates(2, 0)
        assert real_editor.status_message == "No matches for 'zz'"


class TestMainLoop:
    def test_printable_key_inserts_text(self, real_editor: Lined) -> None:
        assert real_editor.keybinder.handle_input(ord("a")) is True
        assert real_editor.document.line(0) == "a"
        assert real_editor.modified is True

    def test_resize_event_is_ignored(self, real_editor: Lined, mock_stdscr: MagicMock) -> None:
        queue_keys(mock_stdscr, [curses.KEY_RESIZE])
        assert real_editor._process_events_and_input() is False
        assert (real_editor.viewport.width, real_editor.viewport.height) == (80, 23)

    def test_no_key_needs_no_redraw(self, real_editor: Lined) -> None:
        assert real_editor._process_events_and_input() is False

    def test_render_only_when_needed(self, real_editor: Lined) -> None:
        real_editor.drawer.draw = MagicMock()  # type: ignore[method-assign]
        real_editor._force_full_redraw = False

        real_editor._render_screen(False)
        real_editor.drawer.draw.assert_not_called()

        real_editor._render_screen(True)
        assert real_editor.drawer.draw.call_count == 1

        # A status message appearing forces a repaint on its own
        real_editor._set_status_message("hi")
        real_editor._render_screen(False)
        assert real_editor.drawer.draw.call_count == 2

    def test_run_edits_then_quits(self, real_editor: Lined, mock_stdscr: MagicMock) -> None:
        queue_keys(mock_stdscr, type_keys("hi") + [ENTER] + type_keys("yo") + [CTRL_Q, ord("n")])

        real_editor.run()

        assert real_editor.running is False
        assert real_editor.document.lines() == ("hi", "yo")
        assert real_editor.absolute_cursor == Coordinates(2, 1)

    def test_run_saves_with_ctrl_s(
        self, real_editor: Lined, mock_stdscr: MagicMock, tmp_path: Path
    ) -> None:
        path = tmp_path / "doc.txt"
        real_editor.open_file(str(path))
        queue_keys(
            mock_stdscr,
            type_keys("ok") + [CTRL_S] + type_keys(str(path)) + [ENTER, CTRL_Q],
        )

        real_editor.run()

        assert path.read_text(encoding="utf-8") == "ok\n"
        assert real_editor.running is False

    def test_keyboard_interrupt_goes_through_exit(self, real_editor: Lined) -> None:
        real_editor.keybinder.get_key_input = MagicMock(  # type: ignore[method-assign]
            side_effect=KeyboardInterrupt
        )
        real_editor.run()
        assert real_editor.running is False
