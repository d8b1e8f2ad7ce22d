# lined/ui/KeyBinder.py
"""KeyBinder.py
==================
Translates key presses into editor actions.

Bindings come from the ``[keybindings]`` table of the configuration, falling
back to built-in defaults. Each action accepts a single key spec, a list of
specs, or a ``"a|b"`` string; a spec is either an integer key code or a
string such as ``"ctrl+s"``, ``"up"`` or ``"del"``.

`get_key_input` reads one key, decoding terminal escape sequences for the
arrow and delete keys that curses did not translate itself. `handle_input`
dispatches a key to its bound action, or inserts it when it is a printable
ASCII character.
"""

import curses
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from lined.core.Coordinates import Direction
from lined.utils.logging_config import KEY_LOGGER

if TYPE_CHECKING:
    from lined.core.Lined import Lined

logger = logging.getLogger("lined")


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Maps key codes to editor actions.

    Attributes:
        editor (Lined): The editor whose handlers the keys are bound to.
        config (dict): Editor configuration, including user keybindings.
        stdscr: The curses window keys are read from.
        keybindings (dict[str, list[int]]): Action name -> key codes.
        action_map (dict[int, Callable]): Key code -> bound handler.
    """

    # Keys do NOT include the leading ESC (0x1B); get_key_input reads after it.
    ESCAPE_SEQUENCE_MAP: dict[str, str] = {
        "[A": "up", "[B": "down", "[C": "right", "[D": "left",
        "OA": "up", "OB": "down", "OC": "right", "OD": "left",
        "[3~": "del",
    }

    def __init__(self, editor: "Lined"):
        logger.debug("KeyBinder initialized with editor: %s", editor)
        self.editor = editor
        self.config = editor.config
        self.stdscr = editor.stdscr

        self.keybindings = self._load_keybindings()
        self.action_map = self._setup_action_map()
        self.direction_map = self._setup_direction_map()

    def _handle_printable_character(self, key: int | str) -> bool:
        """Insert printable ASCII; anything else is ignored."""
        if isinstance(key, str) and len(key) == 1:
            key = ord(key)
        if isinstance(key, int) and 32 <= key < 127:
            return self.editor.insert_character(chr(key))
        return False

    # ---------------------- Handle Input --------------------
    def handle_input(self, key: int | str) -> bool:
        """Dispatch ``key`` to its action or insert it as text.

        Returns:
            bool: True if the key changed anything on screen.
        """
        logger.debug("handle_input: key %r (type: %s)", key, type(key).__name__)
        original_status = self.editor.status_message

        action = self.action_map.get(key)  # type: ignore[arg-type]
        if action is not None:
            logger.debug(f"handle_input: Key '{key}' found in action_map. Calling: {action.__name__}")
            changed = bool(action())
        elif self._handle_printable_character(key):
            changed = True
        else:
            logger.debug("Unhandled input: %r", key)
            changed = False

        return changed or self.editor.status_message != original_status

    def _load_keybindings(self) -> dict[str, list[int]]:
        """Resolve configured (or default) key specs into key codes per action."""
        default_keybindings: dict[str, list[int | str]] = {
            "quit": ["ctrl+q", 17],
            "save_file": ["ctrl+s", 19],
            "find": ["ctrl+f", 6],
            "delete": ["del", curses.KEY_DC],
            "handle_backspace": ["backspace", curses.KEY_BACKSPACE, 8, 127],
            "handle_enter": ["enter", curses.KEY_ENTER, 10, 13],
            "handle_up": ["up", curses.KEY_UP],
            "handle_down": ["down", curses.KEY_DOWN],
            "handle_left": ["left", curses.KEY_LEFT],
            "handle_right": ["right", curses.KEY_RIGHT],
        }

        user_keybindings_config: dict[str, object] = self.config.get("keybindings", {})
        parsed_keybindings: dict[str, list[int]] = {}

        for action, default_value_spec in default_keybindings.items():
            spec: object = user_keybindings_config.get(action, default_value_spec)
            if not spec:
                logger.debug("Keybinding for action %r is disabled or empty.", action)
                continue

            if isinstance(spec, list):
                specs_to_process = spec
            elif isinstance(spec, str) and "|" in spec:
                specs_to_process = [s.strip() for s in spec.split("|")]
            else:
                specs_to_process = [spec]

            key_codes: list[int] = []
            for key_spec_item in specs_to_process:
                try:
                    key_code = self._decode_keystring(key_spec_item)
                except ValueError as e:
                    logger.error(
                        "Error parsing keybinding item %r for action %r: %s. "
                        "This binding will be ignored.",
                        key_spec_item, action, e,
                    )
                    continue
                if key_code not in key_codes:
                    key_codes.append(key_code)

            if key_codes:
                parsed_keybindings[action] = key_codes
            else:
                logger.warning("No valid key codes for action %r; it will not be bound.", action)

        logger.debug("Loaded keybindings: %s", parsed_keybindings)
        return parsed_keybindings

    def _decode_keystring(self, key_input: Any) -> int:
        """Decode a key spec (``"ctrl+q"``, ``"up"``, ``"x"`` or an int) into a key code.

        Raises:
            ValueError: unknown key name or modifier.
        """
        if isinstance(key_input, int):
            return key_input
        if not isinstance(key_input, str):
            raise ValueError(f"Invalid key_input type: {type(key_input)}. Expected str or int.")

        s = key_input.strip().lower()
        if not s:
            raise ValueError("Key string cannot be empty.")

        named_keys_map: dict[str, int] = {
            "left": curses.KEY_LEFT,
            "right": curses.KEY_RIGHT,
            "up": curses.KEY_UP,
            "down": curses.KEY_DOWN,
            "delete": curses.KEY_DC,
            "del": curses.KEY_DC,
            "backspace": curses.KEY_BACKSPACE,
            "enter": curses.KEY_ENTER,
            "return": curses.KEY_ENTER,
            "tab": 9,
            "space": ord(" "),
            "esc": 27,
            "escape": 27,
        }
        if s in named_keys_map:
            return named_keys_map[s]

        parts = s.split("+")
        base_key_str = parts[-1].strip()
        modifiers = {p.strip() for p in parts[:-1]}

        if base_key_str in named_keys_map:
            base_code = named_keys_map[base_key_str]
        elif len(base_key_str) == 1:
            base_code = ord(base_key_str)
        else:
            raise ValueError(f"Unknown base key '{base_key_str}' in '{key_input}'")

        if "ctrl" in modifiers:
            modifiers.remove("ctrl")
            if len(base_key_str) == 1 and "a" <= base_key_str <= "z":
                base_code = ord(base_key_str) - ord("a") + 1
            else:
                raise ValueError(f"Ctrl is only supported with letters, got '{key_input}'")

        if modifiers:
            raise ValueError(f"Unknown or unhandled modifiers {sorted(modifiers)} in '{key_input}'")

        return base_code

    def _setup_action_map(self) -> dict[int, Callable[[], bool]]:
        """Build key code -> handler from the parsed keybindings."""
        action_to_method_map: dict[str, Callable[[], bool]] = {
            "quit": self.editor.exit_editor,
            "save_file": self.editor.save_file,
            "find": self.editor.find_prompt,
            "delete": self.editor.handle_delete,
            "handle_backspace": self.editor.handle_backspace,
            "handle_enter": self.editor.handle_enter,
            "handle_up": self.editor.handle_up,
            "handle_down": self.editor.handle_down,
            "handle_left": self.editor.handle_left,
            "handle_right": self.editor.handle_right,
        }

        final_key_action_map: dict[int, Callable[[], bool]] = {}
        for action_name, key_code_list in self.keybindings.items():
            method_callable = action_to_method_map[action_name]
            for key_code in key_code_list:
                existing = final_key_action_map.get(key_code)
                if existing is not None and existing.__name__ != method_callable.__name__:
                    logger.warning(
                        f"Keybinding for action '{action_name}' (key: {key_code}) is overwriting "
                        f"an existing mapping for method '{existing.__name__}'."
                    )
                final_key_action_map[key_code] = method_callable

        logger.debug(
            "Final constructed action map: %s",
            {k: v.__name__ for k, v in final_key_action_map.items()},
        )
        return final_key_action_map

    def _setup_direction_map(self) -> dict[int, Direction]:
        directions = {
            "handle_up": Direction.UP,
            "handle_down": Direction.DOWN,
            "handle_left": Direction.LEFT,
            "handle_right": Direction.RIGHT,
        }
        return {
            code: direction
            for action, direction in directions.items()
            for code in self.keybindings.get(action, [])
        }

    def direction_for(self, key: int | str) -> Optional[Direction]:
        """Direction bound to ``key`` through the arrow-key actions, if any."""
        return self.direction_map.get(key)  # type: ignore[arg-type]

    def get_key_input(self) -> int:
        """Read one key, decoding ESC sequences for arrows and delete.

        Returns:
            int: a key code, 27 for a lone or unknown ESC sequence, or
            ``curses.ERR`` when no key arrived before the poll timeout.
        """
        target = self.stdscr
        try:
            ch = target.getch()
        except curses.error:
            return curses.ERR
        if ch == curses.ERR:
            return ch
        if ch != 27:
            KEY_LOGGER.debug("key %r", ch)
            return ch

        seq = ""
        target.nodelay(True)
        try:
            while True:
                nx = target.getch()
                if nx == curses.ERR:
                    break
                seq += chr(nx) if 0 <= nx <= 255 else f"<{nx}>"
        except curses.error:
            logger.debug("get_key_input: read error inside escape sequence %r", seq)
        finally:
            target.timeout(self.editor.poll_timeout_ms)

        if not seq:
            KEY_LOGGER.debug("key ESC")
            return 27

        mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if mapped:
            code = self._decode_keystring(mapped)
            KEY_LOGGER.debug("key ESC %r -> %r -> %r", seq, mapped, code)
            return code

        logger.warning("get_key_input: unknown escape sequence: ESC + %r", seq)
        return 27
