# lined/utils/utils.py
"""
lined.utils.utils
=================

Configuration helpers for the lined editor.

- Automatic user configuration: creates `~/.config/lined/config.toml` and an
  empty `.env` on first run.
- Layered loading: the embedded `DEFAULT_CONFIG` is deep-merged with the
  user's TOML file, so the editor always starts even when the file is
  missing or malformed.
- `LINED_CONFIG` points the loader at a different TOML file.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger("lined")

CONFIG_ENV_VAR = "LINED_CONFIG"

ENV_TEMPLATE = """# Environment for lined, loaded at startup.
# LINED_KEYTRACE=1 writes every key press to keytrace.log next to the editor log.
LINED_KEYTRACE=
"""

# Ultimate fallback, so the application can ALWAYS start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "greeting": "lined -- version 1",
        "status_message_seconds": 1.0,
        "poll_timeout_ms": 50,
        "ensure_trailing_newline": True,
    },
    "search": {
        "case_sensitive": True,
    },
    "colors": {
        "status_fg": "black",
        "status_bg": "white",
    },
    "keybindings": {
        "quit": "ctrl+q",
        "save_file": "ctrl+s",
        "find": "ctrl+f",
        "delete": "del",
        "handle_backspace": ["backspace", 8, 127],
        "handle_enter": ["enter", 10, 13],
        "handle_up": "up",
        "handle_down": "down",
        "handle_left": "left",
        "handle_right": "right",
    },
    "logging": {
        "log_file": "~/.config/lined/editor.log",
        "file_level": "INFO",
        "log_to_console": False,
        "console_level": "WARNING",
        "separate_error_log": False,
    },
}


# --- Helper Functions ---

def get_config_dir() -> Path:
    return Path.home() / ".config" / "lined"


def get_config_path() -> Path:
    """User config file, honouring the `LINED_CONFIG` override."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "config.toml"


def ensure_user_config_exists(config_dir: Optional[Path] = None) -> None:
    """Create `config.toml` and `.env` templates in ``config_dir`` if missing."""
    config_dir = config_dir or get_config_dir()
    user_config_path = config_dir / "config.toml"
    user_env_path = config_dir / ".env"

    try:
        config_dir.mkdir(parents=True, exist_ok=True)

        if not user_config_path.exists():
            with open(user_config_path, "w", encoding="utf-8") as f_out:
                toml.dump(DEFAULT_CONFIG, f_out)
            logger.info(f"Created user config template at: {user_config_path}")

        if not user_env_path.exists():
            user_env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
            logger.info(f"Created user .env template at: {user_env_path}")

    except OSError as e:
        logger.error(f"Could not create user configuration files: {e}")


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the embedded defaults and merge the user's TOML file over them.

    A missing or unparsable user file is logged and the defaults are used.
    """
    final_config = copy.deepcopy(DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    if config_path is None:
        config_path = get_config_path()
        if not os.environ.get(CONFIG_ENV_VAR):
            ensure_user_config_exists(config_path.parent)

    if config_path.is_file():
        try:
            user_config = toml.load(config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{config_path}': {e}. Using defaults.")
    else:
        logger.debug(f"No user config at {config_path}; using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
