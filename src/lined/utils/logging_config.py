# lined/utils/logging_config.py
"""lined.utils.logging_config
============================

Logging configuration for the lined editor.

The editor owns the terminal while it runs, so by default nothing is logged
to the console; records go to a rotating file instead.

Features:
    - Rotating file logging (``editor.log`` under ``~/.config/lined`` by default).
    - Optional console logging to stderr with its own level.
    - Optional separate ``error.log`` for ERROR and CRITICAL records.
    - Optional key-press tracing (``keytrace.log``) enabled by the
      ``LINED_KEYTRACE`` environment variable.
    - Falls back to the system temp directory when the log directory cannot
      be created.
    - Safe to call repeatedly: existing root handlers are replaced.

Globals:
    logger: Main application logger ("lined").
    KEY_LOGGER: Logger for raw key-press trace events ("lined.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
# Created at import-time; unconfigured until ``setup_logging()`` runs.
logger = logging.getLogger("lined")
KEY_LOGGER = logging.getLogger("lined.keyevents")

KEYTRACE_ENV_VAR = "LINED_KEYTRACE"
DEFAULT_LOG_FILE = "~/.config/lined/editor.log"


def _prepare_log_path(path: str, fallback_name: str) -> str:
    """Expand ``path`` and create its directory, or fall back to the temp dir."""
    path = os.path.expanduser(path)
    log_dir = os.path.dirname(path)
    if log_dir and not os.path.isdir(log_dir):
        try:
            os.makedirs(log_dir, exist_ok=True)
        except OSError as e_mkdir:
            print(f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr)
            path = os.path.join(tempfile.gettempdir(), fallback_name)
            print(f"Logging to temporary file: '{path}'", file=sys.stderr)
    return path


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configure application-wide logging handlers and levels.

    Up to four independent handlers are installed:

    1. File handler - rotating log at ``log_file`` from ``file_level`` up.
    2. Console handler - optional ``stderr`` output at ``console_level``.
    3. Error-file handler - optional rotating ``error.log`` (ERROR and up),
       next to the main log file.
    4. Key-event handler - rotating ``keytrace.log`` on the
       ``lined.keyevents`` logger, enabled when ``LINED_KEYTRACE`` is
       ``1/true/yes``.

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` section is read; recognised keys are
            ``log_file``, ``file_level`` (default ``"INFO"``),
            ``log_to_console`` (default ``False``), ``console_level``
            (default ``"WARNING"``) and ``separate_error_log``
            (default ``False``).

    Notes:
        Never raises; handler setup errors are reported to stderr and
        logging continues with whatever handlers could be created.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})

    log_filename = _prepare_log_path(
        str(logging_config.get("log_file", DEFAULT_LOG_FILE)), "lined.log"
    )
    log_dir = os.path.dirname(log_filename)
    log_file_level_str = str(logging_config.get("file_level", "INFO")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.INFO)

    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
    )
    file_handler = None
    try:
        file_handler = logging.handlers.RotatingFileHandler(
            log_filename, maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(log_file_level)
    except OSError as e_fh:
        print(
            f"Error setting up file logger for '{log_filename}': {e_fh}. File logging may be impaired.",
            file=sys.stderr,
        )

    # Console Handler
    console_handler = None
    if logging_config.get("log_to_console", False):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_log_level = getattr(logging, console_level_str, logging.WARNING)
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s")
        )
        console_handler.setLevel(console_log_level)

    # Optional Separate Error Log File
    error_file_handler = None
    error_log_filename = os.path.join(log_dir, "error.log")
    if logging_config.get("separate_error_log", False):
        try:
            error_file_handler = logging.handlers.RotatingFileHandler(
                error_log_filename,
                maxBytes=1 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            error_file_handler.setFormatter(file_formatter)
            error_file_handler.setLevel(logging.ERROR)
        except OSError as e_efh:
            print(
                f"Error setting up separate error log '{error_log_filename}': {e_efh}.",
                file=sys.stderr,
            )

    # Configure the root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []  # Clear existing root handlers to avoid duplicates

    if file_handler:
        root_logger.addHandler(file_handler)
    if console_handler:
        root_logger.addHandler(console_handler)
    if error_file_handler:
        root_logger.addHandler(error_file_handler)

    root_logger.setLevel(log_file_level)

    # Key Event Logger
    key_event_logger = logging.getLogger("lined.keyevents")
    key_event_logger.propagate = False
    key_event_logger.setLevel(logging.DEBUG)
    key_event_logger.handlers = []
    key_event_logger.disabled = False

    if os.environ.get(KEYTRACE_ENV_VAR, "").lower() in {"1", "true", "yes"}:
        key_trace_filename = os.path.join(log_dir, "keytrace.log")
        try:
            key_trace_handler = logging.handlers.RotatingFileHandler(
                key_trace_filename,
                maxBytes=1 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            key_trace_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            key_event_logger.addHandler(key_trace_handler)
            logger.info("Key event tracing enabled, logging to '%s'.", key_trace_filename)
        except OSError as e_keytrace:
            logger.error(f"Failed to set up key trace logging: {e_keytrace}")
            key_event_logger.disabled = True
    else:
        key_event_logger.addHandler(logging.NullHandler())
        key_event_logger.disabled = True
        logger.debug("Key event tracing is disabled.")

    logger.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logger.info(
            f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}."
        )
    if console_handler:
        logger.info(
            f"Console logging to stderr at level: {logging.getLevelName(console_handler.level)}."
        )
    if error_file_handler:
        logger.info(f"Error logging to '{error_log_filename}' at level: ERROR.")
