# tagwalk/utils/logging_config.py
"""tagwalk.utils.logging_config
==============================

Logging configuration for tagwalk. It defines the global logger objects and a
single setup function, `setup_logging`, which configures application-wide
handlers and levels from the ``[logging]`` section of the configuration.

Features:
    - Rotating file logging for general events (tagwalk.log).
    - Optional console logging to stderr with configurable level.
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Optional action tracing (actiontrace.log) enabled via the TAGWALK_ACTIONTRACE
      environment variable.
    - Automatic creation of log directories, with fallback to the system temp directory.
    - Safe reconfiguration: existing handlers are cleared on every call.
    - Never raises; setup problems are reported to stderr.

Usage:
    >>> from tagwalk.utils import logging_config
    >>> logging_config.setup_logging({"logging": {"console_level": "INFO"}})

Globals:
    logger: Main application logger ("tagwalk").
    ACTION_LOGGER: Logger for per-action trace records ("tagwalk.actions").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
# Created at import time, unconfigured until ``setup_logging()`` runs.
logger = logging.getLogger("tagwalk")
ACTION_LOGGER = logging.getLogger("tagwalk.actions")

ACTION_TRACE_ENV = "TAGWALK_ACTIONTRACE"


def _rotating_handler(
    filename: str, max_bytes: int, backup_count: int
) -> logging.handlers.RotatingFileHandler:
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)
    return logging.handlers.RotatingFileHandler(
        filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to four independent handlers are installed:

    1. File handler: rotating ``tagwalk.log`` capturing everything from
       ``file_level`` (default DEBUG) upward.
    2. Console handler: optional ``stderr`` output at ``console_level``
       (default WARNING).
    3. Error-file handler: optional rotating ``error.log`` with ERROR and
       CRITICAL records only.
    4. Action-trace handler: rotating ``actiontrace.log`` attached to the
       ``tagwalk.actions`` logger when ``TAGWALK_ACTIONTRACE`` is ``1/true/yes``.

    Existing root handlers are cleared so repeated calls (e.g. in tests) do not
    duplicate records.

    Args:
        config: Application configuration. Only the ``["logging"]`` section is
            consulted; recognised keys are ``file_level``, ``console_level``,
            ``log_to_console``, ``separate_error_log`` and ``log_file``.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})

    log_filename = logging_config.get("log_file", "tagwalk.log")
    log_file_level_str = str(logging_config.get("file_level", "DEBUG")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.DEBUG)

    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
    )
    file_handler = None
    try:
        file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5)
    except OSError as e_fh:
        print(f"Error setting up file logger for '{log_filename}': {e_fh}", file=sys.stderr)
        log_filename = os.path.join(tempfile.gettempdir(), "tagwalk.log")
        print(f"Logging to temporary file: '{log_filename}'", file=sys.stderr)
        try:
            file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5)
        except OSError as e_tmp:
            print(f"File logging disabled: {e_tmp}", file=sys.stderr)
    if file_handler:
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(log_file_level)

    # Console Handler
    console_handler = None
    if logging_config.get("log_to_console", True):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s"))
        console_handler.setLevel(getattr(logging, console_level_str, logging.WARNING))

    # Optional Separate Error Log File
    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        try:
            error_file_handler = _rotating_handler("error.log", 1 * 1024 * 1024, 3)
            error_file_handler.setFormatter(file_formatter)
            error_file_handler.setLevel(logging.ERROR)
        except OSError as e_efh:
            print(f"Error setting up separate error log 'error.log': {e_efh}.", file=sys.stderr)

    root_logger = logging.getLogger()
    root_logger.handlers = []

    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)
    root_logger.setLevel(log_file_level)

    # Action trace logger
    ACTION_LOGGER.propagate = False
    ACTION_LOGGER.setLevel(logging.DEBUG)
    ACTION_LOGGER.handlers = []
    ACTION_LOGGER.disabled = False

    if os.environ.get(ACTION_TRACE_ENV, "").lower() in {"1", "true", "yes"}:
        try:
            trace_handler = _rotating_handler("actiontrace.log", 1 * 1024 * 1024, 3)
            trace_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            ACTION_LOGGER.addHandler(trace_handler)
            logging.info("Action tracing enabled, logging to 'actiontrace.log'.")
        except OSError as e_trace:
            logging.error(f"Failed to set up action trace logging: {e_trace}", exc_info=True)
            ACTION_LOGGER.disabled = True
    else:
        ACTION_LOGGER.addHandler(logging.NullHandler())
        ACTION_LOGGER.disabled = True
        logging.debug("Action tracing is disabled.")

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info(f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}.")
    if console_handler:
        logging.info(f"Console logging to stderr at level: {logging.getLevelName(console_handler.level)}.")
