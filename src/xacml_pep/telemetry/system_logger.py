"""System logger for operational events.

This module provides a singleton system logger for operational events of the
client (PDP calls that failed, insecure TLS in use, configuration problems).

Logging strategy:
- Console (stderr): INFO and above
- File (JSONL, optional): WARNING and above only

The file handler is configured separately via configure_system_logger_file()
once a log_file is known from configuration.
"""

from __future__ import annotations

__all__ = [
    "configure_logging",
    "configure_system_logger_file",
    "get_system_logger",
]

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from xacml_pep.constants import APP_NAME
from xacml_pep.utils.file_helpers import resolve_path
from xacml_pep.utils.logging.formatters import ConsoleFormatter, ISO8601Formatter

if TYPE_CHECKING:
    from xacml_pep.config import LoggingConfig

# Module-level singleton logger
_system_logger: logging.Logger | None = None
_file_handler: logging.FileHandler | None = None


def get_system_logger() -> logging.Logger:
    """Return the process-wide xacml-pep system logger.

    The first call attaches a stderr handler; a JSONL file handler can be
    attached afterwards with configure_system_logger_file().

    Returns:
        logging.Logger: The "xacml-pep.system" logger.

    Example:
        >>> logger = get_system_logger()
        >>> logger.warning({"event": "pdp_call_failed", "message": "..."})
    """
    global _system_logger

    if _system_logger is not None:
        return _system_logger

    _system_logger = logging.getLogger(f"{APP_NAME}.system")
    _system_logger.setLevel(logging.INFO)
    _system_logger.propagate = False  # Don't propagate to root logger

    for handler in _system_logger.handlers:
        handler.close()
    _system_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.INFO)
    stderr_handler.setFormatter(ConsoleFormatter())
    _system_logger.addHandler(stderr_handler)

    return _system_logger


def configure_system_logger_file(log_path: Path) -> logging.FileHandler:
    """Add a JSONL file handler (WARNING and above) to the system logger.

    Calling it again with the same path is a no-op; a different path
    replaces the previous file handler.

    Args:
        log_path: Path to the log file.

    Returns:
        The file handler in use.
    """
    global _file_handler

    logger = get_system_logger()
    if _file_handler is not None:
        if Path(_file_handler.baseFilename) == log_path.resolve():
            return _file_handler
        logger.removeHandler(_file_handler)
        _file_handler.close()

    log_path.parent.mkdir(parents=True, exist_ok=True)

    _file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    _file_handler.setLevel(logging.WARNING)  # File: only WARNING, ERROR, CRITICAL
    _file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(_file_handler)
    return _file_handler


def configure_logging(config: "LoggingConfig") -> None:
    """Apply a LoggingConfig to the system and wire loggers.

    INFO keeps wire logging off. DEBUG turns on the wire logger, which writes
    JSONL to stderr (and to log_file when set).

    Args:
        config: Logging section of the client configuration.
    """
    from xacml_pep.telemetry.wire_logger import get_wire_logger

    level = logging.DEBUG if config.log_level == "DEBUG" else logging.INFO
    system_logger = get_system_logger()
    system_logger.setLevel(level)
    logging.getLogger("xacml_pep").setLevel(level)

    file_handler = None
    if config.log_file:
        file_handler = configure_system_logger_file(resolve_path(config.log_file))

    wire_logger = get_wire_logger()
    for handler in list(wire_logger.handlers):
        wire_logger.removeHandler(handler)
        handler.close()
    if level == logging.DEBUG:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(ISO8601Formatter())
        wire_logger.addHandler(stderr_handler)
        if file_handler is not None:
            wire_handler = logging.FileHandler(file_handler.baseFilename, mode="a", encoding="utf-8")
            wire_handler.setFormatter(ISO8601Formatter())
            wire_logger.addHandler(wire_handler)
        wire_logger.setLevel(logging.DEBUG)
        wire_logger.propagate = False
    else:
        wire_logger.setLevel(logging.INFO)
