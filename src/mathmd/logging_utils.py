"""Logging setup for the mathmd command-line tool.

Library modules only create ``logging.getLogger(__name__)`` loggers under the
``mathmd`` package logger and never attach handlers. The entry point calls
:func:`configure_logging`, which gives the package logger the requested level
and keeps other libraries' loggers at ``WARNING`` unless tracing is on, so
``--log-level DEBUG`` shows sanitizer decisions without third-party noise.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "mathmd"
THIRD_PARTY_LEVEL = logging.WARNING

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str) -> int:
    """Map a numeric level or level name to a logging level, defaulting to INFO."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Attach console (and optional file) handlers for the command-line tool.

    Parameters
    ----------
    log_level : int | str
        Level for mathmd's own loggers, as a number or a name (e.g. "INFO").
    log_file : str, optional
        Path of a file that receives a copy of every record.
    trace_mode : bool, default False
        Emit timestamps and logger names, and let other libraries log at
        ``log_level`` as well.

    Returns
    -------
    logging.Logger
        The ``mathmd`` package logger.

    """
    resolved_level = resolve_log_level(log_level)

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(resolved_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level if trace_mode else max(resolved_level, THIRD_PARTY_LEVEL))
    root_logger.handlers.clear()

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)

    # Handlers live on the root so propagated package records reach them
    # regardless of the root logger's own level.
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            package_logger.info("Logging to file: %s", log_file)

    return package_logger
