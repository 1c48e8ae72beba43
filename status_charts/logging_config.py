"""
Logging setup for the status_charts package.

Everything the package logs goes through the ``status_charts`` logger, which
writes to stdout and optionally to a log file. Chart rendering pulls in
matplotlib and Pillow, whose own loggers are held at WARNING so font lookups
and image plugin probing do not flood verbose runs.
"""

import logging
import os
import sys
from typing import Dict, Optional


PACKAGE_LOGGER = "status_charts"
LOG_LEVEL_ENV = "STATUS_CHARTS_LOG_LEVEL"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
BRIEF_FORMAT = "%(levelname)s: %(message)s"

# -v / default / -q / --silent
VERBOSITY_LEVELS: Dict[int, int] = {
    1: logging.DEBUG,
    0: logging.INFO,
    -1: logging.WARNING,
    -2: logging.ERROR,
}

NOISY_LIBRARIES = ("matplotlib", "PIL")


def level_for(verbosity: int) -> int:
    """Logging level for a CLI verbosity, clamped to the known range."""
    clamped = max(min(VERBOSITY_LEVELS), min(max(VERBOSITY_LEVELS), verbosity))
    return VERBOSITY_LEVELS[clamped]


def _level_from_env() -> Optional[int]:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        return getattr(logging, name)
    return None


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Configure the package logger.

    Safe to call repeatedly; each call replaces the handlers installed by the
    previous one.

    Args:
        verbosity: 1 for DEBUG, 0 for INFO, -1 for WARNING, -2 for ERROR.
        log_file: Also append everything (DEBUG and up) to this file.
        format_string: Console format; defaults to a timestamped format, or a
            brief one when verbosity is negative.

    The ``STATUS_CHARTS_LOG_LEVEL`` environment variable, when set to a level
    name, takes precedence over ``verbosity``.

    Example:
        >>> setup_logging(verbosity=1, log_file="panels.log")
    """
    env_level = _level_from_env()
    level = env_level if env_level is not None else level_for(verbosity)
    if format_string is None:
        format_string = DETAILED_FORMAT if verbosity >= 0 else BRIEF_FORMAT

    for name in NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(format_string))
    logger.addHandler(console)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a")
        except OSError as e:
            logger.warning(f"Cannot write log file {log_file}: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
            logger.addHandler(file_handler)
            logger.info(f"Logging to file: {log_file}")

    logger.debug(f"Log level set to {logging.getLevelName(level)}")


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``status_charts`` hierarchy (prefixes bare names)."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
