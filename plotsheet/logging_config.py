"""
Logging setup for the plotting sheet.

Log records go to stderr so the fixes and readouts the command line prints
on stdout stay clean for piping.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "plotsheet"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# matplotlib warns once per missing font family, e.g. when Lato isn't installed
NOISY_LOGGERS = ("matplotlib.font_manager",)


def resolve_level(level: Union[int, str]) -> int:
    """Accept a level number or a name such as ``"debug"``."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return resolved


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    quiet_fonts: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the ``plotsheet`` logger.

    Calling it again replaces the handlers instead of adding more.

    Args:
        level: Level number or name
        log_file: Also write the log to this file, overwriting it
        quiet_fonts: Only let matplotlib's font lookup log errors

    Returns:
        The configured package logger
    """
    level = resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if quiet_fonts:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.ERROR)

    logger.debug("Logging at %s", logging.getLevelName(level))
    return logger
