"""Logging for the animation policy engine.

Library modules only call get_logger(__name__) and log; nothing is printed
unless an application (the CLI, or a host service) calls setup_logging().
Collector fallbacks and resolver adjustments log at DEBUG, tier changes on
refresh at INFO.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "animation_policy"

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Attach rich terminal output (and optionally a log file) to the package logger.

    Calling it again replaces the handlers from the previous call, so a
    long-lived process can switch verbosity without duplicating output.

    Args:
        verbose: DEBUG level, with source paths and locals in tracebacks
        quiet: ERROR level only; wins over verbose
        log_file: Also append plain-text records to this file

    Returns:
        The configured ``animation_policy`` logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Signal reprs contain brackets, so rich markup stays off
    terminal = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_path=verbose,
    )
    terminal.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(terminal)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``animation_policy`` namespace.

    ``get_logger(__name__)`` inside the package returns the module logger
    unchanged; any other name is nested below the package logger.
    """
    if not name:
        return logging.getLogger(LOGGER_NAME)
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
