"""
Logging setup for depmap.

Library modules only ever call get_logger(); handlers are installed by the
CLI through setup_logging(). Handlers hang off the "depmap" logger, not the
root logger, so embedding applications keep their own logging untouched.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "depmap"

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Install rich terminal logging (and optionally a log file) for depmap.

    Calling it again replaces the handlers from the previous call, so a
    process running several commands does not print each record twice.

    Args:
        verbose: DEBUG level, with source locations and locals in tracebacks
        quiet: ERROR level only; used whenever stdout carries JSON
        log_file: Optional file that receives the same records

    Returns:
        The "depmap" logger
    """
    level = _level(verbose, quiet)
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # stderr, so report and JSON output on stdout stay clean. File paths
    # routinely contain [brackets], hence no markup.
    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    )

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a logger inside the depmap namespace.

    Args:
        name: Usually __name__ (e.g. 'depmap.graph.builder'); names outside
              the package are prefixed with 'depmap.'

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)
