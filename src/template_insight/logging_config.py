"""
Logging for Template Insight.

Everything logs under the ``template_insight`` logger through a rich handler
on stderr, so warnings about skipped templates never end up inside a JSON
report written to stdout.
"""

import logging
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "template_insight"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_for(verbose: bool = False, quiet: bool = False) -> int:
    """Log level for the CLI flags; quiet wins over verbose."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Send template_insight records to stderr and, optionally, to a file.

    Verbose runs log per-template timings at DEBUG and show source paths
    and locals in tracebacks.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Only log errors
        log_file: Optional file that receives a plain-text copy of the log

    Returns:
        The package logger
    """
    level = level_for(verbose, quiet)

    handlers: List[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger nested under ``template_insight``.

    Modules call ``get_logger(__name__)``; a bare name such as ``"batch"``
    is prefixed, and None returns the package logger itself.
    """
    if name is None or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
