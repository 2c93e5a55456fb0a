"""Logging for CLI runs: rich console output plus an optional debug log file."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.logging import RichHandler

from rolerelay.cli.console import error_console

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

QUIET_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")


def setup_logging(
    log_file: str | None = None,
    verbose: bool = False,
    logger_name: str = "rolerelay",
) -> logging.Logger:
    """
    Route rolerelay logs to stderr through rich and, optionally, to a file.

    Worker steps and halts are logged at INFO, assembled prompts and token
    counts at DEBUG. The file always receives DEBUG.

    Args:
        log_file: Path of the debug log (parent directories are created)
        verbose: Show DEBUG records on the console
        logger_name: Logger whose handlers are replaced

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(console=error_console, rich_tracebacks=True)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
