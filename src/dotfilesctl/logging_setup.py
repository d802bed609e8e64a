"""Loguru logging setup for dotfilesctl.

All modules log through ``from loguru import logger``; this module only
decides where those records go.

Usage:
    from dotfilesctl.logging_setup import setup_logging

    # Once, at CLI startup
    setup_logging(log_level="INFO")

Features:
    - Colored console output on stderr
    - Optional file output with rotation (10 MB) and retention (7 days)
"""

import sys
from pathlib import Path

from loguru import logger

from .dirs import get_logs_dir

# Default console format with colors
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)

# Simple format without colors (for file output)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | "
    "{level: <8} | "
    "{name}:{function}:{line} | "
    "{message}"
)


def setup_logging(
    log_level: str | None = None,
    console: bool = True,
    file: bool = False,
    log_dir: Path | None = None,
    diagnose_console: bool = False,
) -> None:
    """Configure logging with console and file handlers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to INFO.
        console: Enable console (stderr) output.
        file: Enable file output.
        log_dir: Directory for log files (default: auto-detect using dirs.py).
        diagnose_console: Show variable values in console tracebacks.

    Example:
        >>> setup_logging()  # Console only, INFO
        >>> setup_logging(log_level="DEBUG", file=True)
    """
    # Remove default handler
    logger.remove()

    if log_level is None:
        log_level = "INFO"

    if console:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=log_level,
            colorize=True,
            backtrace=False,
            diagnose=diagnose_console,
        )

    if file:
        if log_dir is None:
            log_dir = get_logs_dir()
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(log_dir / "dotfilesctl.log"),
            level=log_level,
            format=FILE_FORMAT,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            backtrace=True,
            diagnose=False,
        )
