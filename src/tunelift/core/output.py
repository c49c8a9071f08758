"""
Unified output system using Loguru.
Every user-facing line goes to the console and to the daily log file.
"""

import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

FILE_FORMAT = "[{time:YYYY-MM-DD HH:mm:ss}] {level: <8} {message}"


def setup_loguru(
    log_dir: Path,
    level: str = "INFO",
    retention_days: int = 14,
    console_output: bool = False,
) -> None:
    """
    Configure loguru for daily log files.

    Args:
        log_dir: Folder holding the log-YYYY-MM-DD.log files
        level: Minimum level for file logging (DEBUG, INFO, WARNING, ERROR)
        retention_days: Log files older than this are removed
        console_output: Also mirror records to stderr
    """
    # Remove default handler
    logger.remove()

    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_dir / "log-{time:YYYY-MM-DD}.log",
        rotation="00:00",  # New file at midnight
        retention=f"{retention_days} days",
        level=level,
        format=FILE_FORMAT,
        encoding="utf-8",
        enqueue=False,  # Synchronous writes
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.debug(f"Loguru initialized: {log_dir} (level={level}, retention={retention_days} days)")


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to the log file AND prints to the console.

    Use this instead of print() for user-facing progress messages.

    Args:
        message: User-facing message
        level: Log level (debug, info, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    if level != "debug":
        print(f"[{datetime.now():%H:%M:%S}] {message}")
