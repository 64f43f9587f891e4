"""
Logging Utilities
=================

Structured logging to file + console for the sraprep command-line tools.
Console output goes to stderr so warnings and fatal errors land on the
error stream.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from logging.handlers import RotatingFileHandler
from datetime import datetime


def setup_logging(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    log_to_console: bool = True,
    log_to_file: bool = True,
    log_dir: Path = Path("logs"),
    max_bytes: int = 10_000_000,  # 10MB
    backup_count: int = 5
):
    """
    Setup logging configuration with file rotation and console output.

    Args:
        log_file: Path to log file (auto-generated under log_dir if None)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_console: Whether to log to console
        log_to_file: Whether to log to file
        log_dir: Directory for auto-generated log files
        max_bytes: Maximum log file size before rotation
        backup_count: Number of backup log files to keep

    Returns:
        Logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_to_file:
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = Path(log_dir) / f"sraprep_{timestamp}.log"

        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")

    return logger


def log_banner(logger: logging.Logger, title: str, width: int = 70):
    """Log a section header framed by '=' rules."""
    logger.info("=" * width)
    logger.info(title)
    logger.info("=" * width)
