"""
Logging configuration for PaperHome.

This module provides utilities for setting up logging across the
package with consistent formatting and levels.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Any, Optional, Union

# Default log format
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - " "[%(filename)s:%(lineno)d] - %(message)s"
)


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        result = super().format(record)

        # Reset levelname for other handlers
        record.levelname = levelname

        return result


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    colored: bool = True,
) -> logging.Logger:
    """Setup logging configuration for PaperHome.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file, in addition to the console
        format_string: Custom format string (uses DEFAULT_FORMAT if None)
        colored: Use colored output for console logging

    Returns:
        Configured root logger

    Example:
        >>> logger = setup_logging(level="DEBUG", log_file=Path("paperhome.log"))
        >>> logger.info("Application started")
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(numeric_level)

    if format_string is None:
        format_string = DEFAULT_FORMAT

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)

    console_formatter: Union[ColoredFormatter, logging.Formatter]
    if colored and sys.stderr.isatty():
        console_formatter = ColoredFormatter(format_string)
    else:
        console_formatter = logging.Formatter(format_string)

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
        root_logger.addHandler(file_handler)

    return root_logger


def configure_library_logging(quiet: bool = False) -> None:
    """Configure logging for third-party libraries.

    Args:
        quiet: If True, set libraries to WARNING level; else INFO
    """
    library_level = logging.WARNING if quiet else logging.INFO

    noisy_loggers = [
        "urllib3",
        "requests",
        "httpx",
        "httpcore",
        "openai",
        "charset_normalizer",
    ]

    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(library_level)


class PerformanceLogger:
    """Context manager for logging operation performance.

    Example:
        >>> with PerformanceLogger("National ranking", logger):
        ...     results = rank_national(query)
        # Output: "National ranking completed in 0.02s"
    """

    def __init__(
        self, operation: str, logger: Optional[logging.Logger] = None, level: str = "DEBUG"
    ):
        self.operation = operation
        self.logger = logger or logging.getLogger()
        self.level = getattr(logging, level.upper(), logging.DEBUG)
        self.start_time: Optional[float] = None
        self.elapsed: Optional[float] = None

    def __enter__(self) -> "PerformanceLogger":
        self.start_time = time.perf_counter()
        self.logger.log(self.level, f"{self.operation} started")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.start_time is None:
            return
        self.elapsed = time.perf_counter() - self.start_time
        if exc_type is None:
            self.logger.log(self.level, f"{self.operation} completed in {self.elapsed:.2f}s")
        else:
            self.logger.log(
                logging.ERROR, f"{self.operation} failed after {self.elapsed:.2f}s: {exc_val}"
            )
