"""
Logging utilities for guia-harness.
"""
import sys
from pathlib import Path
from typing import Optional
from loguru import logger as loguru_logger


DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Current stderr sink, replaced by LoggerContext
_console = {"id": None, "level": "INFO", "format": DEFAULT_FORMAT}


def _add_console_sink(level: str) -> None:
    if _console["id"] is not None:
        loguru_logger.remove(_console["id"])
    _console["id"] = loguru_logger.add(
        sys.stderr,
        format=_console["format"],
        level=level,
        colorize=True
    )
    _console["level"] = level


def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    format_string: Optional[str] = None
):
    """
    Setup logger with console and optional file output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        rotation: Log rotation size/time
        retention: Log retention period
        format_string: Custom format string

    Returns:
        Configured loguru logger
    """
    # Remove default handler
    loguru_logger.remove()
    loguru_logger.configure(extra={"name": "guia_harness"})

    _console["id"] = None
    _console["format"] = format_string or DEFAULT_FORMAT
    _add_console_sink(log_level)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        loguru_logger.add(
            log_file,
            format=_console["format"],
            level=log_level,
            rotation=rotation,
            retention=retention,
            compression="zip"
        )

    return loguru_logger


def get_logger(name: str = "guia_harness"):
    """
    Get logger instance bound to a component name.

    Args:
        name: Component name shown in log lines

    Returns:
        Bound loguru logger
    """
    return loguru_logger.bind(name=name)


class LoggerContext:
    """Context manager for temporary console log level changes."""

    def __init__(self, level: str):
        """
        Initialize context.

        Args:
            level: Temporary log level
        """
        self.level = level
        self.original_level: Optional[str] = None

    def __enter__(self):
        self.original_level = _console["level"]
        _add_console_sink(self.level)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.original_level is not None:
            _add_console_sink(self.original_level)


logger = setup_logger()
