"""
Logging configuration for fwextract.

Provides colored console output and optional rotating file logging.
Inside a disassembler host the console handler ends up in the host's
scripting log window.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    BOLD = "\033[1m"
    DIM = "\033[2m"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.DIM + Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def __init__(self, fmt: str = None, datefmt: str = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if self.use_colors:
            # copy so the file handler sees the plain record
            record = logging.makeLogRecord(record.__dict__)
            color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
            record.levelname = f"{color}{record.levelname}{Colors.RESET}"
            record.name = f"{Colors.CYAN}{record.name}{Colors.RESET}"
        return super().format(record)


class CommandLogAdapter(logging.LoggerAdapter):
    """Logger adapter that prefixes messages with the command and address."""

    def process(self, msg, kwargs):
        command = self.extra.get("command", "N/A")
        address = self.extra.get("address")
        where = f"0x{address:X}" if isinstance(address, int) else "?"
        return f"[{command}] [{where}] {msg}", kwargs


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 1024 * 1024,  # 1MB
    backup_count: int = 3,
    use_colors: bool = True,
) -> logging.Logger:
    """
    Configure logging for fwextract.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        max_bytes: Max size per log file before rotation
        backup_count: Number of backup files to keep
        use_colors: Enable colored console output

    Returns:
        Configured package logger
    """
    logger = logging.getLogger("fwextract")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_format = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    console_handler.setFormatter(ColoredFormatter(console_format, use_colors=use_colors))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count)
        file_handler.setLevel(logging.DEBUG)
        file_format = (
            "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
        )
        file_handler.setFormatter(logging.Formatter(file_format))
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized - Level: {level}, File: {log_file or 'none'}")

    return logger


def get_logger(name: str = None) -> logging.Logger:
    """Get a logger instance for a module."""
    if name:
        if name.startswith("fwextract"):
            return logging.getLogger(name)
        return logging.getLogger(f"fwextract.{name}")
    return logging.getLogger("fwextract")


def get_command_logger(command: str, address: int) -> CommandLogAdapter:
    """Get a logger adapter for a single command invocation."""
    logger = get_logger("command")
    return CommandLogAdapter(logger, {"command": command, "address": address})
