"""
Logging system for the potions balancing tool.
Provides structured, human-readable logs with file and console output.
"""

import copy
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

# ANSI color codes for terminal output
class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    BOLD = "\033[1m"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record):
        # Colour a copy so the file handler still sees plain text
        record = copy.copy(record)
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"
        record.msg = f"{color}{record.msg}{Colors.RESET}"
        return super().format(record)


class LazyFileHandler(logging.FileHandler):
    """File handler that creates its folder and file on the first record."""

    def __init__(self, filename, encoding: str = "utf-8"):
        super().__init__(filename, encoding=encoding, delay=True)

    def _open(self):
        Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
        return super()._open()


class BalanceLogger:
    """
    Central logging system for the balancing tool.

    Features:
    - Console output with colors
    - Daily log files in log_dir, created on the first record
    - Separate log files for per-record changes and errors
    - Structured logging for easy parsing
    """

    _instance: Optional['BalanceLogger'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, log_dir: str = "logs", log_level: str = "INFO"):
        if BalanceLogger._initialized:
            return

        self.log_dir = Path(log_dir)

        self.main_logger = self._create_logger("potions", log_level)
        self.record_logger = self._create_logger("potions.records", log_level, "records", console=False)
        self.error_logger = self._create_logger("potions.errors", "ERROR", "errors", console=False)

        BalanceLogger._initialized = True

    def _create_logger(self, name: str, level: str, file_prefix: str = None,
                       console: bool = True) -> logging.Logger:
        """Create a configured logger instance."""
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, level.upper()))
        logger.handlers.clear()
        logger.propagate = False

        if console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(ColoredFormatter(
                "%(asctime)s | %(levelname)s | %(message)s",
                datefmt="%H:%M:%S"
            ))
            logger.addHandler(console_handler)

        # File handler (plain text, no colors)
        prefix = file_prefix or "potions"
        log_file = self.log_dir / f"{prefix}_{datetime.now().strftime('%Y%m%d')}.log"

        file_handler = LazyFileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(file_handler)

        return logger

    def info(self, msg: str, *args, **kwargs):
        """Log info message."""
        self.main_logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        """Log debug message."""
        self.main_logger.debug(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        """Log warning message."""
        self.main_logger.warning(msg, *args, **kwargs)

    def failure(self, msg: str, *args, **kwargs):
        """
        Log a failed operation.

        Goes to the errors log; the console only shows it at DEBUG, since the
        CLI prints the failure itself.
        """
        self.main_logger.debug(msg, *args, **kwargs)
        self.error_logger.error(msg, *args, **kwargs)

    def potion(self, action: str, identifier: str, **kwargs):
        """
        Log a per-potion event with structured format.

        Args:
            action: RESCALED, UNTOUCHED
            identifier: Normalized potion identifier
            **kwargs: Changed fields or classification details
        """
        parts = [f"[{action}]", f"id={identifier}"]
        for key, value in kwargs.items():
            parts.append(f"{key}={value}")

        msg = " | ".join(parts)
        self.record_logger.info(msg)
        self.main_logger.debug(msg)

    def content(self, action: str, name: str, **kwargs):
        """
        Log a per-file load event.

        Args:
            action: LOADED, SKIPPED_SELF, NO_POTIONS
            name: Content file name
            **kwargs: Additional context (potions, mtime, ...)
        """
        parts = [f"[{action}]", name]
        for key, value in kwargs.items():
            parts.append(f"{key}={value}")

        msg = " | ".join(parts)
        if action == "SKIPPED_SELF":
            self.main_logger.warning(msg)
        else:
            self.main_logger.info(msg)


# Global logger instance
_logger: Optional[BalanceLogger] = None


def get_logger(log_dir: str = "logs", log_level: str = "INFO") -> BalanceLogger:
    """Get or create the global logger instance."""
    global _logger
    if _logger is None:
        _logger = BalanceLogger(log_dir, log_level)
    return _logger


def setup_logger(log_dir: str = "logs", log_level: str = "INFO") -> BalanceLogger:
    """Initialize the logger with custom settings."""
    global _logger
    BalanceLogger._initialized = False
    BalanceLogger._instance = None
    _logger = BalanceLogger(log_dir, log_level)
    return _logger
