"""Colored console logging for the FoodChat CLI."""

import logging
from datetime import datetime


class ColoredFormatter(logging.Formatter):
    """Colored formatter for logging."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord):
        """Format a log record."""
        color = self.COLORS.get(record.levelname, "")
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        log_color = f"{color}{record.levelname}{self.RESET}"
        name_color = f"\033[34m{record.name}{self.RESET}"  # Blue
        time_color = f"\033[90m({timestamp}){self.RESET}"  # Gray
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{log_color} [{name_color}] {time_color} {message}"


def setup_logging(level: str | int = logging.WARNING):
    """Install the colored handler on the root logger.

    The chat transcript is the primary output of the CLI, so the default level
    keeps library logging quiet unless asked for.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ColoredFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)

    logging.getLogger("asyncio").setLevel(logging.WARNING)
