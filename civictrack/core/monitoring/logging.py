# Standard library imports
from collections.abc import MutableMapping
from functools import lru_cache
import logging
import sys
from typing import Any

# Local application imports
from civictrack.settings import settings


class CustomFormatter(logging.Formatter):
    """
    Custom formatter with color support for console output.
    """

    # ANSI color codes
    GREY = "\x1b[38;20m"
    YELLOW = "\x1b[33;20m"
    RED = "\x1b[31;20m"
    BOLD_RED = "\x1b[31;1m"
    RESET = "\x1b[0m"

    CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    FORMATS = {
        logging.DEBUG: GREY + CONSOLE_FORMAT + RESET,
        logging.INFO: GREY + CONSOLE_FORMAT + RESET,
        logging.WARNING: YELLOW + CONSOLE_FORMAT + RESET,
        logging.ERROR: RED + CONSOLE_FORMAT + RESET,
        logging.CRITICAL: BOLD_RED + CONSOLE_FORMAT + RESET,
    }

    def format(self, record: logging.LogRecord) -> str:
        log_fmt = self.FORMATS.get(record.levelno)
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


@lru_cache
def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """
    Get a logger with the given name and configured handlers.
    Cached so the same logger name never gets a second handler.

    Console output in every environment; in production the Sentry
    LoggingIntegration (see ``core/monitoring/sentry.py``) also picks up
    warnings and errors.

    Args:
        name: The name of the logger
        level: Optional logging level override

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    if level is None:
        level = logging.DEBUG if settings.DEBUG_MODE else logging.INFO

    logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(CustomFormatter())
    logger.addHandler(console_handler)

    return logger


class LoggerAdapter(logging.LoggerAdapter[logging.Logger]):
    """
    Logger adapter that appends ``key=value`` context to every message.
    Context entries whose value is None are left out.
    """

    def __init__(self, logger: logging.Logger, extra: dict[str, Any] | None = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        context = {k: v for k, v in (self.extra or {}).items() if v is not None}
        if context:
            context_str = " ".join(f"{k}={v}" for k, v in context.items())
            msg = f"{msg} [{context_str}]"
        return msg, kwargs


def get_contextual_logger(name: str, **context: Any) -> LoggerAdapter:
    """
    Get a logger with additional context variables that will be included
    in all log messages, e.g. ``issue_id`` and ``user_id``.

    Args:
        name: The name of the logger
        **context: Additional context parameters to include in logs

    Returns:
        A configured logger adapter
    """
    logger = get_logger(name)
    return LoggerAdapter(logger, context)
