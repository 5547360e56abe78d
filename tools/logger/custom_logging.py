"""
Custom Logging

Thin facade over the standard logging module used by every server component.
All log lines go to stderr and to a rotating server.log next to this file.
"""

import functools
import logging
import os
import re
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "uno_server"
LOG_FILE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "server.log")
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 3

# Patterns scrubbed from every message before it is written
_SENSITIVE_PATTERNS = [
    (re.compile(r"(token|password|secret|api[_-]?key)(['\"]?\s*[:=]\s*['\"]?)([^'\",\s}]+)", re.IGNORECASE), r"\1\2***"),
    (re.compile(r"Bearer\s+[A-Za-z0-9\-_.=]+"), "Bearer ***"),
]

_logger = None


def _get_logger() -> logging.Logger:
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if not logger.handlers:
        formatter = logging.Formatter("[%(asctime)s] %(levelname)s - %(message)s")

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        try:
            file_handler = RotatingFileHandler(
                LOG_FILE_PATH, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            # Read-only deployments still get stderr output
            logger.warning(f"server.log unavailable: {e}")

    _logger = logger
    return logger


def sanitize_log_message(message) -> str:
    """Mask credentials and tokens before they reach a log sink."""
    text = str(message)
    for pattern, replacement in _SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def custom_log(message, level: str = "INFO", isOn: bool = True) -> None:
    """
    Log a message through the shared server logger.

    Args:
        message: Text (or any object) to log
        level: Standard level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        isOn: Per-module switch; nothing is written when False
    """
    if not isOn:
        return
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    _get_logger().log(log_level, sanitize_log_message(message))


def log_function_call(func):
    """Decorator logging entry and failure of the wrapped callable."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        custom_log(f"Entering {func.__qualname__}", level="DEBUG")
        try:
            return func(*args, **kwargs)
        except Exception as e:
            custom_log(f"{func.__qualname__} raised {type(e).__name__}: {e}", level="ERROR")
            raise
    return wrapper
