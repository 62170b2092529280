"""
Logging setup for applications that want tracker output on the console.

The package itself only creates module loggers under ``leaktrack``;
nothing is printed until an application configures handlers.
"""

import logging
import sys
import threading
from typing import Optional, TextIO

from .config import env_log_level

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_HANDLER_NAME = "leaktrack-console"
PACKAGE_LOGGER_NAME = "leaktrack"


def _build_console_handler(stream: Optional[TextIO]) -> logging.Handler:
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setFormatter(formatter)
    return console_handler


def setup_logging(level: Optional[int] = None, stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach a console handler to the package logger once and set its level."""

    with _config_lock:
        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        if level is None:
            level = env_log_level("LEAKTRACK_LOG_LEVEL", logging.INFO)
        package_logger.setLevel(level)

        if any(handler.get_name() == _HANDLER_NAME for handler in package_logger.handlers):
            return package_logger

        package_logger.addHandler(_build_console_handler(stream))
        return package_logger
