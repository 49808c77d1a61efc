"""Logging for the scenetest runner.

Module loggers come from `get_logger`. Test progress goes through a
`TestLog`, the sink wrapper handed to the reporter.
"""

import logging
import sys
import threading
from typing import Optional, Union

LOGGER_NAMESPACE = "scenetest"

# Global logger registry
_loggers: dict[str, logging.Logger] = {}
_lock = threading.Lock()


def get_logger(name: str, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Get or create a logger under the scenetest namespace.

    Args:
        name: Logger name (e.g., "runner" or a module's __name__).
        level: Level applied when the logger is first created.

    Returns:
        Configured logger instance.
    """
    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"

    with _lock:
        if name in _loggers:
            return _loggers[name]

        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Remove existing handlers to avoid duplicates
        logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(fmt="%(message)s"))
        logger.addHandler(console_handler)

        # Trace listeners sit on the root logger; runner output must not loop back
        logger.propagate = False

        _loggers[name] = logger
        return logger


def set_level(level: Union[int, str]) -> None:
    """Apply a level to every scenetest logger created so far."""
    if isinstance(level, str):
        level = level.upper()
    with _lock:
        for logger in _loggers.values():
            logger.setLevel(level)


class TestLog:
    """Sink wrapper the reporter writes formatted lines through."""

    __test__ = False

    def __init__(self, sink: Optional[logging.Logger] = None):
        self.sink = sink or get_logger("runner")

    @classmethod
    def wrap(cls, log: Union["TestLog", logging.Logger, None]) -> "TestLog":
        """Return `log` as a TestLog, creating the default one for None."""
        if isinstance(log, TestLog):
            return log
        return cls(log)

    def print(self, message: str) -> None:
        self.sink.info(message)

    def warn(self, message: str) -> None:
        self.sink.warning(message)

    def err(self, message: str) -> None:
        self.sink.error(message)
