"""Diagnostic trace listener.

While a run is in progress with `--listen-trace`, log records emitted
anywhere in the process (the host application, libraries under test) are
forwarded to the test log.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from .log import LOGGER_NAMESPACE, TestLog


class TraceListener(logging.Handler):
    """Root logger handler that echoes records into a TestLog.

    Records from the runner's own loggers, and from the logger the TestLog
    writes to, are not echoed. A record logged while the listener is
    already forwarding on the same thread is dropped.
    """

    def __init__(self, log: TestLog, level: int = logging.DEBUG):
        super().__init__(level)
        self.log = log
        self._local = threading.local()
        self.setFormatter(logging.Formatter("[trace] %(name)s: %(message)s"))

    def _is_own_output(self, name: str) -> bool:
        sink = getattr(self.log, "sink", None)
        prefixes = [LOGGER_NAMESPACE]
        if isinstance(sink, logging.Logger):
            prefixes.append(sink.name)
        return any(name == prefix or name.startswith(f"{prefix}.") for prefix in prefixes)

    def filter(self, record: logging.LogRecord) -> bool:
        # Runner output already reaches the test log
        if self._is_own_output(record.name):
            return False
        return super().filter(record)

    def handle(self, record: logging.LogRecord) -> bool:
        if getattr(self._local, "emitting", False):
            return False
        self._local.emitting = True
        try:
            return super().handle(record)
        finally:
            self._local.emitting = False

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                self.log.err(message)
            elif record.levelno >= logging.WARNING:
                self.log.warn(message)
            else:
                self.log.print(message)
        except Exception:
            self.handleError(record)


@contextmanager
def listen_trace(log: TestLog, enabled: bool = True) -> Iterator[Optional[TraceListener]]:
    """Install a TraceListener on the root logger for the duration of the block.

    The listener is removed on every exit path. Yields None when disabled.
    """
    if not enabled:
        yield None
        return

    root = logging.getLogger()
    listener = TraceListener(log)
    root.addHandler(listener)
    try:
        yield listener
    finally:
        root.removeHandler(listener)
        listener.close()
