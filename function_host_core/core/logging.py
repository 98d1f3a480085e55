"""
Structured logging utilities.
"""
import time
import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator

class Logger:
    """
    A simple structured logger that outputs JSON Lines.
    """
    def __init__(self, name: str, level: str = 'INFO') -> None:
        """
        Initializes the logger.

        Args:
            name: The name of the logger.
            level: The logging level.
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level.upper())
        # Avoid adding duplicate handlers if this class is instantiated multiple times
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter('%(message)s'))
            self._logger.addHandler(handler)

    def _log(self, level: str, msg: str, **fields: Any) -> None:
        log_record = {
            'level': level,
            'message': msg,
            'timestamp': time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime()),
            **fields
        }
        self._logger.log(logging.getLevelName(level.upper()), json.dumps(log_record, ensure_ascii=False, default=str))

    def info(self, msg: str, **fields: Any) -> None:
        """Logs a message with INFO level."""
        self._log('info', msg, **fields)

    def error(self, msg: str, **fields: Any) -> None:
        """Logs a message with ERROR level."""
        self._log('error', msg, **fields)

    @contextmanager
    def step(self, title: str, **fields: Any) -> Iterator[None]:
        """
        Times a unit of work and logs it once it finishes.

        Args:
            title: Name of the step, e.g. "FunctionRegistry.get(foo)".
            **fields: Extra fields attached to the record.
        """
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self.error(title, elapsed_ms=round(elapsed_ms, 3), error=type(e).__name__, **fields)
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000
        self.info(title, elapsed_ms=round(elapsed_ms, 3), **fields)
