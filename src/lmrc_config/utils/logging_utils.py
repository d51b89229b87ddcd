"""
Logging helpers shared by the stores and the CLI.

Context values travel as ``extra_fields`` on the log record, so the JSON
formatter emits them as keys, the coloured formatter prints them under the
message and ``SensitiveDataFilter`` can mask them.
"""

import logging
import time
from collections.abc import Callable
from functools import wraps
from typing import Any
from typing import TypeVar

from typing_extensions import ParamSpec


T = TypeVar('T')
P = ParamSpec('P')

def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)

def log_execution(level: str = 'DEBUG') -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Log entry, duration and failure of the decorated call.

    Failures are logged at ERROR and re-raised unchanged.
    """
    log_level = logging.getLevelName(level)

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        logger = logging.getLogger(func.__module__)

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            logger.log(log_level, f"Calling {func.__qualname__}")
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"{func.__qualname__} failed: {e}",
                    extra={'extra_fields': {'duration_ms': _elapsed_ms(started), 'error': type(e).__name__}}
                )
                raise
            logger.log(
                log_level,
                f"{func.__qualname__} completed",
                extra={'extra_fields': {'duration_ms': _elapsed_ms(started)}}
            )
            return result

        return wrapper
    return decorator

def _elapsed_ms(started: float) -> int:
    return round((time.perf_counter() - started) * 1000)

class LoggerMixin:
    """Per-instance logger with sticky context fields.

    Context set with ``set_log_context`` (e.g. the profile path or database
    file) is attached to every record the instance logs, merged with the
    keyword fields of the individual call.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger(self.__class__.__module__)
        self._log_context: dict[str, Any] = {}

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_log_context(self, **kwargs: Any) -> None:
        self._log_context.update(kwargs)

    def clear_log_context(self) -> None:
        self._log_context.clear()

    def _log(self, level: int, msg: str, exc_info: bool = False, **fields: Any) -> None:
        context = {**self._log_context, **fields}
        extra = {'extra_fields': context} if context else None
        self._logger.log(level, msg, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, **fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._log(logging.INFO, msg, **fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self._log(logging.WARNING, msg, **fields)

    def error(self, msg: str, exc_info: bool = False, **fields: Any) -> None:
        self._log(logging.ERROR, msg, exc_info=exc_info, **fields)
