"""Structured logging helpers: thread-local context fields and call tracing."""

import functools
import logging
import threading
from typing import Any, Callable, Dict, Optional

_thread_local = threading.local()


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields currently attached to log records."""
    return dict(getattr(_thread_local, "context", {}))


class LogContext:
    """
    Context manager that attaches structured fields to log records.

    Fields live in thread-local storage and are copied onto every record
    passing through a handler configured by configure_logging().

    Example:
        with LogContext(client_id="c-1", month="2024-05"):
            logger.info("Aggregating monthly metrics")
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._saved: Optional[Dict[str, Any]] = None

    def __enter__(self) -> "LogContext":
        if not hasattr(_thread_local, "context"):
            _thread_local.context = {}
        self._saved = _thread_local.context.copy()
        _thread_local.context.update(self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _thread_local.context = self._saved if self._saved is not None else {}


class ContextFilter(logging.Filter):
    """Logging filter that copies LogContext fields onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in getattr(_thread_local, "context", {}).items():
            setattr(record, key, value)
        return True


def log_function_call(
    func: Optional[Callable] = None, *, include_args: bool = False, level: str = "DEBUG"
) -> Callable:
    """
    Decorator to log function entry and exit.

    Exceptions are logged with traceback and re-raised.

    Args:
        func: Function to decorate (when used without arguments)
        include_args: Whether to include function arguments in logs
        level: Log level to use (DEBUG, INFO, WARNING, ERROR)

    Example:
        @log_function_call
        def get_week_dates(reference):
            ...

        @log_function_call(include_args=True, level="INFO")
        def calculate_monthly_client_metrics(bookings, projects, clients, month):
            ...
    """

    def decorator(f: Callable) -> Callable:
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(f.__module__)
            log_level = getattr(logging, level.upper())

            if include_args:
                signature = ", ".join(
                    [repr(a) for a in args] + [f"{k}={v!r}" for k, v in kwargs.items()]
                )
                logger.log(log_level, f"Entering {f.__name__} with args: {signature}")
            else:
                logger.log(log_level, f"Entering {f.__name__}")

            try:
                result = f(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Exception in {f.__name__}: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

            logger.log(log_level, f"Exiting {f.__name__}")
            return result

        return wrapper

    if func is None:
        return decorator
    return decorator(func)
