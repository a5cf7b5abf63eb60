"""Log context fields for billing runs and call tracing for calculations."""

import datetime as dt
import functools
import logging
import threading
import time
import uuid
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict

# Fields attached to records logged on this thread
_thread_local = threading.local()

_SCALAR_TYPES = (str, int, float, Decimal, dt.date, dt.time, Enum)


def generate_correlation_id() -> str:
    """Return a short random id shared by every log record of one CLI run."""
    return uuid.uuid4().hex[:12]


def current_log_context() -> Dict[str, Any]:
    """Return a copy of the context fields active on this thread."""
    return dict(getattr(_thread_local, "context", {}))


class LogContext:
    """
    Context manager that tags log records with billing fields.

    Fields passed as None are left out, so optional filters such as a
    command's ``--vehicle`` can be passed straight through. A nested block
    adds to the outer fields and restores them on exit.

    Example:
        with LogContext(vehicle_number="TN 11U 0474", month=9, year=2025):
            logger.info("Aggregating tripsheet")
    """

    def __init__(self, **fields: Any):
        self.fields = {key: value for key, value in fields.items() if value is not None}
        self._outer: Dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self._outer = current_log_context()
        _thread_local.context = {**self._outer, **self.fields}
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _thread_local.context = self._outer


class ContextFilter(logging.Filter):
    """Handler filter that stores the active fields on ``record.context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = current_log_context()
        return True


def _describe(value: Any) -> str:
    # Scalars by value, collections by size, everything else by type
    if value is None or isinstance(value, _SCALAR_TYPES):
        return repr(value)
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return f"{type(value).__name__}[{len(value)}]"
    return type(value).__name__


def log_function_call(func: Callable) -> Callable:
    """
    Decorator that traces a calculation at DEBUG level.

    Logs the call with each argument summarized (a TripsheetSummary shows as
    its type name, a list of entries as ``list[30]``) and then the elapsed
    time. Exceptions are logged with their traceback and re-raised.

    Example:
        @log_function_call
        def calculate_billing(summary, rules):
            ...
    """
    logger = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if logger.isEnabledFor(logging.DEBUG):
            described = [_describe(arg) for arg in args]
            described += [f"{key}={_describe(val)}" for key, val in kwargs.items()]
            logger.debug(f"Entering {func.__name__}({', '.join(described)})")

        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(
                f"Exception in {func.__name__}: {type(e).__name__}: {e}",
                exc_info=True,
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(f"Exiting {func.__name__} after {elapsed_ms:.1f} ms")
        return result

    return wrapper
