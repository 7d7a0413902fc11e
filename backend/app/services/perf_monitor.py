"""Performance monitoring utilities for the quote engine."""
import time
import logging
import threading
import functools
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger("imeda-quotes.perf")


def timed(func: Callable) -> Callable:
    """
    Decorator that measures a synchronous call, logs it at DEBUG and records
    it on the module-level ``tracker`` under the function's qualified name.

    Usage::

        @timed
        def compute_summary(state):
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 3)
            tracker.record(func.__qualname__, duration_ms)
            logger.debug(
                "engine call timed",
                extra={"engine_function": func.__qualname__, "duration_ms": duration_ms},
            )
    return wrapper


class SummaryTracker:
    """
    Thread-safe in-memory counters for engine invocations.

    The quote editor recomputes the whole summary on every keystroke, so these
    numbers are mostly useful to spot a pathological quote (hundreds of lines)
    rather than for capacity planning.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._calls: Dict[str, int] = {}
        self._total_ms: Dict[str, float] = {}
        self._slowest_call: Optional[str] = None
        self._slowest_call_ms: float = 0.0

    def record(self, name: str, duration_ms: float) -> None:
        with self._lock:
            self._calls[name] = self._calls.get(name, 0) + 1
            self._total_ms[name] = self._total_ms.get(name, 0.0) + duration_ms
            if duration_ms > self._slowest_call_ms:
                self._slowest_call_ms = duration_ms
                self._slowest_call = name

    def get_metrics(self) -> Dict[str, Any]:
        """
        Return a snapshot.

        Keys: calls (total), calls_by_function, avg_duration_ms_by_function,
        slowest_call, slowest_call_ms.
        """
        with self._lock:
            averages = {
                name: round(self._total_ms[name] / count, 3) if count else 0.0
                for name, count in self._calls.items()
            }
            return {
                "calls": sum(self._calls.values()),
                "calls_by_function": dict(self._calls),
                "avg_duration_ms_by_function": averages,
                "slowest_call": self._slowest_call,
                "slowest_call_ms": round(self._slowest_call_ms, 3),
            }

    def reset(self) -> None:
        """Reset all counters (useful in tests)."""
        with self._lock:
            self._calls.clear()
            self._total_ms.clear()
            self._slowest_call = None
            self._slowest_call_ms = 0.0


# Module-level singleton — import this instance everywhere else.
tracker = SummaryTracker()
