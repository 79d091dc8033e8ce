"""Per-call deadline and cancellation handle."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from .errors import QueryCancelled, TransportError


class CallContext:
    """
    Deadline and cancellation signal for one or more calls made by a caller.

    A context is owned by the caller. ``cancel()`` may be invoked from any
    thread; it aborts the calls currently registered on this context and
    nothing else.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        if timeout is not None and timeout < 0:
            raise ValueError("timeout must be non-negative")
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._lock = threading.Lock()
        self._cancelled = False
        self._callbacks: list[Callable[[], object]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or ``None`` without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks = list(self._callbacks)
            self._callbacks.clear()
        for callback in callbacks:
            callback()

    def add_callback(self, callback: Callable[[], object]) -> Callable[[], None]:
        """
        Run ``callback`` on cancellation and return a function that unregisters it.

        If the context is already cancelled the callback runs immediately.
        """
        with self._lock:
            if not self._cancelled:
                self._callbacks.append(callback)
                return lambda: self._discard(callback)
        callback()
        return lambda: None

    def check(self, operation: str) -> None:
        """Raise if ``operation`` must not start under this context."""
        if self._cancelled:
            raise QueryCancelled(operation, details="context cancelled before the call")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise TransportError(operation, "DEADLINE_EXCEEDED", "deadline expired before the call")

    def _discard(self, callback: Callable[[], object]) -> None:
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass


__all__ = ["CallContext"]
