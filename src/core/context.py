"""Cancellation context shared by every worker of one batch run."""

from __future__ import annotations

import threading
import time

from src.core.errors import BatchCancelledError, DeadlineExceededError


class BatchContext:
    """Cancellation signal with an optional deadline.

    One context is shared by all workers of a batch. Cancelling it (or
    letting the deadline pass) stops new retry attempts and interrupts
    retry delays; it never kills a unit of work that is already running.
    """

    def __init__(self, timeout: float | None = None) -> None:
        if timeout is not None and timeout < 0:
            msg = "timeout must be non-negative"
            raise ValueError(msg)
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: str | None = None
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    @classmethod
    def background(cls) -> BatchContext:
        """Context with no deadline; only an explicit cancel() ends it."""
        return cls()

    def cancel(self, reason: str = "batch cancelled") -> None:
        """Cancel the context. Only the first reason is kept."""
        with self._lock:
            if self._reason is None:
                self._reason = reason
        self._event.set()

    @property
    def deadline_exceeded(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def cancelled(self) -> bool:
        """True once cancel() was called or the deadline passed."""
        return self._event.is_set() or self.deadline_exceeded

    def remaining(self) -> float | None:
        """Seconds until the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def error(self) -> BatchCancelledError | None:
        """The error describing why the context ended, or None if still live."""
        if self._event.is_set():
            return BatchCancelledError(self._reason or "batch cancelled")
        if self.deadline_exceeded:
            return DeadlineExceededError("batch deadline exceeded")
        return None

    def raise_if_cancelled(self) -> None:
        err = self.error()
        if err is not None:
            raise err

    def wait(self, seconds: float) -> bool:
        """Block for up to `seconds`. Returns True if the context ended first."""
        timeout = seconds
        remaining = self.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)
        self._event.wait(max(0.0, timeout))
        return self.cancelled

    def sleep(self, seconds: float) -> None:
        """Sleep that raises the cancellation error if interrupted."""
        if self.wait(seconds):
            self.raise_if_cancelled()
