"""
curator.chartmuseum.context — Cancellation for API calls.

A Context is threaded through every network call. It can be
cancelled from another thread or carry a deadline; the client
turns the remaining time into the request timeout.

    ctx = Context(timeout=60)
    client.charts.delete_chart(ctx, info)
"""

from __future__ import annotations

import threading
import time


class ContextError(Exception):
    pass


class Canceled(ContextError):
    def __init__(self):
        super().__init__("context canceled")


class DeadlineExceeded(ContextError):
    def __init__(self):
        super().__init__("context deadline exceeded")


class Context:
    """Cancellation signal with an optional deadline."""

    def __init__(self, timeout: float | None = None):
        self._cancelled = threading.Event()
        self.deadline: float | None = None
        if timeout is not None:
            self.deadline = time.monotonic() + timeout

    def cancel(self) -> None:
        self._cancelled.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, None if there is none."""
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    def err(self) -> ContextError | None:
        if self._cancelled.is_set():
            return Canceled()
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return DeadlineExceeded()
        return None

    def done(self) -> bool:
        return self.err() is not None


def background() -> Context:
    """A context that is never cancelled and has no deadline."""
    return Context()
