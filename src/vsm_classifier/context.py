"""Cancellation and deadline signal for training runs.

A ``Context`` is handed to ``VSM.train`` by the caller. The training worker
stops at its next scheduling opportunity once the context is done, either
because ``cancel()`` was called or because its deadline elapsed.

``cancel()`` must be called from the thread running the event loop; use
``loop.call_soon_threadsafe(ctx.cancel)`` from other threads.
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime
from typing import Optional

from .errors import CancellationError, Cancelled, DeadlineExceeded


class Context:
    """Caller-controlled cancellation signal with an optional deadline.

    Args:
        deadline: POSIX timestamp after which the context is done, or
            ``None`` for no deadline.
    """

    def __init__(self, deadline: Optional[float] = None) -> None:
        self._deadline = deadline
        self._event = asyncio.Event()
        self._err: Optional[CancellationError] = None

    @classmethod
    def with_timeout(cls, seconds: float) -> "Context":
        """Create a context that expires ``seconds`` from now."""
        return cls(deadline=time.time() + seconds)

    @classmethod
    def with_deadline(cls, deadline: datetime) -> "Context":
        """Create a context that expires at ``deadline``.

        A deadline in the past yields a context that is already done.
        """
        return cls(deadline=deadline.timestamp())

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def done(self) -> bool:
        """Whether the context has been cancelled or has expired."""
        if self._err is None and self._deadline is not None and time.time() >= self._deadline:
            self._expire()
        return self._err is not None

    @property
    def err(self) -> Optional[CancellationError]:
        """The reason the context is done, or ``None`` while it is live."""
        return self._err if self.done else None

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline (``None`` without a deadline)."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.time())

    def cancel(self) -> None:
        """Cancel the context. Has no effect if it is already done."""
        if not self.done:
            self._err = Cancelled()
            self._event.set()

    async def wait(self) -> None:
        """Block until the context is done."""
        if self.done:
            return
        try:
            await asyncio.wait_for(self._event.wait(), timeout=self.remaining())
        except asyncio.TimeoutError:
            self._expire()

    def _expire(self) -> None:
        if self._err is None:
            self._err = DeadlineExceeded()
            self._event.set()

    def __repr__(self) -> str:
        state = type(self._err).__name__ if self._err else "active"
        return f"Context(deadline={self._deadline!r}, state={state})"
