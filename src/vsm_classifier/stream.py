"""Closable asyncio streams used to feed and drain the training pipeline.

A ``Stream`` behaves like a channel: producers ``send`` items, the consumer
``receive``s them in order, and the producer ``close``s it to signal that no
more items will follow. Receiving from a closed, drained stream returns
``None``; iterating with ``async for`` stops at that point.

With a positive ``maxsize`` the stream applies backpressure: ``send`` waits
until fewer than ``maxsize`` items are pending. An ``unbuffered`` stream
goes further: ``send`` returns only once a receiver has taken the item.
Closing never waits.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable
from typing import Generic, Optional, TypeVar

from .errors import StreamClosedError

T = TypeVar("T")

_CLOSED = object()


class Stream(Generic[T]):
    """Single-consumer, closable, ordered stream.

    ``None`` marks the end of the stream on the receiving side, so it cannot
    be sent as an item.

    Args:
        maxsize: Maximum number of pending items; ``0`` means unbounded.
        unbuffered: Make every ``send`` wait until the item is received.
    """

    def __init__(self, maxsize: int = 0, *, unbuffered: bool = False) -> None:
        if maxsize < 0:
            raise ValueError(f"maxsize must be non-negative, got {maxsize}")
        if unbuffered and maxsize:
            raise ValueError("an unbuffered stream cannot have a maxsize")
        self._queue: asyncio.Queue = asyncio.Queue()
        self._slots: Optional[asyncio.Semaphore] = (
            asyncio.Semaphore(maxsize) if maxsize > 0 else None
        )
        self._unbuffered = unbuffered
        self._closed = False

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> "Stream[T]":
        """Create an unbounded stream holding ``items``, already closed.

        Raises:
            TypeError: If any item is ``None``.
        """
        stream: Stream[T] = cls()
        for item in items:
            _check_item(item)
            stream._queue.put_nowait((item, None))
        stream.close()
        return stream

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def unbuffered(self) -> bool:
        return self._unbuffered

    async def send(self, item: T) -> None:
        """Append an item, waiting for room if the stream is bounded.

        On an unbuffered stream, waits until the item has been received.

        Raises:
            TypeError: If ``item`` is ``None``.
            StreamClosedError: If the stream is closed.
        """
        _check_item(item)
        if self._closed:
            raise StreamClosedError("send on closed stream")
        if self._slots is not None:
            await self._slots.acquire()
            if self._closed:
                self._slots.release()
                raise StreamClosedError("send on closed stream")
        if not self._unbuffered:
            self._queue.put_nowait((item, None))
            return

        taken = asyncio.get_running_loop().create_future()
        self._queue.put_nowait((item, taken))
        await taken

    def close(self) -> None:
        """Mark the end of the stream. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    async def receive(self) -> Optional[T]:
        """Return the next item, or ``None`` once closed and drained."""
        entry = await self._queue.get()
        if entry is _CLOSED:
            # leave the marker in place for any later receive
            self._queue.put_nowait(_CLOSED)
            return None
        item, taken = entry
        if taken is not None and not taken.done():
            taken.set_result(None)
        if self._slots is not None:
            self._slots.release()
        return item

    def __aiter__(self) -> AsyncIterator[T]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[T]:
        while True:
            item = await self.receive()
            if item is None:
                return
            yield item

    def __repr__(self) -> str:
        return (
            f"Stream(pending={self._queue.qsize()}, closed={self._closed}, "
            f"unbuffered={self._unbuffered})"
        )


def _check_item(item: object) -> None:
    if item is None:
        raise TypeError("None cannot be sent on a stream; it marks the end of input")
