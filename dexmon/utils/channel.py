"""
Closable async channel.

A bounded queue with an end-of-stream marker. Producers ``send`` and finally
``close``; consumers iterate with ``async for`` until the channel is closed and
drained. Capacity defaults to 1 so a slow consumer throttles its producers.
"""

import asyncio
from typing import Generic, TypeVar

T = TypeVar("T")

_CLOSED = object()


class ChannelClosed(Exception):
    """Raised when sending to a closed channel or receiving from a drained one."""
    pass


class Channel(Generic[T]):
    """Single-consumer async channel."""

    def __init__(self, maxsize: int = 1, name: str = "") -> None:
        if maxsize < 1:
            raise ValueError("Channel capacity must be >= 1")
        # Capacity is enforced by the semaphore; the queue itself is unbounded
        # so close() can always enqueue the end marker.
        self._slots = asyncio.Semaphore(maxsize)
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False
        self._drained = False
        self.name = name

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, item: T) -> None:
        """
        Wait for capacity and enqueue item.

        Raises:
            ChannelClosed: If the channel was already closed
        """
        if self._closed:
            raise ChannelClosed(f"Channel {self.name!r} is closed")
        await self._slots.acquire()
        if self._closed:
            self._slots.release()
            raise ChannelClosed(f"Channel {self.name!r} is closed")
        self._queue.put_nowait(item)

    def close(self) -> None:
        """Mark end of stream. Idempotent, never blocks."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    async def recv(self) -> T:
        """
        Receive next item.

        Raises:
            ChannelClosed: If the channel was closed and every item consumed
        """
        if self._drained:
            raise ChannelClosed(f"Channel {self.name!r} is closed")
        item = await self._queue.get()
        if item is _CLOSED:
            self._drained = True
            raise ChannelClosed(f"Channel {self.name!r} is closed")
        self._slots.release()
        return item

    def __aiter__(self) -> "Channel[T]":
        return self

    async def __anext__(self) -> T:
        try:
            return await self.recv()
        except ChannelClosed:
            raise StopAsyncIteration from None
