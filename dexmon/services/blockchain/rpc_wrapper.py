"""
Stop-aware waiting helpers.

Every suspension point of the pipeline (RPC calls, fixed delays, channel
sends) goes through these helpers so a shared stop event interrupts it
promptly. Task cancellation is honored as usual.
"""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from dexmon.utils.exceptions import StopRequested

T = TypeVar("T")


async def sleep_or_stop(stop: asyncio.Event, delay: float) -> bool:
    """
    Sleep for delay seconds unless stop is set first.

    Args:
        stop: Shared stop event
        delay: Delay in seconds

    Returns:
        True if stop was requested
    """
    if stop.is_set():
        return True
    try:
        await asyncio.wait_for(stop.wait(), timeout=delay)
    except TimeoutError:
        return stop.is_set()
    return True


async def until_stopped(stop: asyncio.Event, aw: Awaitable[T]) -> T:
    """
    Await aw, abandoning it if stop is set first.

    Args:
        stop: Shared stop event
        aw: Awaitable to run

    Returns:
        Result of aw

    Raises:
        StopRequested: If stop fired before aw completed (aw is cancelled)
    """
    if stop.is_set():
        if asyncio.iscoroutine(aw):
            aw.close()
        raise StopRequested()

    task = asyncio.ensure_future(aw)
    stopper = asyncio.ensure_future(stop.wait())
    try:
        await asyncio.wait({task, stopper}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        stopper.cancel()
        if not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    # A cancelled gather future finishes with CancelledError as its exception
    # rather than in the cancelled state
    if task.cancelled() or isinstance(task.exception(), asyncio.CancelledError):
        raise StopRequested()
    return task.result()


def backoff_delay(failures: int, base: float, cap: float) -> float:
    """
    Capped exponential backoff: base, 2*base, 4*base, ... up to cap.

    Args:
        failures: Consecutive failures so far (1 for the first)
        base: Delay after the first failure
        cap: Maximum delay

    Returns:
        Delay in seconds
    """
    if failures <= 1:
        return min(base, cap)
    # Exponent bounded to keep the float finite on long outages
    return min(base * (2 ** min(failures - 1, 32)), cap)
