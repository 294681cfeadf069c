"""
Multiplexer.

Fans several input channels into one output channel. Each input gets its own
forwarder task, so per-input order is kept and items from different inputs
are forwarded in arrival order. The output is closed once every input has
closed, or right away when the stop event fires (open inputs are then
abandoned, not drained).
"""

import asyncio
from collections.abc import Sequence
from typing import Generic, TypeVar

from loguru import logger

from dexmon.services.blockchain.rpc_wrapper import until_stopped
from dexmon.utils.channel import Channel
from dexmon.utils.exceptions import StopRequested

T = TypeVar("T")


class Multiplexer(Generic[T]):
    """Merges input channels into a single output channel."""

    def __init__(self, inputs: Sequence[Channel[T]], output: Channel[T]) -> None:
        self.inputs = list(inputs)
        self.output = output

    async def run(self, stop: asyncio.Event) -> None:
        """
        Forward items until all inputs close or stop is set.

        Raises:
            Exception: The first forwarder failure, if any
        """
        forwarders = [
            asyncio.create_task(self._forward(channel, stop), name=f"forward:{channel.name}")
            for channel in self.inputs
        ]
        try:
            if forwarders:
                await until_stopped(stop, asyncio.gather(*forwarders))
        except StopRequested:
            logger.debug(f"[Multiplexer] Stop requested, abandoning {len(forwarders)} inputs")
        finally:
            for task in forwarders:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*forwarders, return_exceptions=True)
            self.output.close()

    async def _forward(self, channel: Channel[T], stop: asyncio.Event) -> None:
        async for item in channel:
            await until_stopped(stop, self.output.send(item))
