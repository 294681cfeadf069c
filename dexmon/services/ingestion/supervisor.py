"""
Supervisor.

Owns the shared stop event and every pipeline task: one task per source
poller, the multiplexer and the consumer. The first task failure wins: stop
is set, the remaining tasks are cancelled and awaited, and the failure is
re-raised to the caller. A run ended by the stop event returns normally.
"""

import asyncio
from collections.abc import Sequence

from loguru import logger

from dexmon.models.events import PollOutcome
from dexmon.services.ingestion.consumer import PoolAlertConsumer
from dexmon.services.ingestion.multiplexer import Multiplexer
from dexmon.services.ingestion.source_poller import SourcePoller
from dexmon.utils.channel import Channel


class Supervisor:
    """Runs pollers, multiplexer and consumer as one unit."""

    def __init__(
        self,
        pollers: Sequence[SourcePoller],
        consumer: PoolAlertConsumer,
        stop: asyncio.Event | None = None,
    ) -> None:
        if not pollers:
            raise ValueError("Supervisor needs at least one poller")
        self.pollers = list(pollers)
        self.consumer = consumer
        self.stop = stop if stop is not None else asyncio.Event()

    def request_stop(self) -> None:
        """Ask every task to finish."""
        if not self.stop.is_set():
            logger.info("[Supervisor] Stop requested")
        self.stop.set()

    async def run(self) -> None:
        """
        Run the pipeline until stop is requested or a task fails.

        Raises:
            Exception: The first failure of any pipeline task
        """
        inputs: list[Channel[PollOutcome]] = [
            Channel(name=poller.source.name) for poller in self.pollers
        ]
        merged: Channel[PollOutcome] = Channel(name="merged")

        tasks = [
            asyncio.create_task(poller.run(self.stop, channel), name=f"poll:{poller.source.name}")
            for poller, channel in zip(self.pollers, inputs)
        ]
        tasks.append(
            asyncio.create_task(Multiplexer(inputs, merged).run(self.stop), name="multiplexer")
        )
        tasks.append(
            asyncio.create_task(self.consumer.run(merged, self.stop), name="consumer")
        )
        logger.info(f"[Supervisor] Running {len(self.pollers)} source(s)")

        failure: BaseException | None = None
        pending: set[asyncio.Task] = set(tasks)
        try:
            while pending and failure is None:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_EXCEPTION)
                for task in done:
                    if not task.cancelled() and task.exception() is not None:
                        failure = task.exception()
                        logger.error(
                            f"[Supervisor] Task {task.get_name()} failed: "
                            f"{type(failure).__name__}: {failure}"
                        )
                        break
        finally:
            self.stop.set()
            for task in pending:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        if failure is not None:
            raise failure
        logger.info("[Supervisor] All tasks finished")
