"""
Source poller.

Polls one contract for logs in bounded block windows and turns them into
domain events. The cursor (next block to scan) lives inside the stream and
only moves forward after a window was fetched successfully, so a failed
range query is retried with the same bounds and no block is skipped.

Loop per iteration:
    1. Query the head. On failure emit an error, back off, retry.
    2. Cursor ahead of head: wait idle_delay, go to 1.
    3. Window [cursor, min(cursor + max_block_range - 1, head)].
    4. Fetch logs. On failure emit an error, back off, retry the window.
    5. Emit every decodable log, advance the cursor past the window.
    6. Window reached head: wait caught_up_delay.
"""

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import aclosing
from dataclasses import dataclass

from loguru import logger

from dexmon.config.constants import (
    POLL_CAUGHT_UP_DELAY,
    POLL_ERROR_RETRY_DELAY,
    POLL_ERROR_RETRY_MAX_DELAY,
    POLL_IDLE_DELAY,
    POLL_LOOKBACK_BLOCKS,
    POLL_MAX_BLOCK_RANGE,
)
from dexmon.models.events import PollError, PollEvent, PollOutcome
from dexmon.models.source import Source
from dexmon.services.blockchain.event_decoder import EventDecoder
from dexmon.services.blockchain.ledger_client import LedgerClient
from dexmon.services.blockchain.rpc_wrapper import (
    backoff_delay,
    sleep_or_stop,
    until_stopped,
)
from dexmon.utils.channel import Channel
from dexmon.utils.exceptions import LEDGER_ERRORS, StopRequested, TransientRPCError

CheckpointHook = Callable[[str, int], None]


@dataclass(frozen=True, slots=True)
class PollerTiming:
    """Window size and delays of a poller."""

    max_block_range: int = POLL_MAX_BLOCK_RANGE
    lookback_blocks: int = POLL_LOOKBACK_BLOCKS
    idle_delay: float = POLL_IDLE_DELAY
    caught_up_delay: float = POLL_CAUGHT_UP_DELAY
    error_retry_delay: float = POLL_ERROR_RETRY_DELAY
    error_retry_max_delay: float = POLL_ERROR_RETRY_MAX_DELAY

    def __post_init__(self) -> None:
        if self.max_block_range < 1:
            raise ValueError("max_block_range must be >= 1")
        if self.lookback_blocks < 1:
            raise ValueError("lookback_blocks must be >= 1")

    def retry_delay(self, failures: int) -> float:
        return backoff_delay(failures, self.error_retry_delay, self.error_retry_max_delay)


class SourcePoller:
    """Windowed log poller for a single source."""

    def __init__(
        self,
        source: Source,
        ledger: LedgerClient,
        decoder: EventDecoder,
        timing: PollerTiming | None = None,
        checkpoint: CheckpointHook | None = None,
    ) -> None:
        """
        Initialize poller.

        Args:
            source: Contract to poll
            ledger: Ledger client
            decoder: Log decoder
            timing: Window size and delays
            checkpoint: Called with (source name, next block) after each
                window; receives a copy, never the cursor itself
        """
        self.source = source
        self.ledger = ledger
        self.decoder = decoder
        self.timing = timing or PollerTiming()
        self.checkpoint = checkpoint
        self._tag = f"[Poller {source.name}]"

    async def stream(self, stop: asyncio.Event) -> AsyncIterator[PollOutcome]:
        """
        Yield poll outcomes until stop is set.

        Args:
            stop: Shared stop event

        Yields:
            PollEvent for every decoded log, PollError for every failed query
        """
        timing = self.timing
        # Consecutive failures per query kind, reset by that query succeeding
        head_failures = 0
        log_failures = 0

        try:
            cursor = self.source.start_block
            while cursor is None:
                try:
                    latest = await until_stopped(stop, self.ledger.block_number())
                except LEDGER_ERRORS as e:
                    head_failures += 1
                    yield self._error("head", e)
                    if await sleep_or_stop(stop, timing.retry_delay(head_failures)):
                        return
                    continue
                head_failures = 0
                cursor = max(0, latest - timing.lookback_blocks + 1)

            logger.info(
                f"{self._tag} Starting at block {cursor} "
                f"(contract {self.source.address})"
            )

            while not stop.is_set():
                try:
                    latest = await until_stopped(stop, self.ledger.block_number())
                except LEDGER_ERRORS as e:
                    head_failures += 1
                    yield self._error("head", e)
                    if await sleep_or_stop(stop, timing.retry_delay(head_failures)):
                        return
                    continue
                head_failures = 0

                if cursor > latest:
                    if await sleep_or_stop(stop, timing.idle_delay):
                        return
                    continue

                to_block = min(cursor + timing.max_block_range - 1, latest)
                logger.debug(f"{self._tag} Fetching logs {cursor}-{to_block} (head {latest})")

                try:
                    logs = await until_stopped(
                        stop,
                        self.ledger.get_logs(self.source.address, cursor, to_block),
                    )
                except LEDGER_ERRORS as e:
                    log_failures += 1
                    yield self._error("logs", e, cursor, to_block)
                    if await sleep_or_stop(stop, timing.retry_delay(log_failures)):
                        return
                    continue

                log_failures = 0
                for raw_log in logs:
                    event = self.decoder.decode(raw_log, self.source)
                    if event is not None:
                        logger.info(
                            f"{self._tag} {event.kind} in block {event.block_number}: "
                            f"pool {event.pool_address}"
                        )
                        yield PollEvent(event)

                cursor = to_block + 1
                if self.checkpoint is not None:
                    self.checkpoint(self.source.name, cursor)

                if to_block == latest:
                    if await sleep_or_stop(stop, timing.caught_up_delay):
                        return
        except StopRequested:
            return

    async def run(self, stop: asyncio.Event, channel: Channel[PollOutcome]) -> None:
        """
        Pump stream outcomes into channel until stop is set.

        The channel is closed when this returns or fails, whatever the reason.
        """
        try:
            async with aclosing(self.stream(stop)) as outcomes:
                async for outcome in outcomes:
                    await until_stopped(stop, channel.send(outcome))
        except StopRequested:
            pass
        finally:
            channel.close()
            logger.info(f"{self._tag} Stopped")

    def _error(
        self,
        operation: str,
        cause: BaseException,
        from_block: int | None = None,
        to_block: int | None = None,
    ) -> PollError:
        error = TransientRPCError(self.source.name, operation, cause, from_block, to_block)
        logger.warning(f"{self._tag} {error}")
        return PollError(self.source.name, error)
