"""
Pool alert consumer.

Drains the merged outcome channel: decoded pool creations are enriched with
token metadata, formatted and handed to a notifier; poll errors are logged.
Delivery failures are logged and counted, they never stop the pipeline.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from loguru import logger

from dexmon.models.events import PollError, PollEvent, PollOutcome, PoolCreated
from dexmon.models.token import TokenMetadata
from dexmon.services.blockchain.rpc_wrapper import until_stopped
from dexmon.services.blockchain.token_metadata import TokenMetadataResolver
from dexmon.utils.channel import Channel
from dexmon.utils.exceptions import NotifierError, StopRequested

MessageFormatter = Callable[[PoolCreated, TokenMetadata, TokenMetadata], str]


class Notifier(Protocol):
    """Delivers a plain-text message to a destination."""

    async def send(self, destination: int | str, text: str) -> None:
        ...


@dataclass(slots=True)
class ConsumerStats:
    """Counters reported on shutdown."""

    events: int = 0
    errors: int = 0
    sent: int = 0
    send_failures: int = 0


class PoolAlertConsumer:
    """Turns poll outcomes into notifications."""

    def __init__(
        self,
        resolver: TokenMetadataResolver,
        notifier: Notifier,
        destination: int | str,
        format_message: MessageFormatter,
    ) -> None:
        self.resolver = resolver
        self.notifier = notifier
        self.destination = destination
        self.format_message = format_message
        self.stats = ConsumerStats()

    async def run(self, channel: Channel[PollOutcome], stop: asyncio.Event) -> None:
        """Handle outcomes until the channel closes or stop is set."""
        try:
            async for outcome in channel:
                await until_stopped(stop, self.handle(outcome))
        except StopRequested:
            pass
        logger.info(
            f"[Consumer] Stopped: {self.stats.events} events, {self.stats.errors} errors, "
            f"{self.stats.sent} sent, {self.stats.send_failures} failed"
        )

    async def handle(self, outcome: PollOutcome) -> None:
        """Process a single outcome."""
        if isinstance(outcome, PollError):
            self.stats.errors += 1
            logger.warning(f"[Consumer] {outcome.source_name}: {outcome.error}")
            return

        if isinstance(outcome, PollEvent) and isinstance(outcome.event, PoolCreated):
            self.stats.events += 1
            await self.notify_pool_created(outcome.event)
            return

        logger.warning(f"[Consumer] Ignoring unsupported outcome: {outcome!r}")

    async def notify_pool_created(self, event: PoolCreated) -> None:
        """Resolve both tokens, format and send an alert."""
        token_a, token_b = await asyncio.gather(
            self.resolver.resolve(event.token_a),
            self.resolver.resolve(event.token_b),
        )
        text = self.format_message(event, token_a, token_b)

        try:
            await self.notifier.send(self.destination, text)
        except NotifierError as e:
            self.stats.send_failures += 1
            logger.error(f"[Consumer] Failed to deliver alert for pool {event.pool_address}: {e}")
            return

        self.stats.sent += 1
        logger.success(
            f"[Consumer] Alert sent: {token_a.display_symbol}/{token_b.display_symbol} "
            f"on {event.source_name}"
        )
