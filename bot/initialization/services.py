"""
Bot Initialization - Services Module.

Module: services.py
Builds the ingestion pipeline from settings: one poller per configured
source, a metadata resolver, the Telegram consumer and the supervisor.
"""

import asyncio
from functools import partial

from aiogram import Bot
from loguru import logger

from bot.utils.formatters import format_pool_created_message
from bot.utils.notifications import TelegramNotifier
from dexmon.config.dexes import DexRegistry
from dexmon.config.settings import Settings, SourceSettings
from dexmon.models.events import EventKind
from dexmon.models.source import EventSchema, Source
from dexmon.services.blockchain.core_constants import POOL_CREATED_EVENT, POOL_FACTORY_ABI
from dexmon.services.blockchain.event_decoder import EventDecoder
from dexmon.services.blockchain.ledger_client import LedgerClient
from dexmon.services.blockchain.token_metadata import TokenMetadataResolver
from dexmon.services.ingestion.consumer import PoolAlertConsumer
from dexmon.services.ingestion.source_poller import PollerTiming, SourcePoller
from dexmon.services.ingestion.supervisor import Supervisor
from dexmon.utils.addresses import normalize_address


def build_sources(sources: list[SourceSettings]) -> list[Source]:
    """
    Build poll sources sharing the PoolCreated schema.

    Raises:
        ConfigError: If the factory ABI is malformed
    """
    schema = EventSchema.from_abi(POOL_FACTORY_ABI, POOL_CREATED_EVENT, EventKind.POOL_CREATED)
    return [
        Source(
            name=source.name,
            address=normalize_address(source.factory_address),
            schema=schema,
            start_block=source.start_block,
        )
        for source in sources
    ]


def build_timing(settings: Settings) -> PollerTiming:
    """Poller window size and delays from settings."""
    return PollerTiming(
        max_block_range=settings.max_block_range,
        lookback_blocks=settings.lookback_blocks,
        idle_delay=settings.idle_poll_delay,
        caught_up_delay=settings.caught_up_delay,
        error_retry_delay=settings.error_retry_delay,
        error_retry_max_delay=settings.error_retry_max_delay,
    )


def build_supervisor(
    settings: Settings,
    ledger: LedgerClient,
    bot: Bot,
    stop: asyncio.Event,
) -> Supervisor:
    """
    Wire pollers, consumer and supervisor.

    Args:
        settings: Application settings
        ledger: Connected ledger client
        bot: Telegram bot used for alerts
        stop: Shared stop event

    Returns:
        Supervisor ready to run
    """
    decoder = EventDecoder()
    timing = build_timing(settings)
    pollers = [
        SourcePoller(source, ledger, decoder, timing=timing)
        for source in build_sources(settings.sources)
    ]

    registry = DexRegistry.from_sources(settings.sources)
    consumer = PoolAlertConsumer(
        resolver=TokenMetadataResolver(ledger),
        notifier=TelegramNotifier(bot),
        destination=settings.telegram_chat_id,
        format_message=partial(format_pool_created_message, registry=registry),
    )

    for poller in pollers:
        logger.info(
            f"Monitoring {registry.get(poller.source.name).display_name} "
            f"factory {poller.source.address}"
        )
    return Supervisor(pollers, consumer, stop=stop)
