"""Pytest configuration and shared fixtures for all tests."""

import asyncio
import os
import sys
from pathlib import Path
from types import SimpleNamespace

# Minimal environment for Settings validation
# Telegram token must match the "digits:35 chars" format
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456789:ABCdefGHIjklMNOpqrsTUVwxyz123456789")
os.environ.setdefault("TELEGRAM_CHAT_ID", "-1001234567890")
os.environ.setdefault("LOG_FILE", "")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from unittest.mock import AsyncMock

from eth_abi import encode
from eth_utils import to_checksum_address
from hexbytes import HexBytes

from dexmon.models.events import EventKind
from dexmon.models.source import EventSchema, Source
from dexmon.services.blockchain.core_constants import POOL_CREATED_EVENT, POOL_FACTORY_ABI
from dexmon.services.ingestion.source_poller import PollerTiming


FACTORY_A = to_checksum_address("0x" + "aa" * 20)
FACTORY_B = to_checksum_address("0x" + "bb" * 20)
TOKEN0 = to_checksum_address("0x" + "11" * 20)
TOKEN1 = to_checksum_address("0x" + "22" * 20)
POOL = to_checksum_address("0x" + "33" * 20)


class ScriptedLedger:
    """
    Ledger fake driven by scripts.

    heads: values (or exceptions) returned by successive block_number() calls;
        once exhausted the last head is repeated and stop is set.
    logs: raw logs keyed by contract address, filtered by block range.
    log_errors: exceptions (or None) consumed by successive get_logs() calls.
    call_results: eth_call results keyed by selector; a list is consumed in
        order, an exception is raised.
    """

    def __init__(
        self,
        heads=(),
        logs=None,
        log_errors=(),
        call_results=None,
        stop: asyncio.Event | None = None,
    ):
        self.heads = list(heads)
        self.logs = logs or {}
        self.log_errors = list(log_errors)
        self.call_results = call_results or {}
        self.stop = stop
        self.last_head = 0
        self.windows: list[tuple[int, int]] = []
        self.calls: list[tuple[str, bytes]] = []

    async def block_number(self) -> int:
        if not self.heads:
            if self.stop is not None:
                self.stop.set()
            return self.last_head
        item = self.heads.pop(0)
        if isinstance(item, BaseException):
            raise item
        self.last_head = item
        return item

    async def get_logs(self, address, from_block, to_block):
        self.windows.append((from_block, to_block))
        if self.log_errors:
            error = self.log_errors.pop(0)
            if error is not None:
                raise error
        return [
            log for log in self.logs.get(address, [])
            if from_block <= log["blockNumber"] <= to_block
        ]

    async def call(self, to, data):
        selector = bytes(data[:4])
        self.calls.append((to, selector))
        result = self.call_results.get(selector, b"")
        if isinstance(result, list):
            result = result.pop(0) if result else b""
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def pool_schema() -> EventSchema:
    """PoolCreated schema built from the factory ABI."""
    return EventSchema.from_abi(POOL_FACTORY_ABI, POOL_CREATED_EVENT, EventKind.POOL_CREATED)


@pytest.fixture
def make_source(pool_schema):
    """Factory for poll sources sharing the PoolCreated schema."""

    def _make(name="A", address=FACTORY_A, start_block=None) -> Source:
        return Source(name=name, address=address, schema=pool_schema, start_block=start_block)

    return _make


@pytest.fixture
def make_pool_log(pool_schema):
    """Factory for raw PoolCreated log records."""

    def _make(
        token0=TOKEN0,
        token1=TOKEN1,
        pool=POOL,
        block_number=100,
        address=FACTORY_A,
        fee=3000,
        tick_spacing=60,
        topic0=None,
        with_fee_topic=True,
    ) -> dict:
        topics = [
            HexBytes(topic0) if topic0 is not None else pool_schema.topic0,
            HexBytes(encode(["address"], [token0])),
            HexBytes(encode(["address"], [token1])),
        ]
        if with_fee_topic:
            topics.append(HexBytes(encode(["uint24"], [fee])))
        return {
            "address": address,
            "topics": topics,
            "data": HexBytes(encode(["int24", "address"], [tick_spacing, pool])),
            "blockNumber": block_number,
            "transactionHash": HexBytes(b"\x01" * 32),
        }

    return _make


@pytest.fixture
def make_ledger():
    """Factory for ScriptedLedger instances."""
    return ScriptedLedger


@pytest.fixture
def stop_event() -> asyncio.Event:
    """
    Fresh stop event.

    Returns:
        asyncio.Event: Unset stop event
    """
    return asyncio.Event()


@pytest.fixture
def fast_timing() -> PollerTiming:
    """Poller timing with near-zero delays."""
    return PollerTiming(
        idle_delay=0.001,
        caught_up_delay=0.001,
        error_retry_delay=0.001,
        error_retry_max_delay=0.001,
    )


@pytest.fixture
def mock_bot():
    """Mock Telegram Bot."""
    bot = AsyncMock()
    bot.send_message = AsyncMock()
    bot.session = AsyncMock()
    bot.session.close = AsyncMock()
    return bot


@pytest.fixture
def addr() -> SimpleNamespace:
    """Addresses used across tests (checksummed)."""
    return SimpleNamespace(
        factory_a=FACTORY_A,
        factory_b=FACTORY_B,
        token0=TOKEN0,
        token1=TOKEN1,
        pool=POOL,
    )
