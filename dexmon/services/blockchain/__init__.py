"""
Blockchain services module.

Ledger access, log decoding and token metadata resolution.
"""

from .core_constants import (
    ERC20_BYTES32_METADATA_ABI,
    ERC20_METADATA_ABI,
    POOL_CREATED_EVENT,
    POOL_FACTORY_ABI,
)
from .event_decoder import EventDecoder
from .ledger_client import LedgerClient
from .rpc_wrapper import backoff_delay, sleep_or_stop, until_stopped
from .token_metadata import TokenMetadataResolver


__all__ = [
    "ERC20_BYTES32_METADATA_ABI",
    "ERC20_METADATA_ABI",
    "EventDecoder",
    "LedgerClient",
    "POOL_CREATED_EVENT",
    "POOL_FACTORY_ABI",
    "TokenMetadataResolver",
    "backoff_delay",
    "sleep_or_stop",
    "until_stopped",
]
