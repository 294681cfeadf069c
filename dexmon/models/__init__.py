"""
Domain models.

Exports events, token metadata and source definitions for easy imports.
"""

from dexmon.models.events import (
    DomainEvent,
    EventKind,
    PollError,
    PollEvent,
    PollOutcome,
    PoolCreated,
)
from dexmon.models.source import EventParam, EventSchema, Source
from dexmon.models.token import TokenMetadata


__all__ = [
    "DomainEvent",
    "EventKind",
    "EventParam",
    "EventSchema",
    "PollError",
    "PollEvent",
    "PollOutcome",
    "PoolCreated",
    "Source",
    "TokenMetadata",
]
