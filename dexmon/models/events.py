"""
Domain events.

Normalized, ledger-independent representation of decoded contract logs and
the outcome type pollers emit.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from dexmon.utils.exceptions import TransientRPCError


class EventKind(StrEnum):
    """Kinds of domain events the decoder can produce."""

    POOL_CREATED = "pool_created"


@dataclass(frozen=True, slots=True)
class PoolCreated:
    """A new liquidity pool was created by a factory."""

    pool_address: str
    token_a: str
    token_b: str
    source_name: str
    block_number: int | None = field(default=None, compare=False)
    kind: EventKind = field(default=EventKind.POOL_CREATED, init=False)


# Closed union of domain events; add variants with "|"
DomainEvent = PoolCreated


@dataclass(frozen=True, slots=True)
class PollEvent:
    """A decoded event from a source."""

    event: DomainEvent


@dataclass(frozen=True, slots=True)
class PollError:
    """A failed poll step; the poller retries on its own."""

    source_name: str
    error: TransientRPCError


PollOutcome = PollEvent | PollError
