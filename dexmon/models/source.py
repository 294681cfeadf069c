"""
Source and event schema models.

A source is a single contract whose logs are polled. Its schema describes
the event to look for and is built once from a JSON ABI entry.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from eth_utils import event_abi_to_log_topic
from hexbytes import HexBytes

from dexmon.models.events import EventKind
from dexmon.utils.exceptions import ConfigError


@dataclass(frozen=True, slots=True)
class EventParam:
    """Single event input."""

    name: str
    type: str
    indexed: bool


@dataclass(frozen=True, slots=True)
class EventSchema:
    """Decoding schema of one contract event."""

    name: str
    kind: EventKind
    topic0: HexBytes
    inputs: tuple[EventParam, ...]

    @property
    def indexed_inputs(self) -> tuple[EventParam, ...]:
        return tuple(p for p in self.inputs if p.indexed)

    @property
    def data_inputs(self) -> tuple[EventParam, ...]:
        return tuple(p for p in self.inputs if not p.indexed)

    @classmethod
    def from_abi(
        cls,
        abi: Sequence[dict[str, Any]],
        event_name: str,
        kind: EventKind,
    ) -> "EventSchema":
        """
        Build schema for an event of a contract ABI.

        Args:
            abi: Contract ABI (list of entries as in JSON ABI files)
            event_name: Event to extract
            kind: Domain event kind decoded logs map to

        Returns:
            Event schema

        Raises:
            ConfigError: If the event is missing or malformed
        """
        entry = next(
            (
                item for item in abi
                if item.get("type") == "event" and item.get("name") == event_name
            ),
            None,
        )
        if entry is None:
            raise ConfigError(f"Event {event_name!r} not found in ABI")

        try:
            inputs = tuple(
                EventParam(
                    name=param["name"],
                    type=param["type"],
                    indexed=bool(param.get("indexed", False)),
                )
                for param in entry.get("inputs", [])
            )
            topic0 = HexBytes(event_abi_to_log_topic(entry))
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Malformed ABI for event {event_name!r}: {e}") from e

        return cls(name=event_name, kind=kind, topic0=topic0, inputs=inputs)


@dataclass(frozen=True, slots=True)
class Source:
    """A contract whose logs are polled."""

    name: str
    address: str
    schema: EventSchema
    start_block: int | None = None
