"""
Event decoder.

Turns raw log records into domain events using a source's event schema.
Decoding is pure: a log that does not match the schema, or fails to decode,
yields None and is skipped by the caller.
"""

from collections.abc import Callable, Mapping
from typing import Any

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from hexbytes import HexBytes
from loguru import logger

from dexmon.models.events import DomainEvent, EventKind, PoolCreated
from dexmon.models.source import Source
from dexmon.utils.addresses import normalize_address

EventBuilder = Callable[[dict[str, Any], Source, Mapping[str, Any]], DomainEvent]


def _build_pool_created(
    args: dict[str, Any],
    source: Source,
    raw_log: Mapping[str, Any],
) -> PoolCreated:
    # fee and tickSpacing are decoded but not part of the domain event
    return PoolCreated(
        pool_address=normalize_address(args["pool"]),
        token_a=normalize_address(args["token0"]),
        token_b=normalize_address(args["token1"]),
        source_name=source.name,
        block_number=raw_log.get("blockNumber"),
    )


EVENT_BUILDERS: dict[EventKind, EventBuilder] = {
    EventKind.POOL_CREATED: _build_pool_created,
}


class EventDecoder:
    """Schema-driven decoder for raw logs."""

    def __init__(self, builders: Mapping[EventKind, EventBuilder] | None = None) -> None:
        self.builders = dict(EVENT_BUILDERS if builders is None else builders)

    def decode(self, raw_log: Mapping[str, Any], source: Source) -> DomainEvent | None:
        """
        Decode a raw log emitted by source.

        Args:
            raw_log: Log record as returned by eth_getLogs
            source: Source whose schema applies

        Returns:
            Domain event, or None if the log does not match or is malformed
        """
        schema = source.schema
        try:
            topics = [HexBytes(topic) for topic in raw_log.get("topics") or ()]
        except (TypeError, ValueError):
            return None

        if not topics or topics[0] != schema.topic0:
            return None

        builder = self.builders.get(schema.kind)
        if builder is None:
            return None

        args: dict[str, Any] = {}
        try:
            # Trailing indexed values may be absent; builders check what they need
            for param, topic in zip(schema.indexed_inputs, topics[1:]):
                args[param.name] = decode([param.type], topic)[0]

            data_params = schema.data_inputs
            if data_params:
                values = decode(
                    [param.type for param in data_params],
                    HexBytes(raw_log.get("data") or b""),
                )
                args.update(zip((param.name for param in data_params), values))

            return builder(args, source, raw_log)
        except (DecodingError, KeyError, TypeError, ValueError) as e:
            logger.debug(
                f"[Decoder {source.name}] Skipping undecodable {schema.name} log "
                f"in block {raw_log.get('blockNumber')}: {e}"
            )
            return None
