"""
Token metadata resolver.

Reads name, symbol and decimals of an ERC-20 token. Contracts disagree on the
return type of name() and symbol(): most return a string, older ones a
bytes32. Each text field is therefore read with an ordered list of decoding
strategies; the first one producing a non-empty value wins. Decimals use a
single uint8 call.

Resolution is best effort and never raises for contract-level failures.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

from eth_abi import decode
from eth_utils import function_abi_to_4byte_selector
from loguru import logger

from dexmon.models.token import TokenMetadata
from dexmon.services.blockchain.core_constants import (
    ERC20_BYTES32_METADATA_ABI,
    ERC20_METADATA_ABI,
)
from dexmon.services.blockchain.ledger_client import LedgerClient
from dexmon.utils.addresses import normalize_address, short_address


def _selector(abi: list[dict], name: str) -> bytes:
    entry = next(item for item in abi if item["name"] == name)
    return function_abi_to_4byte_selector(entry)


def decode_string(raw: bytes) -> str:
    """Decode ABI-encoded string return value."""
    return decode(["string"], raw)[0]


def decode_bytes32(raw: bytes) -> str:
    """Decode bytes32 return value, truncated at the first zero byte."""
    value: bytes = decode(["bytes32"], raw)[0]
    end = value.find(b"\x00")
    if end != -1:
        value = value[:end]
    return value.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class TextStrategy:
    """One way of reading a text getter."""

    name: str
    selector: bytes
    decoder: Callable[[bytes], str]


# Evaluated first to last; both selectors are identical, only decoding differs
TEXT_STRATEGIES: dict[str, tuple[TextStrategy, ...]] = {
    field: (
        TextStrategy("string", _selector(ERC20_METADATA_ABI, field), decode_string),
        TextStrategy("bytes32", _selector(ERC20_BYTES32_METADATA_ABI, field), decode_bytes32),
    )
    for field in ("name", "symbol")
}

DECIMALS_SELECTOR = _selector(ERC20_METADATA_ABI, "decimals")


class TokenMetadataResolver:
    """Resolves ERC-20 metadata through read-only calls."""

    def __init__(
        self,
        ledger: LedgerClient,
        strategies: dict[str, tuple[TextStrategy, ...]] | None = None,
    ) -> None:
        self.ledger = ledger
        self.strategies = strategies or TEXT_STRATEGIES

    async def resolve(self, address: str) -> TokenMetadata:
        """
        Resolve token metadata.

        Name, symbol and decimals are read concurrently and independently:
        a failure of one leaves the others untouched.

        Args:
            address: Token contract address

        Returns:
            Metadata with defaults for every field that could not be read
        """
        address = normalize_address(address)
        name, symbol, decimals = await asyncio.gather(
            self.read_text(address, "name"),
            self.read_text(address, "symbol"),
            self.read_decimals(address),
        )
        metadata = TokenMetadata(
            address=address, name=name, symbol=symbol, decimals=decimals,
        )
        logger.debug(
            f"[Metadata] {short_address(address)}: "
            f"name={name!r} symbol={symbol!r} decimals={decimals}"
        )
        return metadata

    async def read_decimals(self, address: str) -> int:
        """Read decimals(); 0 if the call fails or returns nothing."""
        try:
            raw = await self.ledger.call(address, DECIMALS_SELECTOR)
            if not raw:
                return 0
            return int(decode(["uint8"], raw)[0])
        except Exception as e:
            logger.debug(f"[Metadata] decimals() failed for {short_address(address)}: {e}")
            return 0

    async def read_text(self, address: str, field: str) -> str:
        """
        Read a text getter trying each strategy in order.

        Args:
            address: Token contract address
            field: Getter name ("name" or "symbol")

        Returns:
            First non-empty value, or empty string
        """
        for strategy in self.strategies[field]:
            try:
                raw = await self.ledger.call(address, strategy.selector)
                if not raw:
                    continue
                value = strategy.decoder(raw)
            except Exception as e:
                logger.debug(
                    f"[Metadata] {field}() as {strategy.name} failed "
                    f"for {short_address(address)}: {e}"
                )
                continue
            if value:
                return value
        return ""
