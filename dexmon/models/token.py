"""
Token metadata model.
"""

from dataclasses import dataclass

from dexmon.utils.addresses import short_address


@dataclass(frozen=True, slots=True)
class TokenMetadata:
    """
    ERC-20 metadata of a token.

    Fields a contract does not expose keep their defaults: empty name and
    symbol, zero decimals.
    """

    address: str
    name: str = ""
    symbol: str = ""
    decimals: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.decimals <= 255:
            raise ValueError(f"decimals out of range: {self.decimals}")

    @property
    def display_symbol(self) -> str:
        """Symbol, or the shortened address when the token has none."""
        return self.symbol or short_address(self.address)
