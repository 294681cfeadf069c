"""
Formatters
Plain-text alert messages for Telegram
"""

from dexmon.config.dexes import DexRegistry
from dexmon.models.events import PoolCreated
from dexmon.models.token import TokenMetadata


def format_token(token: TokenMetadata) -> str:
    """
    Format token as "SYMBOL (Name)"

    Args:
        token: Resolved token metadata

    Returns:
        Symbol with name in brackets when the name adds information
    """
    symbol = token.display_symbol
    if token.name and token.name != token.symbol:
        return f"{symbol} ({token.name})"
    return symbol


def format_pool_created_message(
    event: PoolCreated,
    token_a: TokenMetadata,
    token_b: TokenMetadata,
    registry: DexRegistry | None = None,
) -> str:
    """
    Format new pool alert

    Args:
        event: Decoded pool creation
        token_a: Metadata of the first pool token
        token_b: Metadata of the second pool token
        registry: DEX metadata lookup for display name and swap link

    Returns:
        Message text (no markup)
    """
    dex = (registry or DexRegistry()).get(event.source_name)
    lines = [
        f"New Pool Created {token_a.display_symbol}/{token_b.display_symbol} on {dex.display_name}",
        f"Token A: {format_token(token_a)} {token_a.address}",
        f"Token B: {format_token(token_b)} {token_b.address}",
        f"Pool: {event.pool_address}",
    ]
    trade_url = dex.trade_url(event.token_a, event.token_b)
    if trade_url:
        lines.append(f"Swap URL: {trade_url}")
    return "\n".join(lines)
