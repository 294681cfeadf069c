"""
Address helpers.

Normalization for contract addresses and a short form for log lines.
"""

from eth_utils import is_address, to_checksum_address


def normalize_address(address: str | bytes) -> str:
    """
    Convert an address to EIP-55 checksum form.

    Args:
        address: Hex string (any case) or 20 raw bytes

    Returns:
        Checksummed address

    Raises:
        ValueError: If the value is not an address
    """
    if not is_address(address):
        raise ValueError(f"Not an address: {address!r}")
    return to_checksum_address(address)


def short_address(address: str | None) -> str:
    """
    Shorten address for logs and messages: 0x1234...5678

    Examples:
        >>> short_address("0x1234567890abcdef1234567890abcdef12345678")
        '0x1234...5678'
        >>> short_address(None)
        '???'
    """
    if not address or len(address) < 10:
        return "???"
    return f"{address[:6]}...{address[-4:]}"
