"""
Shared fixtures for unit tests.

This module provides common fixtures used across multiple test modules:
- Metadata resolver and notifier fakes
"""

from unittest.mock import AsyncMock

import pytest

from dexmon.models.token import TokenMetadata


@pytest.fixture
def fake_resolver():
    """
    Metadata resolver returning fixed symbols per address.

    Returns:
        AsyncMock: Resolver whose resolve() builds TokenMetadata
    """
    symbols = {}

    async def _resolve(address: str) -> TokenMetadata:
        return TokenMetadata(
            address=address,
            name=f"{symbols.get(address, 'TKN')} Token",
            symbol=symbols.get(address, "TKN"),
            decimals=18,
        )

    resolver = AsyncMock()
    resolver.resolve = AsyncMock(side_effect=_resolve)
    resolver.symbols = symbols
    return resolver


@pytest.fixture
def fake_notifier():
    """
    Notifier recording sent messages.

    Returns:
        AsyncMock: Notifier with send() mocked
    """
    notifier = AsyncMock()
    notifier.send = AsyncMock()
    return notifier
