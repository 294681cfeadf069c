"""
Ledger client.

Thin wrapper around AsyncWeb3 exposing the three calls the monitor needs:
current head, log range query and read-only contract call. Concurrent
requests are bounded by a semaphore shared by every poller and resolver.
"""

import asyncio
from typing import Any

import aiohttp
from loguru import logger
from web3 import AsyncWeb3

from dexmon.config.constants import BLOCKCHAIN_RPC_TIMEOUT, RPC_MAX_CONCURRENT
from dexmon.utils.exceptions import LEDGER_ERRORS, LedgerConnectionError


class LedgerClient:
    """Read-only access to an EVM ledger over JSON-RPC."""

    def __init__(
        self,
        web3: AsyncWeb3,
        max_concurrent: int = RPC_MAX_CONCURRENT,
    ) -> None:
        """
        Initialize client.

        Args:
            web3: AsyncWeb3 instance
            max_concurrent: Maximum in-flight RPC requests
        """
        self.web3 = web3
        self.rpc_limiter = asyncio.Semaphore(max_concurrent)

    @classmethod
    async def connect(
        cls,
        rpc_url: str,
        timeout: float = BLOCKCHAIN_RPC_TIMEOUT,
        max_concurrent: int = RPC_MAX_CONCURRENT,
    ) -> "LedgerClient":
        """
        Dial RPC endpoint and verify it answers.

        Args:
            rpc_url: HTTP(S) JSON-RPC endpoint
            timeout: HTTP request timeout in seconds
            max_concurrent: Maximum in-flight RPC requests

        Returns:
            Connected client

        Raises:
            LedgerConnectionError: If the endpoint is unreachable
        """
        web3 = AsyncWeb3(
            AsyncWeb3.AsyncHTTPProvider(
                rpc_url,
                request_kwargs={"timeout": aiohttp.ClientTimeout(total=timeout)},
            )
        )
        client = cls(web3, max_concurrent=max_concurrent)

        try:
            connected = await web3.is_connected()
            chain_id = await web3.eth.chain_id if connected else None
        except LEDGER_ERRORS as e:
            await client.close()
            raise LedgerConnectionError(f"Cannot reach RPC {rpc_url}: {e}") from e

        if not connected:
            await client.close()
            raise LedgerConnectionError(f"RPC {rpc_url} is not responding")

        logger.info(f"✅ Connected to RPC {rpc_url} (chain id {chain_id})")
        return client

    async def block_number(self) -> int:
        """Return latest block number."""
        async with self.rpc_limiter:
            return await self.web3.eth.block_number

    async def get_logs(
        self,
        address: str,
        from_block: int,
        to_block: int,
    ) -> list[Any]:
        """
        Fetch logs emitted by a contract in an inclusive block range.

        Args:
            address: Contract address (checksummed)
            from_block: First block
            to_block: Last block

        Returns:
            Raw log records
        """
        async with self.rpc_limiter:
            logs = await self.web3.eth.get_logs({
                "address": address,
                "fromBlock": from_block,
                "toBlock": to_block,
            })
        return list(logs)

    async def call(self, to: str, data: bytes) -> bytes:
        """
        Execute read-only contract call at the latest block.

        Args:
            to: Contract address (checksummed)
            data: ABI-encoded calldata

        Returns:
            Raw return data
        """
        async with self.rpc_limiter:
            result = await self.web3.eth.call({"to": to, "data": data})
        return bytes(result)

    async def close(self) -> None:
        """Release HTTP session held by the provider."""
        disconnect = getattr(self.web3.provider, "disconnect", None)
        if disconnect is None:
            return
        try:
            await disconnect()
        except Exception as e:
            logger.warning(f"Error closing RPC provider: {e}")
