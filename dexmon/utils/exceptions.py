"""
Exception handling utilities.

Defines the monitor's exception types and groups third-party errors by
handling strategy.
"""

import aiohttp
from web3.exceptions import Web3Exception


class DexMonitorError(Exception):
    """Base exception for pool monitor errors."""
    pass


class ConfigError(DexMonitorError):
    """Raised when settings or an ABI definition are invalid."""
    pass


class LedgerConnectionError(DexMonitorError):
    """Raised when the RPC endpoint cannot be reached at startup."""
    pass


class NotifierError(DexMonitorError):
    """Raised when an alert could not be delivered."""
    pass


class TransientRPCError(DexMonitorError):
    """
    A failed head or log range query.

    Never raised out of a poller: it travels to the consumer inside a
    PollError and the poller retries the same work.
    """

    def __init__(
        self,
        source_name: str,
        operation: str,
        cause: BaseException,
        from_block: int | None = None,
        to_block: int | None = None,
    ) -> None:
        self.source_name = source_name
        self.operation = operation
        self.cause = cause
        self.from_block = from_block
        self.to_block = to_block
        super().__init__(str(self))

    def __str__(self) -> str:
        window = ""
        if self.from_block is not None:
            window = f" [{self.from_block}, {self.to_block}]"
        return (
            f"{self.operation} query failed for {self.source_name}{window}: "
            f"{type(self.cause).__name__}: {self.cause}"
        )


class StopRequested(Exception):
    """Raised inside a task when the shared stop event fires."""
    pass


# Exception categories based on handling strategy

# Retry - the RPC transport or node rejected a request
LEDGER_ERRORS = (
    Web3Exception,        # JSON-RPC errors, bad responses
    aiohttp.ClientError,  # HTTP transport
    ConnectionError,
    TimeoutError,
    OSError,
    ValueError,           # Error payloads surfaced by older web3 providers
)

