"""
Application constants.

Centralized constants for the pool monitor.
"""

# ========================================================================
# BLOCKCHAIN CONSTANTS
# ========================================================================

DEFAULT_RPC_URL = "https://rpc.hyperliquid.xyz/evm"

# Blockchain operation timeouts (in seconds)
BLOCKCHAIN_RPC_TIMEOUT = 30  # RPC provider HTTP timeout

# RPC rate limiting
RPC_MAX_CONCURRENT = 10  # Maximum concurrent RPC calls

# ========================================================================
# POLLING CONSTANTS
# ========================================================================

# Log range queries
POLL_MAX_BLOCK_RANGE = 500  # Maximum blocks per eth_getLogs window (inclusive)
POLL_LOOKBACK_BLOCKS = 500  # Blocks scanned behind the head when no start block is set

# Poll delays (in seconds)
POLL_IDLE_DELAY = 1.0  # Cursor is ahead of the head
POLL_CAUGHT_UP_DELAY = 5.0  # Last window reached the head
POLL_ERROR_RETRY_DELAY = 1.0  # First retry after a failed RPC call (doubles per failure)
POLL_ERROR_RETRY_MAX_DELAY = 30.0  # Upper bound for the retry delay

# ========================================================================
# TELEGRAM BOT CONSTANTS
# ========================================================================

# Telegram bot timeouts (in seconds)
TELEGRAM_TIMEOUT = 10.0  # Telegram API operations timeout

# ========================================================================
# LOGGING CONSTANTS
# ========================================================================

DEFAULT_LOG_FILE = "logs/dexmon.log"
LOG_ROTATION = "1 day"
LOG_RETENTION = "7 days"
