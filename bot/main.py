"""
Bot main entry point.

Connects to the ledger, starts one poller per configured DEX factory and
sends a Telegram alert for every new pool.

Initialization is delegated to the modules in bot/initialization/.
"""

import asyncio
import signal
import sys
import warnings
from pathlib import Path


# Suppress eth_utils network warnings about invalid ChainId
# Must be set BEFORE importing any modules that use eth_utils
warnings.filterwarnings(
    "ignore",
    message=".*does not have a valid ChainId.*",
    category=UserWarning,
)

from aiogram import Bot  # noqa: E402
from aiogram.client.default import DefaultBotProperties  # noqa: E402
from loguru import logger  # noqa: E402


# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bot.initialization.logging import setup_logging  # noqa: E402
from bot.initialization.services import build_supervisor  # noqa: E402
from bot.initialization.shutdown import shutdown_handler  # noqa: E402
from dexmon.config.settings import load_settings  # noqa: E402
from dexmon.services.blockchain.ledger_client import LedgerClient  # noqa: E402
from dexmon.utils.exceptions import ConfigError, LedgerConnectionError  # noqa: E402


def install_signal_handlers(stop: asyncio.Event) -> None:
    """Set stop on SIGINT/SIGTERM."""
    loop = asyncio.get_running_loop()

    def _on_signal(sig: signal.Signals) -> None:
        logger.info(f"Received {sig.name}, shutting down...")
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _on_signal, sig)
        except NotImplementedError:
            # Windows event loops; KeyboardInterrupt still stops asyncio.run
            pass


async def main() -> int:
    """
    Initialize and run the monitor.

    Returns:
        Process exit status: 0 after a requested stop, 1 on failure
    """
    try:
        settings = load_settings()
    except ConfigError as e:
        setup_logging(log_file="")
        logger.error(str(e))
        return 1

    setup_logging(settings.log_level, settings.log_file)

    stop = asyncio.Event()
    install_signal_handlers(stop)

    try:
        ledger = await LedgerClient.connect(
            settings.rpc_url,
            timeout=settings.rpc_timeout,
            max_concurrent=settings.rpc_max_concurrent,
        )
    except LedgerConnectionError as e:
        logger.error(f"Startup failed: {e}")
        return 1

    bot = Bot(
        token=settings.telegram_bot_token,
        default=DefaultBotProperties(),  # plain text alerts
    )

    try:
        supervisor = build_supervisor(settings, ledger, bot, stop)
        await supervisor.run()
    except ConfigError as e:
        logger.error(f"Startup failed: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Monitor crashed: {e}")
        return 1
    finally:
        await shutdown_handler(ledger, bot)

    logger.info("Monitor stopped")
    return 0


def run() -> None:
    """Console script entry point."""
    try:
        exit_code = asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Monitor stopped by user (KeyboardInterrupt)")
        exit_code = 0
    sys.exit(exit_code)


if __name__ == "__main__":
    run()
