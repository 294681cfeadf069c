"""
Bot Initialization - Shutdown Module.

Module: shutdown.py
Handles graceful shutdown of the monitor.
Closes the RPC provider and the Telegram bot session.
"""

from aiogram import Bot
from loguru import logger

from dexmon.services.blockchain.ledger_client import LedgerClient


async def shutdown_handler(ledger: LedgerClient | None, bot: Bot | None) -> None:
    """Handle graceful shutdown."""
    logger.info("Graceful shutdown initiated...")

    if ledger is not None:
        await ledger.close()
        logger.info("RPC provider closed")

    if bot is not None:
        try:
            await bot.session.close()
            logger.info("Telegram session closed")
        except Exception as e:
            logger.warning(f"Error closing Telegram session: {e}")

    logger.info("Graceful shutdown complete")
