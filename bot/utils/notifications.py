"""
Notification utilities.

Telegram delivery for pool alerts.
"""

import asyncio

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from loguru import logger

from dexmon.config.constants import TELEGRAM_TIMEOUT
from dexmon.utils.exceptions import NotifierError


class TelegramNotifier:
    """Sends plain-text messages through a Telegram bot."""

    def __init__(self, bot: Bot, timeout: float = TELEGRAM_TIMEOUT) -> None:
        """
        Initialize notifier.

        Args:
            bot: Bot instance
            timeout: Per-message timeout in seconds
        """
        self.bot = bot
        self.timeout = timeout

    async def send(self, destination: int | str, text: str) -> None:
        """
        Send message to a chat.

        Args:
            destination: Chat ID or @channel username
            text: Message text

        Raises:
            NotifierError: If Telegram rejected the message or timed out
        """
        try:
            await asyncio.wait_for(
                self.bot.send_message(chat_id=destination, text=text),
                timeout=self.timeout,
            )
        except TimeoutError as e:
            raise NotifierError(
                f"Telegram timeout after {self.timeout}s (chat {destination})"
            ) from e
        except TelegramAPIError as e:
            raise NotifierError(f"Telegram API error (chat {destination}): {e}") from e

        logger.debug(f"Message delivered to chat {destination}")
