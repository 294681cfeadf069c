"""Bot utilities"""

from bot.utils.formatters import format_pool_created_message, format_token
from bot.utils.notifications import TelegramNotifier


__all__ = [
    "TelegramNotifier",
    "format_pool_created_message",
    "format_token",
]
