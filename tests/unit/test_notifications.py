"""Unit tests for Telegram delivery."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.exceptions import TelegramAPIError

from bot.utils.notifications import TelegramNotifier
from dexmon.utils.exceptions import NotifierError


class TestTelegramNotifier:
    """Tests for TelegramNotifier.send."""

    @pytest.mark.asyncio
    async def test_send(self, mock_bot):
        await TelegramNotifier(mock_bot).send(-100, "hello")

        mock_bot.send_message.assert_awaited_once_with(chat_id=-100, text="hello")

    @pytest.mark.asyncio
    async def test_api_error(self, mock_bot):
        mock_bot.send_message.side_effect = TelegramAPIError(
            method=MagicMock(), message="Bad Request: chat not found",
        )

        with pytest.raises(NotifierError, match="chat not found"):
            await TelegramNotifier(mock_bot).send(-100, "hello")

    @pytest.mark.asyncio
    async def test_timeout(self, mock_bot):
        async def _slow(**kwargs):
            await asyncio.sleep(1)

        mock_bot.send_message = AsyncMock(side_effect=_slow)

        with pytest.raises(NotifierError, match="timeout"):
            await TelegramNotifier(mock_bot, timeout=0.01).send(-100, "hello")
