"""Unit tests for settings loading."""

import json

import pytest

from dexmon.config.constants import POLL_MAX_BLOCK_RANGE
from dexmon.config.dexes import HYPERSWAP_FACTORY_ADDRESS, PRJX_FACTORY_ADDRESS
from dexmon.config.settings import load_settings
from dexmon.utils.exceptions import ConfigError


class TestSettings:
    """Tests for load_settings."""

    def test_defaults(self, monkeypatch):
        """Without SOURCES the Prjx and Hyperswap factories are monitored."""
        monkeypatch.delenv("SOURCES", raising=False)

        settings = load_settings()

        assert [s.name for s in settings.sources] == ["prjx", "hyperswap"]
        assert settings.sources[0].factory_address == PRJX_FACTORY_ADDRESS
        assert settings.sources[1].factory_address == HYPERSWAP_FACTORY_ADDRESS
        assert settings.sources[0].start_block is None
        assert settings.max_block_range == POLL_MAX_BLOCK_RANGE
        assert settings.rpc_url == "https://rpc.hyperliquid.xyz/evm"
        assert settings.telegram_chat_id == -1001234567890

    def test_sources_from_json_env(self, monkeypatch):
        monkeypatch.setenv("SOURCES", json.dumps([
            {"name": "custom", "factory_address": "0x" + "ab" * 20, "start_block": 12},
        ]))

        settings = load_settings()

        assert len(settings.sources) == 1
        assert settings.sources[0].name == "custom"
        assert settings.sources[0].start_block == 12

    @pytest.mark.parametrize(
        "token",
        ["", "not-a-token", "123:short", "abc:ABCdefGHIjklMNOpqrsTUVwxyz123456789"],
    )
    def test_invalid_bot_token(self, token):
        with pytest.raises(ConfigError):
            load_settings(telegram_bot_token=token)

    def test_invalid_factory_address(self):
        with pytest.raises(ConfigError):
            load_settings(sources=[{"name": "bad", "factory_address": "0x1234"}])

    @pytest.mark.parametrize(
        "template",
        [
            "https://swap.example/?token={token}",
            "https://swap.example/{0}/{1}",
            "https://swap.example/?in={token_a",
        ],
    )
    def test_invalid_trade_url_template(self, template):
        """Unknown or malformed placeholders are rejected at load time."""
        source = {
            "name": "bad",
            "factory_address": PRJX_FACTORY_ADDRESS,
            "trade_url_template": template,
        }
        with pytest.raises(ConfigError, match="Invalid trade URL template"):
            load_settings(sources=[source])

    def test_trade_url_template_placeholders_accepted(self):
        source = {
            "name": "ok",
            "factory_address": PRJX_FACTORY_ADDRESS,
            "trade_url_template": "https://swap.example/?in={token_a}&out={token_b}",
        }

        settings = load_settings(sources=[source])

        assert settings.sources[0].trade_url_template.endswith("{token_b}")

    def test_duplicate_source_names(self):
        source = {"name": "prjx", "factory_address": PRJX_FACTORY_ADDRESS}
        with pytest.raises(ConfigError, match="Duplicate source names"):
            load_settings(sources=[source, source])

    def test_empty_sources(self):
        with pytest.raises(ConfigError):
            load_settings(sources=[])

    def test_negative_start_block(self):
        with pytest.raises(ConfigError):
            load_settings(sources=[
                {"name": "x", "factory_address": PRJX_FACTORY_ADDRESS, "start_block": -1},
            ])

    def test_rpc_url_scheme(self):
        with pytest.raises(ConfigError):
            load_settings(rpc_url="ws://localhost:8546")

    def test_log_level_normalized(self):
        assert load_settings(log_level="debug").log_level == "DEBUG"
