"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

import re

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dexmon.config.constants import (
    BLOCKCHAIN_RPC_TIMEOUT,
    DEFAULT_LOG_FILE,
    DEFAULT_RPC_URL,
    POLL_CAUGHT_UP_DELAY,
    POLL_ERROR_RETRY_DELAY,
    POLL_ERROR_RETRY_MAX_DELAY,
    POLL_IDLE_DELAY,
    POLL_LOOKBACK_BLOCKS,
    POLL_MAX_BLOCK_RANGE,
    RPC_MAX_CONCURRENT,
)
from dexmon.config.dexes import DEFAULT_DEXES
from dexmon.utils.exceptions import ConfigError


def _check_eth_address(v: str) -> str:
    if not v.startswith('0x') or len(v) != 42:
        raise ValueError(
            f'Invalid Ethereum address: {v}. '
            'Must start with 0x and be 42 characters long.'
        )
    try:
        int(v[2:], 16)
    except ValueError as exc:
        raise ValueError(f'Invalid Ethereum address format: {v}') from exc
    return v


class SourceSettings(BaseModel):
    """A single pool factory to monitor."""

    name: str = Field(..., min_length=1, description="Unique source name")
    factory_address: str = Field(..., description="Pool factory contract address")
    display_name: str = ""
    url: str = ""
    trade_url_template: str = Field(
        default="",
        description="Swap URL with {token_a} and {token_b} placeholders"
    )
    start_block: int | None = Field(
        default=None,
        ge=0,
        description="First block to scan; unset means lookback from head"
    )

    @field_validator('factory_address')
    @classmethod
    def validate_factory_address(cls, v: str) -> str:
        """Validate factory contract address."""
        return _check_eth_address(v)

    @field_validator('trade_url_template')
    @classmethod
    def validate_trade_url_template(cls, v: str) -> str:
        """Only {token_a} and {token_b} placeholders are allowed."""
        try:
            v.format(token_a="", token_b="")
        except (KeyError, IndexError, ValueError, AttributeError) as exc:
            raise ValueError(f'Invalid trade URL template: {v}') from exc
        return v


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot
    telegram_bot_token: str
    telegram_chat_id: int = Field(
        ...,
        description="Chat receiving pool alerts (negative for groups/channels)"
    )

    # Blockchain RPC
    rpc_url: str = DEFAULT_RPC_URL
    rpc_timeout: int = Field(default=BLOCKCHAIN_RPC_TIMEOUT, gt=0)
    rpc_max_concurrent: int = Field(default=RPC_MAX_CONCURRENT, ge=1)

    # Monitored factories (JSON list in SOURCES)
    sources: list[SourceSettings] = Field(
        default_factory=lambda: [SourceSettings(**dex) for dex in DEFAULT_DEXES]
    )

    # Polling
    max_block_range: int = Field(
        default=POLL_MAX_BLOCK_RANGE, ge=1, description="Blocks per log query"
    )
    lookback_blocks: int = Field(
        default=POLL_LOOKBACK_BLOCKS, ge=1, description="Blocks behind head on startup"
    )
    idle_poll_delay: float = Field(default=POLL_IDLE_DELAY, ge=0)
    caught_up_delay: float = Field(default=POLL_CAUGHT_UP_DELAY, ge=0)
    error_retry_delay: float = Field(default=POLL_ERROR_RETRY_DELAY, ge=0)
    error_retry_max_delay: float = Field(default=POLL_ERROR_RETRY_MAX_DELAY, ge=0)

    # Logging
    log_level: str = "INFO"
    log_file: str = DEFAULT_LOG_FILE  # Empty string disables the file sink

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode='after')
    def validate_sources(self) -> 'Settings':
        """Require at least one source and unique source names."""
        if not self.sources:
            raise ValueError('At least one source must be configured')
        names = [source.name for source in self.sources]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f'Duplicate source names: {", ".join(duplicates)}')
        if self.error_retry_max_delay < self.error_retry_delay:
            raise ValueError('ERROR_RETRY_MAX_DELAY must be >= ERROR_RETRY_DELAY')
        return self

    @field_validator('telegram_bot_token')
    @classmethod
    def validate_bot_token(cls, v: str) -> str:
        """Validate Telegram bot token format."""
        pattern = r'^\d+:[A-Za-z0-9_-]{35}$'
        if not re.match(pattern, v):
            raise ValueError(
                'Invalid Telegram bot token format. '
                'Expected format: 123456789:ABCdefGHIjklMNOpqrsTUVwxyz'
            )
        return v

    @field_validator('rpc_url')
    @classmethod
    def validate_rpc_url(cls, v: str) -> str:
        """Validate RPC URL scheme."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('RPC_URL must start with http:// or https://')
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level name."""
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f'Unknown log level: {v}')
        return level


def load_settings(**overrides) -> Settings:
    """
    Load settings from the environment.

    Args:
        **overrides: Explicit values taking precedence over the environment

    Returns:
        Validated settings

    Raises:
        ConfigError: If a required value is missing or invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
