"""
Bot Initialization - Logging Module.

Module: logging.py
Configures loguru logger for the monitor.
Sets up log rotation and retention policies.
"""

import sys

from loguru import logger

from dexmon.config.constants import DEFAULT_LOG_FILE, LOG_RETENTION, LOG_ROTATION


def setup_logging(level: str = "INFO", log_file: str = DEFAULT_LOG_FILE) -> None:
    """
    Configure stderr sink and, optionally, a rotating file sink.

    Args:
        level: Minimum level for both sinks
        log_file: Log file path; empty string disables the file sink
    """
    logger.remove()
    logger.add(sys.stderr, level=level)

    if log_file:
        logger.add(
            log_file,
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
            level=level,
            encoding="utf-8",
        )

    logger.info("Starting DEX pool monitor...")
