"""
Bot Initialization Module.

This module contains all initialization logic split into focused modules:
- logging: Logger configuration
- services: Pipeline wiring (ledger, pollers, consumer, supervisor)
- shutdown: Graceful shutdown handler
"""

__all__ = []
