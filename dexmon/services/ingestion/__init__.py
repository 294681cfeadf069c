"""
Ingestion services module.

Pollers, fan-in, consumer and the supervisor running them together.
"""

from .consumer import ConsumerStats, Notifier, PoolAlertConsumer
from .multiplexer import Multiplexer
from .source_poller import PollerTiming, SourcePoller
from .supervisor import Supervisor


__all__ = [
    "ConsumerStats",
    "Multiplexer",
    "Notifier",
    "PollerTiming",
    "PoolAlertConsumer",
    "SourcePoller",
    "Supervisor",
]
