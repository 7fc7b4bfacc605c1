"""
Event bus implementations.
"""

from boutique.infrastructure.event_bus.local_event_bus import LocalEventBus
from boutique.infrastructure.event_bus.redis_event_bus import RedisEventBus

__all__ = ["LocalEventBus", "RedisEventBus"]
