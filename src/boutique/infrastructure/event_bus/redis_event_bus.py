"""
Redis event bus publisher.

Publishes events as JSON messages on `<prefix>:<event>` channels so that
other processes (workers, the commerce framework's subscribers) can react.
"""

import json
from typing import Any, Dict, Optional

import redis.asyncio as aioredis

from boutique.domain.services.i_event_publisher import IEventPublisher
from boutique.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class RedisEventBus(IEventPublisher):
    """
    Redis pub/sub event publisher.

    Example:
        bus = RedisEventBus("redis://localhost:6379")
        await bus.connect()
        await bus.publish("outfit.created", {"id": "..."})
    """

    def __init__(
        self,
        redis_url: str,
        channel_prefix: str = "boutique:events",
        client: Optional[aioredis.Redis] = None,
    ):
        """
        Initialize Redis event bus.

        Args:
            redis_url: Redis connection URL
            channel_prefix: Prefix of the pub/sub channel names
            client: Pre-built client (connect() is then a no-op)
        """
        self.redis_url = redis_url
        self.channel_prefix = channel_prefix
        self._client = client

    async def connect(self) -> None:
        """Create the Redis client."""
        if self._client is not None:
            return

        self._client = aioredis.from_url(
            self.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )

    async def health_check(self) -> bool:
        """
        Check Redis connectivity.

        Returns:
            True if the server answers PING, False otherwise
        """
        if self._client is None:
            return False

        try:
            return bool(await self._client.ping())
        except Exception:
            return False

    async def disconnect(self) -> None:
        """Close the Redis client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def channel_for(self, event: str) -> str:
        return f"{self.channel_prefix}:{event}"

    async def publish(self, event: str, data: Dict[str, Any]) -> None:
        """
        Publish an event.

        Args:
            event: Event name
            data: JSON-serializable payload
        """
        if self._client is None:
            await self.connect()

        message = json.dumps({"event": event, "data": data})
        receivers = await self._client.publish(self.channel_for(event), message)

        metrics.outfit_events_total.labels(event=event).inc()
        logger.debug(f"Published {event} to {receivers} subscriber(s)")
