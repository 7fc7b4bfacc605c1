"""
In-process event bus.

Delivers events to subscribers registered in the same process. Used in
development and tests, and whenever no Redis event bus is configured.
"""

from collections import defaultdict
from typing import Any, Awaitable, Callable, DefaultDict, Dict, List

from boutique.domain.services.i_event_publisher import IEventPublisher
from boutique.infrastructure.monitoring import get_logger, metrics

EventHandler = Callable[[Dict[str, Any]], Awaitable[None]]

logger = get_logger(__name__)


class LocalEventBus(IEventPublisher):
    """
    Event bus dispatching to in-process subscribers.

    A failing subscriber is logged and does not affect the publisher or
    the other subscribers.
    """

    def __init__(self):
        self._subscribers: DefaultDict[str, List[EventHandler]] = defaultdict(list)

    def subscribe(self, event: str, handler: EventHandler) -> None:
        """
        Register a handler for an event.

        Args:
            event: Event name (e.g., "outfit.created")
            handler: Async callable receiving the event payload
        """
        self._subscribers[event].append(handler)

    def unsubscribe(self, event: str, handler: EventHandler) -> None:
        if handler in self._subscribers[event]:
            self._subscribers[event].remove(handler)

    async def publish(self, event: str, data: Dict[str, Any]) -> None:
        """
        Publish an event to every subscriber, in registration order.

        Args:
            event: Event name
            data: Event payload
        """
        metrics.outfit_events_total.labels(event=event).inc()
        logger.debug(f"Publishing {event}: {data}")

        for handler in list(self._subscribers[event]):
            try:
                await handler(data)
            except Exception:
                logger.exception(f"Subscriber for {event} failed")
