"""
Event publisher service interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class IEventPublisher(ABC):
    """
    Abstract service interface for publishing domain events.

    Other services subscribe to events such as `outfit.created` instead of
    being called directly.
    """

    @abstractmethod
    async def publish(self, event: str, data: Dict[str, Any]) -> None:
        """
        Publish an event.

        Args:
            event: Event name (e.g., "outfit.created")
            data: JSON-serializable payload
        """
