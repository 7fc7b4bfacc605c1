"""
Domain service interfaces.
"""

from boutique.domain.services.i_event_publisher import IEventPublisher

__all__ = ["IEventPublisher"]
