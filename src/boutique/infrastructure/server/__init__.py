"""
HTTP listener lifecycle: bootstrap, in-flight tracking, drain.
"""

from boutique.infrastructure.server.bootstrap import Bootstrapper
from boutique.infrastructure.server.in_flight import (
    InFlightMiddleware,
    InFlightTracker,
)
from boutique.infrastructure.server.listener import ListenerHandle

__all__ = [
    "Bootstrapper",
    "InFlightMiddleware",
    "InFlightTracker",
    "ListenerHandle",
]
