"""
Service lifecycle management.

Handles listener state tracking and graceful shutdown of the server.
"""

from shared.lifecycle.exceptions import (
    InvalidStateTransitionError,
    LifecycleError,
    ShutdownError,
    StartupError,
)
from shared.lifecycle.graceful_shutdown import (
    DrainableListener,
    ShutdownConfig,
    ShutdownCoordinator,
)
from shared.lifecycle.listener_state import ListenerState

__all__ = [
    "DrainableListener",
    "InvalidStateTransitionError",
    "LifecycleError",
    "ListenerState",
    "ShutdownConfig",
    "ShutdownCoordinator",
    "ShutdownError",
    "StartupError",
]
