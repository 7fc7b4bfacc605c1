"""
Listener lifecycle states.

    STARTING --> ACCEPTING --> DRAINING --> STOPPED
        |                                      ^
        +--------------------------------------+
                  (startup failure only)
"""

from enum import Enum


class ListenerState(Enum):
    """Lifecycle state of a bound network listener."""

    STARTING = "starting"
    ACCEPTING = "accepting"
    DRAINING = "draining"
    STOPPED = "stopped"

    def can_transition_to(self, target: "ListenerState") -> bool:
        """
        Check whether moving to target is a legal transition.

        Args:
            target: Desired next state

        Returns:
            True if the transition exists
        """
        return target in _TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        """True once the listener can no longer change state."""
        return not _TRANSITIONS[self]


_TRANSITIONS = {
    ListenerState.STARTING: frozenset(
        {ListenerState.ACCEPTING, ListenerState.STOPPED}
    ),
    ListenerState.ACCEPTING: frozenset({ListenerState.DRAINING}),
    ListenerState.DRAINING: frozenset({ListenerState.STOPPED}),
    ListenerState.STOPPED: frozenset(),
}
