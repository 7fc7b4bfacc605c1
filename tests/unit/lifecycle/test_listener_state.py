"""
Unit tests for ListenerState transitions.

Usage:
    pytest tests/unit/lifecycle/test_listener_state.py -v
"""

import pytest

from shared.lifecycle import ListenerState
from shared.tests.test_base import LaborantTest


class TestListenerState(LaborantTest):
    """Unit tests for listener lifecycle states."""

    component_name = "shared"
    test_category = "unit"

    @pytest.mark.parametrize(
        "current,target",
        [
            (ListenerState.STARTING, ListenerState.ACCEPTING),
            (ListenerState.STARTING, ListenerState.STOPPED),
            (ListenerState.ACCEPTING, ListenerState.DRAINING),
            (ListenerState.DRAINING, ListenerState.STOPPED),
        ],
    )
    def test_allowed_transitions(self, current, target):
        """Test every edge of the lifecycle graph is allowed."""
        self.reporter.info(
            f"Testing {current.value} -> {target.value}", context="Test"
        )
        assert current.can_transition_to(target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (ListenerState.ACCEPTING, ListenerState.STOPPED),
            (ListenerState.ACCEPTING, ListenerState.STARTING),
            (ListenerState.DRAINING, ListenerState.ACCEPTING),
            (ListenerState.STARTING, ListenerState.DRAINING),
            (ListenerState.STOPPED, ListenerState.ACCEPTING),
            (ListenerState.STOPPED, ListenerState.STOPPED),
        ],
    )
    def test_disallowed_transitions(self, current, target):
        """Test listeners never skip draining or leave STOPPED."""
        assert not current.can_transition_to(target)

    def test_only_stopped_is_terminal(self):
        """Test STOPPED is the only terminal state."""
        self.reporter.info("Testing terminal state", context="Test")

        terminal = [state for state in ListenerState if state.is_terminal]

        assert terminal == [ListenerState.STOPPED]
