"""
Click Controller Tests

TRANSITIONS VERIFIED:
=====================
1. Idle --click(n)--> Pinned(n)
2. Pinned(n) --click(n)--> Idle
3. Pinned(n) --click(m)--> Pinned(m)
4. enter / leave only act in Idle
"""

import pytest

from graphdata.contracts.base import NodeNotFoundError
from overlay.state import InteractionState
from overlay.interaction.click import ClickController, ClickState

from tests.fixtures import create_people_graph


@pytest.fixture
def state():
    return InteractionState()


@pytest.fixture
def controller(state):
    return ClickController(state, create_people_graph())


class TestClickTransitions:

    def test_starts_idle(self, controller, state):
        assert controller.mode is ClickState.IDLE
        assert state.clicked_node is None
        assert state.click_mode is False

    def test_click_from_idle_pins(self, controller, state):
        assert controller.click("A") is True
        assert controller.mode is ClickState.PINNED
        assert state.clicked_node == "A"
        assert state.hovered_node == "A"
        assert state.hovered_neighbors == frozenset({"B", "C"})

    def test_reclick_same_node_returns_to_idle(self, controller, state):
        controller.click("A")
        assert controller.click("A") is True
        assert controller.mode is ClickState.IDLE
        assert state.clicked_node is None
        assert state.hovered_node is None
        assert state.hovered_neighbors is None

    def test_click_other_node_moves_pin(self, controller, state):
        controller.click("A")
        controller.click("D")
        assert controller.pinned_node == "D"
        assert state.click_mode is True
        assert state.hovered_node == "D"
        assert state.hovered_neighbors == frozenset({"B"})

    def test_click_unknown_node_keeps_pin(self, controller, state):
        controller.click("A")
        with pytest.raises(NodeNotFoundError):
            controller.click("nope")
        assert state.clicked_node == "A"
        assert state.hovered_node == "A"


class TestHoverWhileIdle:

    def test_enter_hovers(self, controller, state):
        assert controller.enter("B") is True
        assert state.hovered_node == "B"

    def test_leave_clears(self, controller, state):
        controller.enter("B")
        assert controller.leave("B") is True
        assert state.hovered_node is None
        assert state.hovered_neighbors is None

    def test_leave_clears_even_for_another_node(self, controller, state):
        controller.enter("B")
        controller.leave("C")
        assert state.hovered_node is None


class TestHoverSuppressedWhilePinned:

    def test_enter_is_ignored(self, controller, state):
        controller.click("A")
        assert controller.enter("D") is False
        assert state.hovered_node == "A"
        assert state.hovered_neighbors == frozenset({"B", "C"})

    def test_leave_is_ignored(self, controller, state):
        controller.click("A")
        assert controller.leave("A") is False
        assert controller.leave("B") is False
        assert state.hovered_node == "A"


class TestSharedSelection:

    def test_apply_selection_pins_and_hovers(self, controller, state):
        controller.apply_selection("B")
        assert state.click_mode is True
        assert state.clicked_node == "B"
        assert state.hovered_neighbors == frozenset({"A", "D"})

    def test_apply_selection_twice_reports_no_change(self, controller):
        controller.apply_selection("B")
        assert controller.apply_selection("B") is False

    def test_release_from_idle_is_a_no_op(self, controller):
        assert controller.release() is False
