"""Tests for key dispatch and the kill action."""

import pytest

from proctop.dispatch import KEYMAP, Action, dispatch, kill_selected
from proctop.models import ApplicationState
from proctop.selection import Selection

from conftest import FakeProvider


def test_keymap_bindings():
    """Test the fixed key bindings."""
    assert KEYMAP == {
        "q": Action.QUIT,
        "down": Action.DOWN,
        "up": Action.UP,
        "k": Action.KILL,
    }


class TestDispatch:
    """Tests for dispatch."""

    def test_no_key_does_nothing(self, three_rows):
        """Test a timeout (no key) maps to no action."""
        state = ApplicationState(table=three_rows)
        provider = FakeProvider()

        assert dispatch(None, state, provider) is Action.NONE
        assert state.selection.current() is None
        assert provider.terminated == []

    def test_quit(self, three_rows):
        """Test q maps to quit without touching the state."""
        state = ApplicationState(table=three_rows, selection=Selection(1))

        assert dispatch("q", state, FakeProvider()) is Action.QUIT
        assert state.selection.current() == 1

    def test_down_advances(self, three_rows):
        """Test the down arrow advances the selection."""
        state = ApplicationState(table=three_rows)

        assert dispatch("down", state, FakeProvider()) is Action.DOWN
        assert state.selection.current() == 0

    def test_up_retreats(self, three_rows):
        """Test the up arrow moves the selection up, wrapping at the top."""
        state = ApplicationState(table=three_rows, selection=Selection(0))

        assert dispatch("up", state, FakeProvider()) is Action.UP
        assert state.selection.current() == 2

    @pytest.mark.parametrize("key", ["j", "Q", "K", "enter", "escape", "left"])
    def test_other_keys_do_nothing(self, key, three_rows):
        """Test unbound keys have no effect."""
        state = ApplicationState(table=three_rows, selection=Selection(1))
        provider = FakeProvider()

        assert dispatch(key, state, provider) is Action.NONE
        assert state.selection.current() == 1
        assert provider.terminated == []

    def test_kill_key(self, three_rows):
        """Test k kills the process on the selected row."""
        state = ApplicationState(table=three_rows, selection=Selection(1))
        provider = FakeProvider()

        assert dispatch("k", state, provider) is Action.KILL
        assert provider.terminated == [2]


class TestKillSelected:
    """Tests for kill_selected."""

    def test_nothing_selected_never_terminates(self, three_rows):
        """Test killing with no selection never reaches the provider."""
        state = ApplicationState(table=three_rows)
        provider = FakeProvider()

        assert kill_selected(state, provider) is False
        assert provider.terminated == []

    def test_resolves_pid_in_current_table(self, three_rows):
        """Test the pid comes from the table held at kill time."""
        state = ApplicationState(table=three_rows, selection=Selection(0))
        provider = FakeProvider()

        assert kill_selected(state, provider) is True
        assert provider.terminated == [1]

    def test_failure_is_swallowed(self, three_rows):
        """Test a failed kill returns False and leaves the state alone."""
        state = ApplicationState(table=three_rows, selection=Selection(2), last_refresh=5.0)
        provider = FakeProvider(kill_succeeds=False)

        assert kill_selected(state, provider) is False
        assert provider.terminated == [3]
        assert state.table == three_rows
        assert state.selection.current() == 2
        assert state.last_refresh == 5.0

    def test_empty_table(self):
        """Test killing on an empty table is a no-op."""
        state = ApplicationState()
        provider = FakeProvider()

        assert kill_selected(state, provider) is False
        assert provider.terminated == []
