"""Key handling: maps key presses to state transitions."""

from enum import Enum

from textual import log

from proctop.interfaces import SnapshotProvider
from proctop.models import ApplicationState


class Action(Enum):
    """What a key press does."""

    QUIT = "quit"
    DOWN = "down"
    UP = "up"
    KILL = "kill"
    NONE = "none"


# Fixed bindings, keyed by Textual key name
KEYMAP: dict[str, Action] = {
    "q": Action.QUIT,
    "down": Action.DOWN,
    "up": Action.UP,
    "k": Action.KILL,
}

HELP_TEXT = "q: Quit | ↑/↓: Move | k: Kill Process"


def kill_selected(state: ApplicationState, provider: SnapshotProvider) -> bool:
    """
    Kill the process under the selection in the current table.

    The pid is looked up at call time, so it is whatever process occupies the
    selected row now. Failures are not reported to the operator and leave the
    state untouched; the next refresh shows whether the process went away.

    Returns:
        Whether the provider reported success. False if nothing is selected.
    """
    record = state.selected_record()
    if record is None:
        return False

    log.info("killing process", pid=record.pid, name=record.name)
    if provider.terminate(record.pid):
        return True
    log.info("kill failed", pid=record.pid)
    return False


def dispatch(key: str | None, state: ApplicationState, provider: SnapshotProvider) -> Action:
    """Apply one key press to the state and return the action it mapped to."""
    if key is None:
        return Action.NONE

    action = KEYMAP.get(key, Action.NONE)
    if action is Action.DOWN:
        state.advance()
    elif action is Action.UP:
        state.retreat()
    elif action is Action.KILL:
        kill_selected(state, provider)
    return action
