"""The application loop: draw, wait for a key, dispatch, refresh."""

from enum import Enum

from proctop.dispatch import Action, dispatch
from proctop.interfaces import RenderSurface, SnapshotProvider
from proctop.models import ApplicationState
from proctop.scheduler import RefreshScheduler


class LoopState(Enum):
    """Lifecycle of the application loop."""

    RUNNING = "running"
    TERMINATING = "terminating"


async def run(
    surface: RenderSurface,
    provider: SnapshotProvider,
    scheduler: RefreshScheduler | None = None,
    state: ApplicationState | None = None,
) -> ApplicationState:
    """
    Run the monitor until the quit key is pressed.

    Each iteration paints the state as it stood at the start of the iteration,
    waits for at most one key (bounded by the time left until the next tick),
    dispatches it, then refreshes if the tick is due, whether or not a key
    arrived. The surface is released exactly once, however the loop ends.

    Args:
        surface: Display and keyboard.
        provider: Process snapshots and kills.
        scheduler: Refresh timing. Defaults to a 1s tick over ``provider``.
        state: Starting state. Defaults to one taken from a fresh snapshot.

    Returns:
        The final state.
    """
    if scheduler is None:
        scheduler = RefreshScheduler(provider)
    if state is None:
        state = scheduler.start()

    try:
        await surface.acquire()
        loop_state = LoopState.RUNNING
        while loop_state is LoopState.RUNNING:
            surface.draw(state, surface.size)

            key = await surface.next_key(scheduler.remaining(state))
            if dispatch(key, state, provider) is Action.QUIT:
                loop_state = LoopState.TERMINATING

            scheduler.refresh_if_due(state)
    finally:
        await surface.release()

    return state
