"""Periodic refresh of the process table."""

import time
from collections.abc import Callable

from textual import log

from proctop.interfaces import SnapshotProvider
from proctop.models import ApplicationState

TICK_INTERVAL = 1.0
MIN_INTERVAL = 0.1


class RefreshScheduler:
    """
    Decides when the process table is due for a new snapshot and takes it.

    The scheduler keeps no clock of its own: the time of the last refresh lives
    in ``ApplicationState.last_refresh``. The loop asks for ``remaining()`` to
    bound its wait for input, then calls ``refresh_if_due()`` once per iteration.
    """

    def __init__(
        self,
        provider: SnapshotProvider,
        interval: float = TICK_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the RefreshScheduler.

        Args:
            provider: Where snapshots come from.
            interval: Seconds between refreshes. Default 1.0s.
            clock: Monotonic time source, in seconds.
        """
        self._provider = provider
        self._interval = max(MIN_INTERVAL, interval)
        self._clock = clock

    @property
    def interval(self) -> float:
        """Get the tick interval."""
        return self._interval

    def start(self) -> ApplicationState:
        """Create the initial state from one full snapshot."""
        state = ApplicationState()
        self.refresh(state)
        return state

    def remaining(self, state: ApplicationState) -> float:
        """Seconds until the next refresh is due, never negative."""
        elapsed = self._clock() - state.last_refresh
        return max(0.0, self._interval - elapsed)

    def is_due(self, state: ApplicationState) -> bool:
        """Check whether a full interval has passed since the last refresh."""
        return self._clock() - state.last_refresh >= self._interval

    def refresh(self, state: ApplicationState) -> None:
        """Replace the table with a new snapshot and reset the tick clock."""
        state.table = tuple(self._provider.enumerate())
        state.selection.validate(len(state.table))
        state.last_refresh = self._clock()
        log.debug("refreshed process table", rows=len(state.table))

    def refresh_if_due(self, state: ApplicationState) -> bool:
        """Refresh if the interval has elapsed; return whether it did."""
        if not self.is_due(state):
            return False
        self.refresh(state)
        return True
