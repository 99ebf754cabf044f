"""
Interfaces to the two collaborators the core drives.

The core never imports psutil or Textual directly; it talks to whatever
implements these protocols. ``proctop.monitor`` and ``proctop.app`` provide the
real backends, the tests provide fakes.
"""

from typing import Protocol

from proctop.models import ApplicationState, ProcessTable


class SnapshotProvider(Protocol):
    """Source of process snapshots and the means to kill a process."""

    def enumerate(self) -> ProcessTable:
        """Take one best-effort snapshot of the process table."""
        ...

    def terminate(self, pid: int) -> bool:
        """Kill the process with the given id, returning whether it worked."""
        ...


class RenderSurface(Protocol):
    """A terminal display that can paint the state and deliver key presses."""

    @property
    def size(self) -> tuple[int, int]:
        """Get the viewport size as (width, height)."""
        ...

    async def acquire(self) -> None:
        """Enter the alternate, raw-mode display."""
        ...

    def draw(self, state: ApplicationState, size: tuple[int, int]) -> None:
        """Paint one frame: help line plus process table."""
        ...

    async def next_key(self, timeout: float) -> str | None:
        """Wait up to ``timeout`` seconds for a key, None if none arrived."""
        ...

    async def release(self) -> None:
        """Restore the display mode that was active before ``acquire``."""
        ...
