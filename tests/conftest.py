"""Shared fakes for proctop tests."""

import pytest

from proctop.models import ApplicationState, ProcessRecord, ProcessTable


def make_table(*pids: int) -> ProcessTable:
    """Build a process table with one record per pid."""
    return tuple(
        ProcessRecord(pid=pid, name=f"proc{pid}", cpu_percent=float(pid), memory_rss=pid * 1024)
        for pid in pids
    )


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider:
    """Snapshot provider that serves queued tables and records kills."""

    def __init__(self, *tables: ProcessTable, kill_succeeds: bool = True) -> None:
        self._tables = list(tables) or [()]
        self.enumerate_calls = 0
        self.terminated: list[int] = []
        self.kill_succeeds = kill_succeeds

    def enumerate(self) -> ProcessTable:
        self.enumerate_calls += 1
        # Keep serving the last table once the queue runs dry
        if len(self._tables) > 1:
            return self._tables.pop(0)
        return self._tables[0]

    def terminate(self, pid: int) -> bool:
        self.terminated.append(pid)
        return self.kill_succeeds


class FakeSurface:
    """Render surface that replays scripted keys and records every call."""

    def __init__(self, keys=(), clock: FakeClock | None = None, size=(80, 24)) -> None:
        self._keys = list(keys)
        self._clock = clock
        self._size = size
        self.calls: list[str] = []
        self.frames: list[tuple[ProcessTable, int | None]] = []
        self.timeouts: list[float] = []
        self.acquired = 0
        self.released = 0

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    async def acquire(self) -> None:
        self.acquired += 1
        self.calls.append("acquire")

    def draw(self, state: ApplicationState, size: tuple[int, int]) -> None:
        self.calls.append("draw")
        self.frames.append((state.table, state.selection.current()))

    async def next_key(self, timeout: float) -> str | None:
        """
        Pop the next scripted key.

        A scripted None stands for a timeout: the fake clock jumps ahead by the
        full wait, as if nothing arrived before the tick.
        """
        self.calls.append("wait")
        self.timeouts.append(timeout)
        if not self._keys:
            return "q"
        key = self._keys.pop(0)
        if key is None and self._clock is not None:
            self._clock.advance(timeout)
        return key

    async def release(self) -> None:
        self.released += 1
        self.calls.append("release")


@pytest.fixture
def clock() -> FakeClock:
    """A fake clock starting at t=100s."""
    return FakeClock()


@pytest.fixture
def three_rows() -> ProcessTable:
    """A table of pids 1, 2 and 3."""
    return make_table(1, 2, 3)
