"""proctop - Textual render surface and entry point."""

import asyncio
import sys

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Static

from proctop.dispatch import HELP_TEXT
from proctop.errors import SurfaceError
from proctop.loop import run
from proctop.models import ApplicationState, ProcessRecord, ProcessTable
from proctop.monitor import ProcessMonitor

MARKER = ">>"
# Columns other than Name, plus cell padding and borders
FIXED_WIDTH = 2 + 10 + 10 + 14 + 12
MIN_NAME_WIDTH = 8


def format_memory(size: int) -> str:
    """Format bytes as megabytes with two decimals."""
    return f"{size / 1024 / 1024:.2f} MB"


def format_cpu(percent: float) -> str:
    """Format a CPU percentage with two decimals."""
    return f"{percent:.2f}"


class HelpBar(Static):
    """One-line list of the key bindings."""

    DEFAULT_CSS = """
    HelpBar {
        height: 3;
        border: solid $accent;
        color: $accent;
    }
    """

    def __init__(self, **kwargs) -> None:
        """Initialize HelpBar."""
        super().__init__(HELP_TEXT, **kwargs)

    def on_mount(self) -> None:
        """Title the border once mounted."""
        self.border_title = "Help"


class ProcessPane(Container):
    """Container for the process data table."""

    DEFAULT_CSS = """
    ProcessPane {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize ProcessPane."""
        super().__init__(*args, **kwargs)
        self._shown: ProcessTable | None = None
        self._name_width: int = 0
        self._marked: int | None = None

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        table = DataTable(id="process-table", cursor_type="row", show_cursor=False)
        # Keys go to the app, not to the table's own cursor bindings
        table.can_focus = False
        yield table

    def on_mount(self) -> None:
        """Add the columns once mounted."""
        self.border_title = "Processes"
        table = self.query_one("#process-table", DataTable)
        table.add_column("", key="mark", width=2)
        table.add_column("PID", key="pid", width=10)
        table.add_column("Name", key="name")
        table.add_column("CPU %", key="cpu", width=10)
        table.add_column("Memory (MB)", key="mem", width=14)

    @property
    def marked(self) -> int | None:
        """Get the row currently carrying the highlight."""
        return self._marked

    def show(self, state: ApplicationState, width: int) -> None:
        """
        Bring the table in line with ``state``.

        Rows are rebuilt only when the snapshot itself was replaced (or the
        viewport width changed); otherwise only the highlight moves.
        """
        table = self.query_one("#process-table", DataTable)
        name_width = max(MIN_NAME_WIDTH, width - FIXED_WIDTH)

        if state.table is not self._shown or name_width != self._name_width:
            self._rebuild(table, state.table, name_width)

        index = state.selection.current()
        if index is not None and index >= table.row_count:
            index = None
        self._highlight(table, index)

    def _rebuild(self, table: DataTable, records: ProcessTable, name_width: int) -> None:
        """Replace every row, keyed by row index."""
        table.clear()
        table.show_cursor = False
        self._marked = None
        for index, record in enumerate(records):
            table.add_row(*self._cells(record, name_width), key=str(index))
        self._shown = records
        self._name_width = name_width

    @staticmethod
    def _cells(record: ProcessRecord, name_width: int) -> tuple[str, ...]:
        return (
            "",
            str(record.pid),
            record.name[:name_width],
            format_cpu(record.cpu_percent),
            format_memory(record.memory_rss),
        )

    def _highlight(self, table: DataTable, index: int | None) -> None:
        """Move the marker and cursor to ``index``, or hide them."""
        if index == self._marked:
            return
        if self._marked is not None:
            table.update_cell(str(self._marked), "mark", "")
        if index is None:
            table.show_cursor = False
        else:
            table.update_cell(str(index), "mark", MARKER)
            table.show_cursor = True
            table.move_cursor(row=index)
        self._marked = index


class ProcessApp(App):
    """Textual application that displays the monitor and collects key presses."""

    TITLE = "proctop"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        layout: vertical;
    }
    """

    def __init__(self) -> None:
        """Initialize the ProcessApp."""
        super().__init__()
        self.keys: asyncio.Queue[str] = asyncio.Queue()
        self.ready = asyncio.Event()

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield HelpBar(id="help")
        yield ProcessPane()

    def on_ready(self) -> None:
        """Signal that the first frame is on screen."""
        self.ready.set()

    def on_key(self, event: events.Key) -> None:
        """Queue every key press for the application loop."""
        self.keys.put_nowait(event.key)

    def action_quit(self) -> None:
        """Route Textual's quit binding through the quit key."""
        # App.BINDINGS maps ctrl+q to this action with priority=True; hand it to
        # the loop as a "q" instead of exiting the app underneath it.
        self.keys.put_nowait("q")


class TextualSurface:
    """
    Render surface that runs a ProcessApp alongside the application loop.

    The app runs as a task on the same event loop as the caller; draw() updates
    its widgets directly and next_key() reads from its key queue.
    """

    def __init__(
        self,
        app: ProcessApp | None = None,
        *,
        headless: bool = False,
        size: tuple[int, int] | None = None,
    ) -> None:
        """
        Initialize the TextualSurface.

        Args:
            app: App to drive. A new ProcessApp by default.
            headless: Run without touching the terminal (tests only).
            size: Force the viewport size (tests only).
        """
        self.app = app if app is not None else ProcessApp()
        self._headless = headless
        self._forced_size = size
        self._task: asyncio.Task | None = None

    @property
    def size(self) -> tuple[int, int]:
        """Get the viewport size as (width, height)."""
        size = self.app.size
        return (size.width, size.height)

    @property
    def is_running(self) -> bool:
        """Check if the app task is alive."""
        return self._task is not None and not self._task.done()

    async def acquire(self) -> None:
        """Start the app and wait for its first frame."""
        if self._task is not None:
            return

        self._task = asyncio.create_task(
            self.app.run_async(headless=self._headless, size=self._forced_size),
            name="proctop-ui",
        )
        ready = asyncio.create_task(self.app.ready.wait())
        try:
            await asyncio.wait({self._task, ready}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            ready.cancel()
            await self.release()
            raise

        if not self.app.ready.is_set():
            ready.cancel()
            task, self._task = self._task, None
            error = task.exception() if not task.cancelled() else None
            raise SurfaceError("could not start the terminal display") from error

    def draw(self, state: ApplicationState, size: tuple[int, int]) -> None:
        """Paint the state into the process pane."""
        self._check_running()
        self.app.query_one(ProcessPane).show(state, size[0])

    async def next_key(self, timeout: float) -> str | None:
        """Wait up to ``timeout`` seconds for the next key press."""
        self._check_running()
        try:
            return self.app.keys.get_nowait()
        except asyncio.QueueEmpty:
            pass
        try:
            return await asyncio.wait_for(self.app.keys.get(), timeout)
        except asyncio.TimeoutError:
            return None

    async def release(self) -> None:
        """Stop the app and wait until the terminal is restored."""
        task, self._task = self._task, None
        if task is None:
            return
        if not task.done():
            self.app.exit()
        await task
        if self.app.return_code:
            raise SurfaceError(f"terminal display exited with code {self.app.return_code}")

    def _check_running(self) -> None:
        if not self.is_running:
            raise SurfaceError("terminal display is not running")


def main() -> None:
    """Entry point for proctop."""
    try:
        asyncio.run(run(TextualSurface(), ProcessMonitor()))
    except SurfaceError as error:
        sys.exit(f"proctop: {error}")


if __name__ == "__main__":
    main()
