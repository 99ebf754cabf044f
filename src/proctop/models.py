"""Data models for proctop."""

from dataclasses import dataclass, field

from proctop.selection import Selection


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """Immutable snapshot of a single process."""

    pid: int
    name: str
    cpu_percent: float  # Instantaneous, 0.0 - 100.0 * core_count
    memory_rss: int  # Bytes


# One snapshot, in the order the provider yielded it
ProcessTable = tuple[ProcessRecord, ...]


@dataclass(slots=True)
class ApplicationState:
    """
    The single mutable state of a running monitor.

    Owns the current process table, the row selection and the time of the last
    refresh. The table is never edited in place; a refresh swaps in a new one.
    """

    table: ProcessTable = ()
    selection: Selection = field(default_factory=Selection)
    last_refresh: float = 0.0

    def advance(self) -> None:
        """Move the selection one row down."""
        self.selection.advance(len(self.table))

    def retreat(self) -> None:
        """Move the selection one row up."""
        self.selection.retreat(len(self.table))

    def selected_record(self) -> ProcessRecord | None:
        """Get the record under the selection in the current table, if any."""
        index = self.selection.current()
        if index is None or index >= len(self.table):
            return None
        return self.table[index]
