"""Row selection with wrap-around navigation."""


class Selection:
    """
    Tracks which row of the process table is highlighted.

    The index is either ``None`` (nothing highlighted) or a position in a table
    of the length passed to each call. Moving past either end wraps around.
    """

    __slots__ = ("_index",)

    def __init__(self, index: int | None = None) -> None:
        """Initialize Selection."""
        self._index = index

    def __repr__(self) -> str:
        return f"Selection({self._index!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selection):
            return NotImplemented
        return self._index == other._index

    def current(self) -> int | None:
        """Get the selected index, or None."""
        return self._index

    def advance(self, length: int) -> None:
        """Select the next row, wrapping to the first after the last."""
        if length <= 0:
            return
        if self._index is None:
            self._index = 0
        else:
            self._index = (self._index + 1) % length

    def retreat(self, length: int) -> None:
        """Select the previous row, wrapping to the last before the first."""
        if length <= 0:
            return
        if self._index is None:
            self._index = 0
        else:
            self._index = (self._index - 1) % length

    def validate(self, length: int) -> None:
        """
        Re-check the selection against a freshly replaced table.

        A stale index that no longer fits (the table shrank or emptied) is
        dropped rather than clamped.
        """
        if self._index is not None and not 0 <= self._index < length:
            self._index = None
