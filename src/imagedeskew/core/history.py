"""Linear undo/redo log of viewport and crop snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import HISTORY_LIMIT
from .geometry import Rect, Size


@dataclass(frozen=True)
class Snapshot:
    """A point in the interaction history."""

    scale: float
    offset: Size
    crop_rect: Rect


class HistoryLog:
    """Append-only snapshot sequence addressed by a cursor.

    ``cursor`` counts the committed entries reachable by undo; the entry at
    ``cursor - 1`` is the current state.  The first entry is the initial state
    of the session, so undo stops once the cursor reaches it.
    """

    def __init__(self, limit: int | None = HISTORY_LIMIT) -> None:
        self._entries: list[Snapshot] = []
        self._cursor = 0
        self._limit = limit

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> tuple[Snapshot, ...]:
        return tuple(self._entries)

    @property
    def current(self) -> Snapshot | None:
        if self._cursor == 0:
            return None
        return self._entries[self._cursor - 1]

    @property
    def can_undo(self) -> bool:
        return self._cursor > 1

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._cursor = 0

    def push(self, snapshot: Snapshot) -> None:
        """Append *snapshot*, discarding any redo entries past the cursor."""

        if self._cursor < len(self._entries):
            del self._entries[self._cursor:]
        self._entries.append(snapshot)
        if self._limit is not None and len(self._entries) > self._limit:
            del self._entries[: len(self._entries) - self._limit]
        self._cursor = len(self._entries)

    def undo(self) -> Snapshot | None:
        """Step back one entry and return the snapshot to restore."""

        if not self.can_undo:
            return None
        self._cursor -= 1
        return self._entries[self._cursor - 1]

    def redo(self) -> Snapshot | None:
        """Step forward one entry and return the snapshot to restore."""

        if not self.can_redo:
            return None
        snapshot = self._entries[self._cursor]
        self._cursor += 1
        return snapshot


__all__ = ["HistoryLog", "Snapshot"]
