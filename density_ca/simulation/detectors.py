"""Termination detectors observed once per simulation step."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Hashable, Sequence
from typing import Any


class CycleDetector:
    """Detect a CA state repeating within the last ``window`` observed states.

    Only a rolling window of history is kept, so a cycle whose period exceeds
    ``window`` goes unnoticed. Keep ``window`` above the step budget for exact
    detection.
    """

    def __init__(self, window: int) -> None:
        if window < 2:
            raise ValueError("window must be >= 2")
        self.window = window
        self._history: deque[Hashable] = deque()
        self._last_seen: dict[Hashable, int] = {}
        self._observed = 0
        self.period: int | None = None

    def observe(self, state: Hashable) -> bool:
        """Record ``state`` and return True if it was seen within the window."""
        index = self._observed
        self._observed += 1
        previous = self._last_seen.get(state)
        if previous is not None and index - previous <= self.window:
            self.period = index - previous
            return True

        self._history.append(state)
        self._last_seen[state] = index
        if len(self._history) > self.window:
            expired = self._history.popleft()
            if self._last_seen.get(expired) == index - len(self._history):
                del self._last_seen[expired]
        return False


class HomogeneityDetector:
    """Detect whether every cell holds the same settled value."""

    def __init__(self, settled_value: Callable[[Any], int | None]) -> None:
        self._settled_value = settled_value
        self.value: int | None = None

    def observe(self, cells: Sequence[Any]) -> bool:
        """Return True only when ``cells`` is non-empty and uniformly settled."""
        if not cells:
            return False
        first = self._settled_value(cells[0])
        if first is None:
            return False
        for cell in cells[1:]:
            if self._settled_value(cell) != first:
                return False
        self.value = first
        return True
