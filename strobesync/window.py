"""Sliding-window minimum tracking with amortised O(1) updates.

The tracker keeps the last ``size`` fingerprints and the offset of their
minimum, counted from the oldest resident value.  A shift only rescans the
window when the outgoing value was the minimum, so over a long stream the
cost per step is constant on average.

Ties are resolved by a :class:`TieBreak` policy.  The same comparison is used
when a new value arrives and when the window is rescanned, so the incremental
result always matches a from-scratch scan of the same window.
"""

from __future__ import annotations

import logging
import operator
from collections import deque
from dataclasses import dataclass
from enum import Enum
from itertools import islice
from typing import Any, Deque, Iterable, Tuple

from strobesync.errors import InsufficientInput, InvalidConfiguration

logger = logging.getLogger(__name__)


class TieBreak(Enum):
    """Which of several equal minima the tracker reports."""

    LEFTMOST = "leftmost"    # lowest offset, the oldest value
    RIGHTMOST = "rightmost"  # highest offset, the newest value

    def replaces(self, candidate: Any, current: Any) -> bool:
        """True when *candidate* takes over from *current* as the minimum."""
        if self is TieBreak.LEFTMOST:
            return operator.lt(candidate, current)
        return operator.le(candidate, current)


@dataclass(frozen=True)
class TrackedMinimum:
    """Minimum of the current window and its offset from the window front."""

    value: Any
    offset: int


class WindowMinTracker:
    """Fixed-size window of fingerprints with its current minimum."""

    def __init__(self, size: int, tie_break: TieBreak = TieBreak.LEFTMOST):
        if size < 1:
            raise InvalidConfiguration(f"Window size must be at least 1, got {size}")
        self.size = size
        self.tie_break = tie_break
        self.rescans = 0
        self._window: Deque[Any] = deque(maxlen=size)
        self._value: Any = None
        self._offset = -1

    @property
    def primed(self) -> bool:
        return self._offset >= 0

    @property
    def value(self) -> Any:
        return self._value

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def minimum(self) -> TrackedMinimum:
        return TrackedMinimum(self._value, self._offset)

    def snapshot(self) -> Tuple[Any, ...]:
        """Copy of the window contents, oldest first."""
        return tuple(self._window)

    def prime(self, values: Iterable[Any]) -> TrackedMinimum:
        """Fill the window with the next ``size`` values of *values*.

        An iterator is advanced by exactly ``size`` items.  Raises
        :class:`InsufficientInput` when fewer are available.
        """
        window = deque(islice(values, self.size), maxlen=self.size)
        if len(window) < self.size:
            raise InsufficientInput(
                f"Need {self.size} values to prime the window, got {len(window)}"
            )
        self._window = window
        self.rescans = 0
        self._scan()
        logger.debug(
            "Primed %s window of size %d, minimum %r at offset %d",
            self.tie_break.value, self.size, self._value, self._offset,
        )
        return self.minimum

    def advance(self, new_value: Any) -> TrackedMinimum:
        """Shift the window by one, appending *new_value*."""
        if not self.primed:
            raise RuntimeError("Window tracker must be primed before it can advance")

        self._window.append(new_value)  # maxlen drops the oldest value

        if self.tie_break.replaces(new_value, self._value):
            self._value = new_value
            self._offset = self.size - 1
        elif self._offset == 0:
            self.rescans += 1
            self._scan()
        else:
            self._offset -= 1
        return self.minimum

    def _scan(self) -> None:
        replaces = self.tie_break.replaces
        best_offset = 0
        best = self._window[0]
        for offset, candidate in enumerate(self._window):
            if offset and replaces(candidate, best):
                best = candidate
                best_offset = offset
        self._value = best
        self._offset = best_offset

    def __len__(self) -> int:
        return len(self._window)

    def __repr__(self) -> str:
        return (
            f"WindowMinTracker(size={self.size}, tie_break={self.tie_break.value}, "
            f"value={self._value!r}, offset={self._offset})"
        )
