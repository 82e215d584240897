"""Minstrobes: anchor fingerprints paired with the minimum of an offset window.

For an anchor at position ``i`` the strobe is the minimum fingerprint among
positions ``i + window_min`` to ``i + window_max``.  Equal minima resolve to
the rightmost (most recent) position.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import islice, tee
from numbers import Integral
from typing import Any, Iterable, Iterator, NamedTuple

from strobesync.errors import InputTooShort, InsufficientInput, InvalidConfiguration
from strobesync.window import TieBreak, WindowMinTracker

logger = logging.getLogger(__name__)

_END = object()


class StrobeValue(NamedTuple):
    """An anchor fingerprint and the minimum of its strobe window."""

    anchor: Any
    strobe: Any


@dataclass(frozen=True)
class StrobeConfig:
    """Strobe window bounds, relative to the anchor position."""

    window_min: int
    window_max: int

    def __post_init__(self):
        if not all(isinstance(v, Integral) and not isinstance(v, bool)
               for v in (self.window_min, self.window_max)):
            raise InvalidConfiguration("window_min and window_max must be integers")
        if self.window_min < 0:
            raise InvalidConfiguration(f"window_min must not be negative, got {self.window_min}")
        if self.window_max <= self.window_min:
            raise InvalidConfiguration(
                f"window_max ({self.window_max}) must be greater than "
                f"window_min ({self.window_min})"
            )

    @property
    def window_size(self) -> int:
        return self.window_max - self.window_min + 1

    @property
    def min_input_length(self) -> int:
        return self.window_max + 1

    def output_length(self, input_length: int) -> int:
        """Number of minstrobes produced from *input_length* fingerprints."""
        return max(input_length - self.window_max, 0)

    def apply(self, values: Iterable[Any]) -> "Minstrobes":
        return Minstrobes(values, self.window_min, self.window_max)


class MinstrobeIterator:
    """Single pass over *values* yielding :class:`StrobeValue` items.

    The anchor cursor and the strobe window cursor are two independent
    forward cursors over the same input; nothing is indexed or read past the
    end.  Raises :class:`InputTooShort` on construction when fewer than
    ``window_max + 1`` values are available.
    """

    def __init__(self, values: Iterable[Any], window_min: int, window_max: int):
        self.config = StrobeConfig(window_min, window_max)
        self.position = -1

        too_short = (
            f"Sequence is too short for window_min={window_min}, "
            f"window_max={window_max}: need at least "
            f"{self.config.min_input_length} values"
        )
        self._anchors, self._strobes = tee(iter(values))
        if sum(1 for _ in islice(self._strobes, window_min)) < window_min:
            raise InputTooShort(too_short)
        self._tracker = WindowMinTracker(self.config.window_size, TieBreak.RIGHTMOST)
        try:
            self._tracker.prime(self._strobes)
        except InsufficientInput as exc:
            raise InputTooShort(too_short) from exc
        self._pending: Any = StrobeValue(next(self._anchors), self._tracker.value)
        self._exhausted = False

    def __iter__(self) -> "MinstrobeIterator":
        return self

    def __next__(self) -> StrobeValue:
        if self._pending is not None:
            value, self._pending = self._pending, None
            self.position += 1
            return value
        if self._exhausted:
            raise StopIteration

        new_value = next(self._strobes, _END)
        if new_value is _END:
            self._exhausted = True
            logger.debug(
                "Minstrobe stream exhausted after %d values, %d rescans",
                self.position + 1, self._tracker.rescans,
            )
            raise StopIteration
        anchor = next(self._anchors)
        self.position += 1
        return StrobeValue(anchor, self._tracker.advance(new_value).value)


class Minstrobes:
    """Re-iterable minstrobe sketch of *values*.

    Every ``iter()`` derives a fresh :class:`MinstrobeIterator` from the
    source, so a list or array can be sketched repeatedly with identical
    results.  A one-shot iterator source can only be walked once.
    """

    def __init__(self, values: Iterable[Any], window_min: int, window_max: int):
        self.config = StrobeConfig(window_min, window_max)
        self.values = values
        if hasattr(values, "__len__") and len(values) < self.config.min_input_length:
            raise InputTooShort(
                f"Sequence of length {len(values)} is too short for "
                f"window_min={window_min}, window_max={window_max}"
            )

    def __iter__(self) -> Iterator[StrobeValue]:
        return MinstrobeIterator(self.values, self.config.window_min, self.config.window_max)

    def __len__(self) -> int:
        if not hasattr(self.values, "__len__"):
            raise TypeError("Length is only known for sized inputs")
        return self.config.output_length(len(self.values))

    def __repr__(self) -> str:
        return (
            f"Minstrobes(window_min={self.config.window_min}, "
            f"window_max={self.config.window_max})"
        )


def minstrobe(values: Iterable[Any], window_min: int, window_max: int) -> Minstrobes:
    """Minstrobe sketch of *values*.

    With ``window_min=3`` and ``window_max=5`` the input
    ``[6, 26, 41, 38, 24, 33, 6, 27, 47]`` gives
    ``(6, 24), (26, 6), (41, 6), (38, 6)``.
    """
    return Minstrobes(values, window_min, window_max)
