"""Syncmers: k-mers selected by the position of their smallest s-mer.

A k-mer of length ``k`` contains ``k - s + 1`` s-mers.  It is an open syncmer
when the smallest of them is the first one, and a closed syncmer when the
smallest is the first or the last one.  Equal minima resolve to the leftmost
s-mer, so a k-mer whose first s-mer ties for the minimum always qualifies.

The engine walks a stream of s-mer fingerprints with a sliding window
tracker and the matching k-mer fingerprint stream in lockstep; it is a
filter, yielding at most one k-mer per window position.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Integral
from typing import Any, FrozenSet, Iterable, Iterator, Sequence

from strobesync.errors import InputTooShort, InsufficientInput, InvalidConfiguration
from strobesync.window import TieBreak, WindowMinTracker

logger = logging.getLogger(__name__)

_END = object()


@dataclass(frozen=True)
class SyncmerConfig:
    """k-mer and s-mer lengths."""

    k: int
    s: int

    def __post_init__(self):
        if not all(isinstance(v, Integral) and not isinstance(v, bool) for v in (self.k, self.s)):
            raise InvalidConfiguration("k and s must be integers")
        if self.k < 1:
            raise InvalidConfiguration(f"k must be at least 1, got {self.k}")
        if self.s < 0:
            raise InvalidConfiguration(f"s must not be negative, got {self.s}")
        if self.s >= self.k:
            raise InvalidConfiguration(f"s ({self.s}) must be smaller than k ({self.k})")

    @property
    def window_size(self) -> int:
        """Number of s-mers inside one k-mer."""
        return self.k - self.s + 1

    @property
    def open_boundaries(self) -> FrozenSet[int]:
        return frozenset({0})

    @property
    def closed_boundaries(self) -> FrozenSet[int]:
        return frozenset({0, self.window_size - 1})

    def apply(
        self,
        kmer_hashes: Iterable[Any],
        smer_hashes: Iterable[Any],
        closed: bool = False,
    ) -> "Syncmers":
        boundaries = self.closed_boundaries if closed else self.open_boundaries
        return Syncmers(kmer_hashes, smer_hashes, self.k, self.s, boundaries)


def _check_boundaries(config: SyncmerConfig, boundaries: Iterable[int]) -> FrozenSet[int]:
    boundaries = frozenset(boundaries)
    if not boundaries:
        raise InvalidConfiguration("At least one boundary offset is required")
    bad = sorted(b for b in boundaries if not 0 <= b < config.window_size)
    if bad:
        raise InvalidConfiguration(
            f"Boundary offsets {bad} fall outside the window of "
            f"{config.window_size} s-mers"
        )
    return boundaries


class SyncmerIterator:
    """Single pass yielding the k-mer fingerprints that are syncmers.

    *smer_hashes* must be aligned so that s-mer ``i + j`` is the ``j``-th
    s-mer inside k-mer ``i``.  Raises :class:`InputTooShort` on construction
    when there are fewer s-mers than one window holds, or no k-mer at all.
    """

    def __init__(
        self,
        kmer_hashes: Iterable[Any],
        smer_hashes: Iterable[Any],
        k: int,
        s: int,
        boundaries: Iterable[int] = (0,),
    ):
        self.config = SyncmerConfig(k, s)
        self.boundaries = _check_boundaries(self.config, boundaries)
        self.position = -1

        self._kmers = iter(kmer_hashes)
        self._smers = iter(smer_hashes)
        self._tracker = WindowMinTracker(self.config.window_size, TieBreak.LEFTMOST)
        try:
            self._tracker.prime(self._smers)
        except InsufficientInput as exc:
            raise InputTooShort(
                f"Need at least {self.config.window_size} s-mer values for "
                f"k={k}, s={s} ({exc})"
            ) from exc
        kmer = next(self._kmers, _END)
        if kmer is _END:
            raise InputTooShort(f"No k-mer values available for k={k}, s={s}")

        self._kmer_index = 0
        self._pending = kmer if self._tracker.offset in self.boundaries else _END
        self._exhausted = False

    def __iter__(self) -> "SyncmerIterator":
        return self

    def __next__(self) -> Any:
        if self._pending is not _END:
            value, self._pending = self._pending, _END
            self.position = self._kmer_index
            return value

        while not self._exhausted:
            smer = next(self._smers, _END)
            kmer = next(self._kmers, _END) if smer is not _END else _END
            if kmer is _END:
                self._exhausted = True
                logger.debug(
                    "Syncmer stream exhausted after %d k-mers, %d rescans",
                    self._kmer_index + 1, self._tracker.rescans,
                )
                break
            self._kmer_index += 1
            if self._tracker.advance(smer).offset in self.boundaries:
                self.position = self._kmer_index
                return kmer
        raise StopIteration


class Syncmers:
    """Re-iterable syncmer sketch over aligned k-mer and s-mer streams."""

    def __init__(
        self,
        kmer_hashes: Iterable[Any],
        smer_hashes: Iterable[Any],
        k: int,
        s: int,
        boundaries: Iterable[int] = (0,),
    ):
        self.config = SyncmerConfig(k, s)
        self.boundaries = _check_boundaries(self.config, boundaries)
        self.kmer_hashes = kmer_hashes
        self.smer_hashes = smer_hashes
        if hasattr(smer_hashes, "__len__") and len(smer_hashes) < self.config.window_size:
            raise InputTooShort(
                f"{len(smer_hashes)} s-mer values are too few for k={k}, s={s}"
            )
        if hasattr(kmer_hashes, "__len__") and len(kmer_hashes) == 0:
            raise InputTooShort(f"No k-mer values available for k={k}, s={s}")

    def __iter__(self) -> Iterator[Any]:
        return SyncmerIterator(
            self.kmer_hashes, self.smer_hashes,
            self.config.k, self.config.s, self.boundaries,
        )

    def __repr__(self) -> str:
        return (
            f"Syncmers(k={self.config.k}, s={self.config.s}, "
            f"boundaries={sorted(self.boundaries)})"
        )


def opensyncmer(
    kmer_hashes: Iterable[Any], smer_hashes: Iterable[Any], k: int, s: int
) -> Syncmers:
    """k-mers whose smallest s-mer is their first s-mer."""
    return SyncmerConfig(k, s).apply(kmer_hashes, smer_hashes)


def closed_syncmer(
    kmer_hashes: Iterable[Any], smer_hashes: Iterable[Any], k: int, s: int
) -> Syncmers:
    """k-mers whose smallest s-mer is their first or last s-mer."""
    return SyncmerConfig(k, s).apply(kmer_hashes, smer_hashes, closed=True)


def syncmer_positions(smer_hashes: Sequence[Any], k: int, s: int, closed: bool = False):
    """Indices of the k-mers selected from a fully materialised s-mer list.

    Convenience for callers that only need positions; walks the same engine
    with the k-mer index standing in for the k-mer fingerprint.
    """
    config = SyncmerConfig(k, s)
    n_kmers = max(len(smer_hashes) - config.window_size + 1, 0)
    return list(config.apply(range(n_kmers), smer_hashes, closed=closed))
