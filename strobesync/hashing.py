"""Fingerprint streams for DNA sequences and the composed sketch helpers.

k-mers are hashed as base-4 numbers over the 2-bit ranks A=0, C=1, G=2, T=3
(the first base is the most significant digit), which fits a 64-bit integer
for ``k <= 32``.  The canonical hash of a position is the smaller of the
seeded forward and reverse-complement hashes.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

import numpy as np

from strobesync.errors import InvalidConfiguration
from strobesync.minstrobe import minstrobe
from strobesync.syncmer import SyncmerConfig

logger = logging.getLogger(__name__)

DEFAULT_SEED = 0x8F3F73B5CF1C9ADE
MAX_K = 32

# Anything outside ACGT converts to rank 0, as a dna4 conversion does.
_RANKS = np.zeros(256, dtype=np.uint8)
for _base, _rank in (("A", 0), ("C", 1), ("G", 2), ("T", 3)):
    _RANKS[ord(_base)] = _rank
    _RANKS[ord(_base.lower())] = _rank


def encode(sequence: str) -> np.ndarray:
    """2-bit ranks of *sequence* as a ``uint8`` array."""
    if not sequence:
        return np.zeros(0, dtype=np.uint8)
    raw = np.frombuffer(sequence.encode("ascii", errors="replace"), dtype=np.uint8)
    return _RANKS[raw]


def _check_k(k: int, name: str = "k") -> None:
    if not 1 <= k <= MAX_K:
        raise InvalidConfiguration(f"{name} must be between 1 and {MAX_K}, got {k}")


def _hash_ranks(ranks: np.ndarray, k: int) -> np.ndarray:
    n = len(ranks) - k + 1
    if n <= 0:
        return np.zeros(0, dtype=np.uint64)
    hashes = np.zeros(n, dtype=np.uint64)
    four = np.uint64(4)
    for j in range(k):
        hashes = hashes * four + ranks[j : j + n].astype(np.uint64)
    return hashes


def kmer_hashes(sequence: str, k: int) -> np.ndarray:
    """Forward-strand hash of every k-mer of *sequence*."""
    _check_k(k)
    return _hash_ranks(encode(sequence), k)


def reverse_kmer_hashes(sequence: str, k: int) -> np.ndarray:
    """Hash of the reverse complement of every forward k-mer.

    Entry ``i`` belongs to the same k-mer as ``kmer_hashes(sequence, k)[i]``.
    """
    _check_k(k)
    complement = 3 - encode(sequence)[::-1]
    return _hash_ranks(complement, k)[::-1]


def canonical_hashes(sequence: str, k: int, seed: int = 0) -> np.ndarray:
    """Seeded strand-independent hash of every k-mer."""
    if not 0 <= seed < 2**64:
        raise InvalidConfiguration(f"seed must fit in 64 unsigned bits, got {seed}")
    seed = np.uint64(seed)
    forward = kmer_hashes(sequence, k) ^ seed
    reverse = reverse_kmer_hashes(sequence, k) ^ seed
    return np.minimum(forward, reverse)


def minstrobe_hash(
    sequence: str,
    k: int,
    window_min: int,
    window_max: int,
    seed: int = DEFAULT_SEED,
) -> List[Tuple[int, int]]:
    """Minstrobes over the canonical k-mer hashes of *sequence*."""
    hashes = canonical_hashes(sequence, k, seed).tolist()
    logger.debug("Hashed %d k-mers (k=%d) for minstrobes", len(hashes), k)
    return [tuple(value) for value in minstrobe(hashes, window_min, window_max)]


def _syncmer_hash(sequence: str, k: int, s: int, seed: int, closed: bool) -> List[int]:
    config = SyncmerConfig(k, s)
    _check_k(s, "s")
    kmers = canonical_hashes(sequence, k, seed).tolist()
    smers = canonical_hashes(sequence, s, seed).tolist()
    logger.debug(
        "Hashed %d k-mers (k=%d) and %d s-mers (s=%d) for syncmers",
        len(kmers), k, len(smers), s,
    )
    return list(config.apply(kmers, smers, closed=closed))


def opensyncmer_hash(sequence: str, k: int, s: int, seed: int = DEFAULT_SEED) -> List[int]:
    """Canonical hashes of the open syncmers of *sequence*."""
    return _syncmer_hash(sequence, k, s, seed, closed=False)


def syncmer_hash(sequence: str, k: int, s: int, seed: int = DEFAULT_SEED) -> List[int]:
    """Canonical hashes of the closed syncmers of *sequence*."""
    return _syncmer_hash(sequence, k, s, seed, closed=True)
