"""
strobesync: sparse, order-preserving sketches of k-mer fingerprint streams.

Two selection engines run over a stream of totally ordered fingerprints in a
single pass:

* minstrobes pair every anchor fingerprint with the minimum of a later window;
* syncmers keep a k-mer when its smallest s-mer sits on a window boundary.
"""

__version__ = "0.1.0"

from strobesync.errors import (
    InputTooShort,
    InsufficientInput,
    InvalidConfiguration,
    StrobesyncError,
)
from strobesync.window import TieBreak, TrackedMinimum, WindowMinTracker
from strobesync.minstrobe import MinstrobeIterator, Minstrobes, StrobeConfig, StrobeValue, minstrobe
from strobesync.syncmer import (
    SyncmerConfig,
    SyncmerIterator,
    Syncmers,
    closed_syncmer,
    opensyncmer,
    syncmer_positions,
)
from strobesync.hashing import (
    DEFAULT_SEED,
    canonical_hashes,
    kmer_hashes,
    minstrobe_hash,
    opensyncmer_hash,
    syncmer_hash,
)
from strobesync.io import read_fasta, Sequence

__all__ = [
    "StrobesyncError",
    "InvalidConfiguration",
    "InputTooShort",
    "InsufficientInput",
    "TieBreak",
    "TrackedMinimum",
    "WindowMinTracker",
    "StrobeConfig",
    "StrobeValue",
    "MinstrobeIterator",
    "Minstrobes",
    "minstrobe",
    "SyncmerConfig",
    "SyncmerIterator",
    "Syncmers",
    "opensyncmer",
    "closed_syncmer",
    "syncmer_positions",
    "DEFAULT_SEED",
    "kmer_hashes",
    "canonical_hashes",
    "minstrobe_hash",
    "opensyncmer_hash",
    "syncmer_hash",
    "read_fasta",
    "Sequence",
]
