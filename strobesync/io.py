"""FASTA input for sketching (plain and gzipped)."""

from __future__ import annotations

import gzip
from dataclasses import dataclass
from pathlib import Path
from typing import Generator, Union


@dataclass
class Sequence:
    """A named DNA record."""

    name: str
    seq: str

    def __len__(self) -> int:
        return len(self.seq)


def read_fasta(filepath: Union[str, Path]) -> Generator[Sequence, None, None]:
    """Yield a :class:`Sequence` per record of a FASTA file.

    Files ending in ``.gz`` are read through gzip.  Record names stop at the
    first whitespace; sequence lines are joined and upper-cased.
    """
    filepath = Path(filepath)
    opener = gzip.open if filepath.suffix == ".gz" else open

    name: str | None = None
    parts: list[str] = []

    with opener(filepath, "rt") as fh:  # type: ignore[arg-type]
        for line in fh:
            line = line.strip()
            if not line:
                continue
            if line.startswith(">"):
                if name is not None:
                    yield Sequence(name, "".join(parts).upper())
                header = line[1:].split()
                name = header[0] if header else ""
                parts = []
            elif name is None:
                raise ValueError(f"{filepath}: sequence data before the first '>' header")
            else:
                parts.append(line)
        if name is not None:
            yield Sequence(name, "".join(parts).upper())
