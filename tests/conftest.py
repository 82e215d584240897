"""Shared test fixtures for strobesync tests."""

import random

import pytest


@pytest.fixture
def example_fingerprints():
    """Fingerprint stream with a known minstrobe sketch for window 3..5."""
    return [6, 26, 41, 38, 24, 33, 6, 27, 47]


@pytest.fixture
def random_fingerprints():
    """Longer stream of 64-bit style fingerprints."""
    rng = random.Random(42)
    return [rng.getrandbits(64) for _ in range(500)]


@pytest.fixture
def tied_fingerprints():
    """Stream drawn from a tiny alphabet so equal minima are common."""
    rng = random.Random(7)
    return [rng.randrange(4) for _ in range(400)]


@pytest.fixture
def short_dna():
    return "ACGGCGACGTTTAG"


@pytest.fixture
def random_dna():
    rng = random.Random(100)
    return "".join(rng.choice("ACGT") for _ in range(300))


@pytest.fixture
def fasta_file(tmp_path, random_dna):
    p = tmp_path / "reads.fa"
    p.write_text(f">read1 sample\n{random_dna[:60]}\n{random_dna[60:120]}\n>tiny\nACGT\n")
    return p
