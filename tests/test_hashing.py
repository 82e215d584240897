"""Tests for k-mer fingerprint streams and the composed sketch helpers."""

import numpy as np
import pytest

from strobesync.errors import InputTooShort, InvalidConfiguration
from strobesync.hashing import (
    DEFAULT_SEED,
    canonical_hashes,
    encode,
    kmer_hashes,
    minstrobe_hash,
    opensyncmer_hash,
    reverse_kmer_hashes,
    syncmer_hash,
)


class TestEncode:
    def test_ranks(self):
        assert encode("ACGT").tolist() == [0, 1, 2, 3]

    def test_lowercase(self):
        assert encode("acgt").tolist() == [0, 1, 2, 3]

    def test_other_characters_become_a(self):
        assert encode("NRX").tolist() == [0, 0, 0]

    def test_empty(self):
        assert len(encode("")) == 0


class TestKmerHashes:
    def test_forward(self):
        assert kmer_hashes("ACGT", 2).tolist() == [1, 6, 11]

    def test_reverse_complement(self):
        # revcomp(AC)=GT, revcomp(CG)=CG, revcomp(GT)=AC
        assert reverse_kmer_hashes("ACGT", 2).tolist() == [11, 6, 1]

    def test_canonical(self):
        assert canonical_hashes("ACGT", 2).tolist() == [1, 6, 1]

    def test_canonical_is_strand_independent(self, random_dna):
        complement = {"A": "T", "C": "G", "G": "C", "T": "A"}
        revcomp = "".join(complement[b] for b in reversed(random_dna))
        forward = canonical_hashes(random_dna, 9, seed=77)
        backward = canonical_hashes(revcomp, 9, seed=77)
        assert forward.tolist() == backward[::-1].tolist()

    def test_seed_applied_before_minimum(self, random_dna):
        seed = 0xDEADBEEF
        expected = np.minimum(
            kmer_hashes(random_dna, 7) ^ np.uint64(seed),
            reverse_kmer_hashes(random_dna, 7) ^ np.uint64(seed),
        )
        assert canonical_hashes(random_dna, 7, seed).tolist() == expected.tolist()

    def test_count(self, random_dna):
        assert len(kmer_hashes(random_dna, 15)) == len(random_dna) - 15 + 1

    def test_sequence_shorter_than_k(self):
        assert len(kmer_hashes("ACG", 5)) == 0

    def test_full_64_bits(self):
        assert kmer_hashes("T" * 32, 32).tolist() == [2**64 - 1]

    @pytest.mark.parametrize("seed", [-1, 2**64])
    def test_seed_out_of_range(self, seed):
        with pytest.raises(InvalidConfiguration):
            canonical_hashes("ACGTACGT", 3, seed)

    @pytest.mark.parametrize("k", [0, 33])
    def test_k_out_of_range(self, k):
        with pytest.raises(InvalidConfiguration):
            kmer_hashes("ACGT", k)


class TestSketchHelpers:
    def test_minstrobe_hash(self, random_dna):
        k, window_min, window_max = 9, 3, 12
        hashes = canonical_hashes(random_dna, k, DEFAULT_SEED).tolist()
        result = minstrobe_hash(random_dna, k, window_min, window_max)
        assert len(result) == len(hashes) - window_max
        assert result[0] == (hashes[0], min(hashes[window_min : window_max + 1]))
        assert all(isinstance(v, tuple) and isinstance(v[0], int) for v in result)

    def test_minstrobe_hash_too_short(self):
        with pytest.raises(InputTooShort):
            minstrobe_hash("ACGTACGT", 5, 2, 6)

    def test_opensyncmer_hash_values_are_kmers(self, random_dna):
        kmers = set(canonical_hashes(random_dna, 13, DEFAULT_SEED).tolist())
        selected = opensyncmer_hash(random_dna, 13, 5)
        assert selected
        assert set(selected) <= kmers

    def test_closed_syncmers_include_open(self, random_dna):
        assert set(opensyncmer_hash(random_dna, 13, 5)) <= set(syncmer_hash(random_dna, 13, 5))

    def test_deterministic(self, random_dna):
        assert opensyncmer_hash(random_dna, 10, 3) == opensyncmer_hash(random_dna, 10, 3)

    def test_zero_length_smer_cannot_be_hashed(self, random_dna):
        with pytest.raises(InvalidConfiguration):
            opensyncmer_hash(random_dna, 10, 0)

    def test_syncmer_sequence_too_short(self):
        with pytest.raises(InputTooShort):
            opensyncmer_hash("ACG", 5, 2)
