"""Tests for the command line interface."""

import json

import pytest

from strobesync.cli import main
from strobesync.hashing import canonical_hashes, opensyncmer_hash


class TestMinstrobeCommand:
    def test_text_output(self, fasta_file, random_dna, capsys):
        main(["minstrobe", str(fasta_file), "-k", "5", "--window-min", "2", "--window-max", "4"])
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1  # the 4 bp record is skipped
        name, length, count, values = lines[0].split("\t")
        n_kmers = 120 - 5 + 1
        assert (name, length, count) == ("read1", "120", str(n_kmers - 4))
        first_anchor, first_strobe = values.split(",")[0].split(":")
        hashes = canonical_hashes(random_dna[:120], 5, 0x8F3F73B5CF1C9ADE).tolist()
        assert int(first_anchor) == hashes[0]
        assert int(first_strobe) == min(hashes[2:5])

    def test_json_output(self, fasta_file, capsys):
        main(["minstrobe", str(fasta_file), "-k", "5", "--window-min", "2",
              "--window-max", "4", "--output", "json"])
        data = json.loads(capsys.readouterr().out)
        assert [r["name"] for r in data] == ["read1"]
        assert all(len(pair) == 2 for pair in data[0]["sketch"])

    def test_invalid_windows_exit(self, fasta_file):
        with pytest.raises(SystemExit) as exc:
            main(["minstrobe", str(fasta_file), "--window-min", "5", "--window-max", "5"])
        assert exc.value.code == 1


class TestSyncmerCommands:
    def test_opensyncmer_json(self, fasta_file, random_dna, capsys):
        main(["opensyncmer", str(fasta_file), "-k", "9", "-s", "3", "--seed", "0x10",
              "--output", "json"])
        data = json.loads(capsys.readouterr().out)
        assert data[0]["sketch"] == opensyncmer_hash(random_dna[:120], 9, 3, seed=16)
        assert data[0]["length"] == 120

    def test_closed_syncmer_text(self, fasta_file, capsys):
        main(["syncmer", str(fasta_file), "-k", "9", "-s", "3"])
        out = capsys.readouterr().out
        assert out.startswith("read1\t120\t")

    @pytest.mark.parametrize("seed", ["-1", str(2**64)])
    def test_seed_out_of_range_exit(self, fasta_file, seed):
        with pytest.raises(SystemExit) as exc:
            main(["opensyncmer", str(fasta_file), "-k", "9", "-s", "3", "--seed", seed])
        assert exc.value.code == 1

    def test_invalid_lengths_exit(self, fasta_file):
        with pytest.raises(SystemExit) as exc:
            main(["opensyncmer", str(fasta_file), "-k", "3", "-s", "3"])
        assert exc.value.code == 1


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 0
    assert "strobesync" in capsys.readouterr().out
