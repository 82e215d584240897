"""CLI entry point for strobesync."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from strobesync.errors import InputTooShort, StrobesyncError
from strobesync.hashing import DEFAULT_SEED, minstrobe_hash, opensyncmer_hash, syncmer_hash
from strobesync.io import read_fasta
from strobesync.minstrobe import StrobeConfig
from strobesync.syncmer import SyncmerConfig

logger = logging.getLogger("strobesync")


def _seed(text: str) -> int:
    return int(text, 0)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="strobesync",
        description="strobesync – minstrobe and syncmer sketches of DNA sequences",
    )
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("fasta", help="Input FASTA file (plain or .gz)")
    common.add_argument("--seed", type=_seed, default=DEFAULT_SEED,
                        help="XOR seed for k-mer hashes (decimal or 0x hex)")
    common.add_argument("--output", choices=["text", "json"], default="text")

    strobe_p = sub.add_parser("minstrobe", parents=[common],
                              help="Pair each k-mer with the minimum of a later window")
    strobe_p.add_argument("-k", "--kmer-size", type=int, default=15)
    strobe_p.add_argument("--window-min", type=int, default=3)
    strobe_p.add_argument("--window-max", type=int, default=10)

    for name, help_text in (
        ("opensyncmer", "Keep k-mers whose smallest s-mer comes first"),
        ("syncmer", "Keep k-mers whose smallest s-mer comes first or last"),
    ):
        sync_p = sub.add_parser(name, parents=[common], help=help_text)
        sync_p.add_argument("-k", "--kmer-size", type=int, default=15)
        sync_p.add_argument("-s", "--smer-size", type=int, default=5)

    return parser


def _setup_logging(level_name: str) -> None:
    logger.setLevel(getattr(logging, level_name, logging.WARNING))
    logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    logger.addHandler(handler)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _setup_logging(args.log_level)

    try:
        records = _sketch_records(args.fasta, _make_sketcher(args))
    except StrobesyncError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    if args.output == "json":
        print(json.dumps(records, indent=2))
    else:
        for record in records:
            _print_text(record, args.command)


def _make_sketcher(args):
    """Validate the options up front and return a sequence -> sketch function."""
    if args.command == "minstrobe":
        StrobeConfig(args.window_min, args.window_max)

        def sketcher(seq):
            return minstrobe_hash(seq, args.kmer_size, args.window_min, args.window_max, args.seed)
    else:
        SyncmerConfig(args.kmer_size, args.smer_size)
        sketch_fn = opensyncmer_hash if args.command == "opensyncmer" else syncmer_hash

        def sketcher(seq):
            return sketch_fn(seq, args.kmer_size, args.smer_size, args.seed)
    return sketcher


def _sketch_records(fasta, sketcher) -> list[dict]:
    records = []
    for record in read_fasta(fasta):
        try:
            sketch = sketcher(record.seq)
        except InputTooShort as exc:
            logger.warning("Skipping %s (%d bp): %s", record.name, len(record), exc)
            continue
        logger.info("%s: %d bp -> %d sketch values", record.name, len(record), len(sketch))
        records.append({
            "name": record.name,
            "length": len(record),
            "sketch": [list(v) if isinstance(v, tuple) else v for v in sketch],
        })
    return records


def _print_text(record: dict, command: str) -> None:
    if command == "minstrobe":
        values = [f"{a}:{b}" for a, b in record["sketch"]]
    else:
        values = [str(v) for v in record["sketch"]]
    print(f"{record['name']}\t{record['length']}\t{len(values)}\t{','.join(values)}")


if __name__ == "__main__":
    main()
