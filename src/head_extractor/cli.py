"""Command-line entry point (``head-extractor`` / ``python -m head_extractor``)."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, Sequence

from .config import ExtractorConfig
from .errors import FileAccessError
from .extractor import HeadExtractor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="head-extractor",
        description="Print every custom head texture found in a Minecraft world save.",
    )
    parser.add_argument("world", help="Path to the world folder (contains level.dat, region/, ...).")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads (default: CPU count minus one).",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log progress and per-file details.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors.")
    return parser


def _configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: Sequence[str] | None = None, out: IO[str] | None = None) -> int:
    """Run an extraction and print the heads, one per line.

    Returns the process exit code: 0 on success (even if some files could
    not be fully processed), 1 if the world folder cannot be read.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.quiet)
    out = out or sys.stdout

    try:
        config = ExtractorConfig(workers=args.workers)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        report = HeadExtractor(config).run(args.world)
    except FileAccessError as exc:
        print(f"Please specify one world folder ({exc}).", file=sys.stderr)
        return 1

    for head in sorted(report.heads):
        print(head, file=out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
