"""CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from spymaster.config import DEFAULT_LOG_LEVEL, LOG_FORMAT, OUTPUT_FILENAMES
from spymaster.equalizer import SPY_NAMES, EqualizationError, iter_equalization
from spymaster.informants import format_informant, read_informants, write_informants
from spymaster.rational import require_probability

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater (got {value})")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spymaster",
        description="Find the informants that make two spies' knowledge distributions equal.",
    )
    parser.add_argument("prior", help="Common prior belief, e.g. 1/2")
    parser.add_argument("spy_a", type=Path, help="Informant file for spy A")
    parser.add_argument("spy_b", type=Path, help="Informant file for spy B")
    parser.add_argument("--max-steps", type=_non_negative_int, default=None, help="Cap on synthesised informants")
    parser.add_argument("--trace", action="store_true", help="Print every equalisation step")
    parser.add_argument("--output-dir", type=Path, help="Write the extended informant lists here")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=DEFAULT_LOG_LEVEL,
        help="Logging level (default: %(default)s)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    try:
        prior = require_probability(args.prior, "prior")
        informants = (read_informants(args.spy_a), read_informants(args.spy_b))
    except (ValueError, OSError) as exc:
        print(f"spymaster: {exc}", file=sys.stderr)
        return 2

    extended: List[list] = [list(informants[0]), list(informants[1])]
    try:
        for number, step in enumerate(iter_equalization(prior, informants, args.max_steps), start=1):
            extended[step.side].append(step.informant)
            if args.trace:
                fields = step.as_dict()
                print(
                    f"step {number}: spy {fields['spy']} ks={fields['ks']} w={fields['w']} "
                    f"ks0={fields['ks0']} ks1={fields['ks1']} r={fields['r']}"
                )
    except EqualizationError as exc:
        print(f"spymaster: {exc}", file=sys.stderr)
        return 1

    for side, name in enumerate(SPY_NAMES):
        added = extended[side][len(informants[side]):]
        print(f"spy {name}: +{len(added)} informant(s)")
        for inf in added:
            print(format_informant(inf))

    if args.output_dir is not None:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        for side, filename in enumerate(OUTPUT_FILENAMES):
            write_informants(args.output_dir / filename, extended[side])

    return 0


if __name__ == "__main__":
    sys.exit(main())
