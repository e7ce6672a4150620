"""Judge a decision process against a scenario file and print its score."""
from __future__ import annotations

import argparse
import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Optional, Sequence

from simulation import SimulationError, load_scenario

from .channel import SubprocessChannel
from .driver import Judge

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every turn")
    parser.add_argument(
        "--save-log",
        type=Path,
        help="Optional file path to write every reply line of the decision process",
    )
    parser.add_argument("input_file", type=Path, help="Scenario file to judge against")
    parser.add_argument("command", help="Decision process executable")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments for the decision process")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        scenario = load_scenario(args.input_file)
    except SimulationError as exc:
        print(f"Invalid scenario: {exc}", file=sys.stderr)
        return 1

    with ExitStack() as stack:
        reply_log = None
        if args.save_log:
            args.save_log.parent.mkdir(parents=True, exist_ok=True)
            reply_log = stack.enter_context(args.save_log.open("w"))
        try:
            channel = SubprocessChannel([args.command, *args.args])
        except OSError as exc:
            print(f"Failed to spawn agent process: {exc}", file=sys.stderr)
            return 1
        stack.callback(channel.close)

        try:
            result = Judge(scenario, channel, reply_log=reply_log).run()
        except SimulationError as exc:
            print(f"Run failed: {exc}", file=sys.stderr)
            return 1

    print(f"Score: {result.score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
