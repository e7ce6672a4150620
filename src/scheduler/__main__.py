"""Run a scheduler as a decision process over standard input and output."""
from __future__ import annotations

import argparse
import sys

from . import SCHEDULER_REGISTRY, get_scheduler
from .session import AgentSession


def main() -> None:
    parser = argparse.ArgumentParser(prog="python -m scheduler", description=__doc__)
    parser.add_argument("name", choices=sorted(SCHEDULER_REGISTRY), help="Scheduler to run")
    args = parser.parse_args()

    session = AgentSession(get_scheduler(args.name))
    for line in iter(sys.stdin.readline, ""):
        replies = session.feed(line)
        if replies:
            sys.stdout.write("".join(reply + "\n" for reply in replies))
            sys.stdout.flush()


if __name__ == "__main__":
    main()
