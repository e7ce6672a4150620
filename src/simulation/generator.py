"""Deterministic scenario generator: ``liftjudge-gen START END`` writes in/NNNN.txt per seed."""
from __future__ import annotations

import argparse
import logging
import math
import random
from pathlib import Path
from typing import List, Optional, Sequence

from .config import ScenarioParameters
from .scenario import Scenario, build_scenario, format_scenario

logger = logging.getLogger(__name__)


class ArrivalGenerator:
    """Samples Poisson arrival counts and uniform destinations other than the origin."""

    def __init__(self, parameters: ScenarioParameters, seed: Optional[int] = None) -> None:
        self.parameters = parameters
        self.random = random.Random(seed)

    def generate(self) -> Scenario:
        params = self.parameters
        destinations: List[List[List[int]]] = []
        for origin in range(params.num_floors):
            by_turn = []
            for _ in range(params.turns):
                count = self._poisson(params.arrival_rate)
                by_turn.append([self._choose_destination(origin) for _ in range(count)])
            destinations.append(by_turn)
        return build_scenario(params, destinations)

    def _choose_destination(self, origin: int) -> int:
        if self.parameters.num_floors < 2:
            raise ValueError("A building needs at least two floors to generate arrivals")
        destination = self.random.randrange(self.parameters.num_floors)
        while destination == origin:
            destination = self.random.randrange(self.parameters.num_floors)
        return destination

    def _poisson(self, lam: float) -> int:
        if lam <= 0:
            return 0
        L = math.exp(-lam)
        k = 0
        p = 1.0
        while p > L:
            k += 1
            p *= self.random.random()
        return k - 1


def generate_scenario(seed: int, parameters: Optional[ScenarioParameters] = None) -> Scenario:
    parameters = parameters or ScenarioParameters()
    parameters.validate()
    return ArrivalGenerator(parameters, seed).generate()


def write_scenarios(
    start: int, end: int, out_dir: Path, parameters: Optional[ScenarioParameters] = None
) -> List[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for seed in range(start, end + 1):
        path = out_dir / f"{seed:04d}.txt"
        path.write_text(format_scenario(generate_scenario(seed, parameters)))
        logger.debug("Wrote scenario for seed %d to %s", seed, path)
        written.append(path)
    return written


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("start", type=int, help="First seed")
    parser.add_argument("end", type=int, help="Last seed (inclusive)")
    parser.add_argument("--out-dir", type=Path, default=Path("in"), help="Output directory")
    parser.add_argument("--floors", type=int, default=10)
    parser.add_argument("--elevators", type=int, default=3)
    parser.add_argument("--capacity", type=int, default=10)
    parser.add_argument("--turns", type=int, default=100)
    parser.add_argument("--rate", type=float, default=0.1, help="Poisson arrival rate per floor and turn")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    parameters = ScenarioParameters(
        num_floors=args.floors,
        elevator_count=args.elevators,
        capacity=args.capacity,
        turns=args.turns,
        arrival_rate=args.rate,
    )
    written = write_scenarios(args.start, args.end, args.out_dir, parameters)
    logger.info("Generated %d scenario(s) in %s", len(written), args.out_dir)


if __name__ == "__main__":
    main()
