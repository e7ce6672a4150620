"""Scenario files: the arrival table a run is judged against.

Layout, read as a stream of whitespace separated tokens::

    N M C T lambda
    <for each floor 0..N, for each turn 0..T> count dest_1 ... dest_count

``format_scenario`` writes one line per floor holding all of its turn cells.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Union

from .config import ScenarioParameters
from .errors import ScenarioFormatError
from .passenger import Passenger


@dataclass
class Scenario:
    parameters: ScenarioParameters
    arrivals: List[List[List[Passenger]]]  # [floor][turn] -> passengers

    def arrivals_at(self, turn: int) -> List[List[Passenger]]:
        return [list(by_turn[turn]) for by_turn in self.arrivals]

    @property
    def passenger_count(self) -> int:
        return sum(len(cell) for by_turn in self.arrivals for cell in by_turn)


def build_scenario(parameters: ScenarioParameters, destinations: List[List[List[int]]]) -> Scenario:
    """Create passengers from a ``[floor][turn] -> destinations`` table.

    Ids are assigned floor by floor, then turn by turn, in table order.
    """
    arrivals: List[List[List[Passenger]]] = []
    next_id = 0
    for by_turn in destinations:
        floor_cells: List[List[Passenger]] = []
        for turn, targets in enumerate(by_turn):
            cell = []
            for destination in targets:
                cell.append(Passenger(next_id, arrival_turn=turn, destination=destination))
                next_id += 1
            floor_cells.append(cell)
        arrivals.append(floor_cells)
    return Scenario(parameters=parameters, arrivals=arrivals)


class _Tokens:
    def __init__(self, text: str) -> None:
        self._iter: Iterator[str] = iter(text.split())
        self.position = 0

    def next(self, what: str) -> str:
        try:
            token = next(self._iter)
        except StopIteration:
            raise ScenarioFormatError(
                f"Unexpected end of scenario input while reading {what}"
            ) from None
        self.position += 1
        return token

    def next_int(self, what: str) -> int:
        token = self.next(what)
        if not (token.isascii() and token.isdigit()):
            raise ScenarioFormatError(
                f"Expected a non-negative integer for {what} at token {self.position}, got {token!r}"
            )
        return int(token)

    def next_float(self, what: str) -> float:
        token = self.next(what)
        try:
            return float(token)
        except ValueError:
            raise ScenarioFormatError(
                f"Expected a number for {what} at token {self.position}, got {token!r}"
            ) from None


def parse_scenario(text: str) -> Scenario:
    tokens = _Tokens(text)
    parameters = ScenarioParameters(
        num_floors=tokens.next_int("N"),
        elevator_count=tokens.next_int("M"),
        capacity=tokens.next_int("C"),
        turns=tokens.next_int("T"),
        arrival_rate=tokens.next_float("lambda"),
    )
    try:
        parameters.validate()
    except ValueError as exc:
        raise ScenarioFormatError(str(exc)) from exc

    destinations: List[List[List[int]]] = []
    for floor in range(parameters.num_floors):
        by_turn: List[List[int]] = []
        for turn in range(parameters.turns):
            where = f"floor {floor}, turn {turn}"
            count = tokens.next_int(f"arrival count ({where})")
            targets = []
            for _ in range(count):
                target = tokens.next_int(f"destination ({where})")
                if not 0 <= target < parameters.num_floors:
                    raise ScenarioFormatError(
                        f"Destination {target} out of range at {where}"
                    )
                targets.append(target)
            by_turn.append(targets)
        destinations.append(by_turn)
    return build_scenario(parameters, destinations)


def load_scenario(path: Union[str, Path]) -> Scenario:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ScenarioFormatError(f"Failed to read scenario file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ScenarioFormatError(f"Scenario file {path} is not valid UTF-8: {exc}") from exc
    return parse_scenario(text)


def format_scenario(scenario: Scenario) -> str:
    lines = [scenario.parameters.header()]
    for by_turn in scenario.arrivals:
        cells = []
        for cell in by_turn:
            cells.append(" ".join([str(len(cell))] + [str(p.destination) for p in cell]))
        lines.append(" ".join(cells))
    return "\n".join(lines) + "\n"
