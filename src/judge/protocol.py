"""Line formats exchanged with a decision process.

Per turn the judge writes one line of elevator floors, one line per elevator
and one line per floor, each ``count dest elapsed dest elapsed ...``. The
process answers with one ``ACTION [index ...]`` line per elevator.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from simulation import ScenarioParameters, Simulation
from simulation.passenger import Passenger

from .errors import ProtocolError


@dataclass(frozen=True)
class Command:
    action: str
    picks: List[int] = field(default_factory=list)


def format_header(parameters: ScenarioParameters) -> str:
    return parameters.header()


def format_passengers(passengers: Iterable[Passenger], turn: int) -> str:
    passengers = list(passengers)
    parts = [str(len(passengers))]
    for passenger in passengers:
        parts.append(str(passenger.destination))
        parts.append(str(passenger.elapsed(turn)))
    return " ".join(parts)


def format_turn(simulation: Simulation) -> List[str]:
    turn = simulation.current_turn
    building = simulation.building
    lines = [" ".join(str(elevator.floor) for elevator in building.elevators)]
    lines.extend(format_passengers(elevator.passengers, turn) for elevator in building.elevators)
    lines.extend(format_passengers(floor.waiting, turn) for floor in building.floors)
    return lines


def parse_reply(line: str, turn: int, elevator_index: int) -> Command:
    """Split a reply into its keyword and, for ``OPEN``, its pickup indices.

    Whether the keyword names a real action is left to the engine.
    """
    parts = line.split()
    if not parts:
        raise ProtocolError("Empty action line", turn=turn, elevator_index=elevator_index)
    action = parts[0]
    picks: List[int] = []
    if action == "OPEN":
        for token in parts[1:]:
            if not (token.isascii() and token.isdigit()):
                raise ProtocolError(
                    f"Invalid passenger index format: {token!r}",
                    turn=turn,
                    elevator_index=elevator_index,
                )
            picks.append(int(token))
    return Command(action=action, picks=picks)
