from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .passenger import Passenger


@dataclass(frozen=True)
class PassengerView:
    passenger_id: int
    arrival_turn: int
    destination: int
    wait_time: int


@dataclass(frozen=True)
class ElevatorView:
    floor: int
    passenger_count: int
    passengers: List[PassengerView]


@dataclass(frozen=True)
class FloorView:
    waiting_count: int
    waiting: List[PassengerView]


@dataclass(frozen=True)
class TurnSnapshot:
    """State of a run after all actions of ``turn`` were applied."""

    turn: int
    score: int
    elevators: List[ElevatorView]
    floors: List[FloorView]


def view_passengers(passengers: Iterable[Passenger], turn: int) -> List[PassengerView]:
    return [
        PassengerView(
            passenger_id=p.passenger_id,
            arrival_turn=p.arrival_turn,
            destination=p.destination,
            wait_time=p.elapsed(turn),
        )
        for p in passengers
    ]
