from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .passenger import Passenger


@dataclass
class Elevator:
    """A car that moves one floor per turn and carries up to ``capacity`` riders."""

    elevator_id: int
    capacity: int
    floor: int = 0
    passengers: List[Passenger] = field(default_factory=list)

    @property
    def load(self) -> int:
        return len(self.passengers)

    @property
    def is_full(self) -> bool:
        return len(self.passengers) >= self.capacity

    def move_up(self, top_floor: int) -> None:
        self.floor = min(self.floor + 1, top_floor)

    def move_down(self) -> None:
        self.floor = max(self.floor - 1, 0)

    def unload(self) -> List[Passenger]:
        """Remove and return every rider whose destination is the current floor.

        Riders that stay aboard keep their relative order.
        """
        delivered: List[Passenger] = []
        remaining: List[Passenger] = []
        for passenger in self.passengers:
            if passenger.destination == self.floor:
                delivered.append(passenger)
            else:
                remaining.append(passenger)
        self.passengers = remaining
        return delivered

    def board(self, passenger: Passenger) -> None:
        self.passengers.append(passenger)
