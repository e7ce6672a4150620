from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .elevator import Elevator
from .floor import Floor


@dataclass
class Building:
    """Container for the floor queues and the elevators of one run."""

    num_floors: int
    elevator_count: int
    capacity: int
    floors: List[Floor] = field(init=False)
    elevators: List[Elevator] = field(init=False)

    def __post_init__(self) -> None:
        self.floors = [Floor(i) for i in range(self.num_floors)]
        # Every car starts parked in the middle of the shaft.
        start_floor = self.num_floors // 2
        self.elevators = [
            Elevator(i, capacity=self.capacity, floor=start_floor)
            for i in range(self.elevator_count)
        ]

    @property
    def top_floor(self) -> int:
        return self.num_floors - 1

    def get_floor(self, floor_number: int) -> Optional[Floor]:
        if 0 <= floor_number < self.num_floors:
            return self.floors[floor_number]
        return None

    def get_elevator(self, elevator_index: int) -> Optional[Elevator]:
        if 0 <= elevator_index < self.elevator_count:
            return self.elevators[elevator_index]
        return None

    def waiting_count(self) -> int:
        return sum(len(floor) for floor in self.floors)

    def riding_count(self) -> int:
        return sum(elevator.load for elevator in self.elevators)
