from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Sequence


@dataclass(frozen=True)
class Rider:
    """A passenger as reported on the wire: where it goes and how long it has waited."""

    destination: int
    elapsed: int


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Lightweight view of an elevator for scheduling decisions."""

    elevator_id: int
    floor: int
    riders: List[Rider]
    capacity: int

    @property
    def load(self) -> int:
        return len(self.riders)

    def alighting_here(self) -> int:
        return sum(1 for rider in self.riders if rider.destination == self.floor)

    def capacity_after_dropoff(self) -> int:
        return max(0, self.capacity - self.load + self.alighting_here())


@dataclass(frozen=True)
class FloorSnapshot:
    """Waiting queue of one floor, in queue order."""

    floor: int
    waiting: List[Rider]

    def direction_of(self, index: int) -> int:
        return 1 if self.waiting[index].destination > self.floor else -1


class Scheduler(Protocol):
    """Strategy interface for deciding one action per elevator each turn."""

    def select_actions(
        self,
        elevator_state: Sequence[ElevatorSnapshot],
        floors: Sequence[FloorSnapshot],
    ) -> List[str]:
        """
        Return one reply line per elevator, in elevator order.

        Pickup indices of an ``OPEN`` are read against the floor queue as
        left by the elevators listed before it.
        """
        ...
