from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .building import Building
from .config import ScenarioParameters
from .elevator import Elevator
from .errors import ActionError
from .passenger import Passenger
from .snapshot import ElevatorView, FloorView, TurnSnapshot, view_passengers


@dataclass
class MetricsSnapshot:
    turn: int
    score: int
    delivered: int
    waiting: int
    riding: int
    average_duration: float
    duration_p95: float


class MetricsTracker:
    def __init__(self) -> None:
        self.durations: List[int] = []

    @property
    def delivered(self) -> int:
        return len(self.durations)

    def record_delivery(self, passenger: Passenger, turn: int) -> None:
        self.durations.append(turn - passenger.arrival_turn + 1)

    def _average(self, values: List[int]) -> float:
        if not values:
            return 0.0
        return sum(values) / len(values)

    def _percentile(self, values: List[int], percentile: float) -> float:
        if not values:
            return 0.0
        sorted_vals = sorted(values)
        k = (len(sorted_vals) - 1) * percentile
        f = math.floor(k)
        c = math.ceil(k)
        if f == c:
            return float(sorted_vals[int(k)])
        d0 = sorted_vals[int(f)] * (c - k)
        d1 = sorted_vals[int(c)] * (k - f)
        return float(d0 + d1)

    def snapshot(self, simulation: "Simulation") -> MetricsSnapshot:
        return MetricsSnapshot(
            turn=simulation.current_turn,
            score=simulation.score,
            delivered=self.delivered,
            waiting=simulation.building.waiting_count(),
            riding=simulation.building.riding_count(),
            average_duration=self._average(self.durations),
            duration_p95=self._percentile(self.durations, 0.95),
        )


class Simulation:
    """Turn-based engine owning the mutable state of exactly one scenario run.

    Actions are applied one elevator at a time; an ``OPEN`` sees the floor
    queue as left by the elevators that acted before it in the same turn.
    """

    def __init__(self, parameters: ScenarioParameters) -> None:
        self.parameters = parameters
        self.building = Building(
            num_floors=parameters.num_floors,
            elevator_count=parameters.elevator_count,
            capacity=parameters.capacity,
        )
        self.current_turn: int = 0
        self.score: int = 0
        self.metrics = MetricsTracker()

    @property
    def elevators(self) -> List[Elevator]:
        return self.building.elevators

    def add_passenger(self, floor_number: int, passenger: Passenger) -> None:
        floor = self.building.get_floor(floor_number)
        if floor is None:
            raise ValueError(f"Floor {floor_number} does not exist")
        floor.add_passenger(passenger)

    def admit_arrivals(self, arrivals: Sequence[Iterable[Passenger]]) -> int:
        """Merge one turn of arrivals, given per floor, into the waiting queues."""
        count = 0
        for floor_number, passengers in enumerate(arrivals):
            for passenger in passengers:
                self.add_passenger(floor_number, passenger)
                count += 1
        return count

    def apply_action(self, elevator_index: int, action: str, picks: Sequence[int] = ()) -> None:
        elevator = self.building.get_elevator(elevator_index)
        if elevator is None:
            raise ActionError(
                f"Invalid elevator index: {elevator_index}",
                turn=self.current_turn,
                elevator_index=elevator_index,
                action=action,
            )

        if action == "UP":
            elevator.move_up(self.building.top_floor)
        elif action == "DOWN":
            elevator.move_down()
        elif action == "STAY":
            pass
        elif action == "OPEN":
            self._open(elevator, picks)
        else:
            raise ActionError(
                f"Unknown action: {action}",
                turn=self.current_turn,
                elevator_index=elevator_index,
                action=action,
            )

    def _open(self, elevator: Elevator, picks: Sequence[int]) -> None:
        # Drop off
        for passenger in elevator.unload():
            self.score += passenger.delivery_cost(self.current_turn)
            self.metrics.record_delivery(passenger, self.current_turn)

        # Pick up, highest index first so lower positions stay put
        floor = self.building.floors[elevator.floor]
        for index in sorted(picks, reverse=True):
            if index < 0 or index >= len(floor):
                raise ActionError(
                    f"Invalid passenger index {index} at floor {floor.number}",
                    turn=self.current_turn,
                    elevator_index=elevator.elevator_id,
                    action="OPEN",
                )
            if elevator.is_full:
                continue
            elevator.board(floor.take(index))

    def advance(self) -> None:
        self.current_turn += 1

    def final_score(self) -> int:
        """Cumulative score plus the penalty for everyone still in the building."""
        total = self.score
        final_turn = self.parameters.turns
        for floor in self.building.floors:
            for passenger in floor.waiting:
                total += passenger.stranded_cost(final_turn)
        for elevator in self.building.elevators:
            for passenger in elevator.passengers:
                total += passenger.stranded_cost(final_turn)
        return total

    def snapshot(self) -> TurnSnapshot:
        turn = self.current_turn
        return TurnSnapshot(
            turn=turn,
            score=self.score,
            elevators=[
                ElevatorView(
                    floor=elevator.floor,
                    passenger_count=elevator.load,
                    passengers=view_passengers(elevator.passengers, turn),
                )
                for elevator in self.building.elevators
            ],
            floors=[
                FloorView(
                    waiting_count=len(floor),
                    waiting=view_passengers(floor.waiting, turn),
                )
                for floor in self.building.floors
            ],
        )

    def metrics_snapshot(self) -> MetricsSnapshot:
        return self.metrics.snapshot(self)
