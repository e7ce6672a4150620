"""Agent side of the judge protocol: turns incoming lines into snapshots."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .interface import ElevatorSnapshot, FloorSnapshot, Rider


@dataclass(frozen=True)
class AgentHeader:
    num_floors: int
    elevator_count: int
    capacity: int
    turns: int
    arrival_rate: float


@dataclass(frozen=True)
class TurnState:
    turn: int
    elevators: List[ElevatorSnapshot]
    floors: List[FloorSnapshot]


def parse_riders(line: str) -> List[Rider]:
    values = [int(token) for token in line.split()]
    if not values:
        raise ValueError("Missing passenger count")
    count = values[0]
    if len(values) != 1 + 2 * count:
        raise ValueError(f"Expected {count} passengers, got line {line!r}")
    return [Rider(destination=values[1 + 2 * i], elapsed=values[2 + 2 * i]) for i in range(count)]


class AgentReader:
    """Push parser: feed lines one at a time, get a ``TurnState`` when a turn is complete."""

    def __init__(self) -> None:
        self.header: Optional[AgentHeader] = None
        self.turn = 0
        self._pending: List[str] = []

    def feed(self, line: str) -> Optional[TurnState]:
        line = line.strip()
        if self.header is None:
            parts = line.split()
            if len(parts) < 5:
                raise ValueError(f"Malformed header line: {line!r}")
            self.header = AgentHeader(
                num_floors=int(parts[0]),
                elevator_count=int(parts[1]),
                capacity=int(parts[2]),
                turns=int(parts[3]),
                arrival_rate=float(parts[4]),
            )
            return None

        self._pending.append(line)
        header = self.header
        if len(self._pending) < 1 + header.elevator_count + header.num_floors:
            return None

        floors_line, *rest = self._pending
        self._pending = []
        positions = [int(token) for token in floors_line.split()]
        if len(positions) != header.elevator_count:
            raise ValueError(f"Expected {header.elevator_count} elevator floors, got {floors_line!r}")
        elevator_lines = rest[: header.elevator_count]
        floor_lines = rest[header.elevator_count :]
        state = TurnState(
            turn=self.turn,
            elevators=[
                ElevatorSnapshot(
                    elevator_id=i,
                    floor=positions[i],
                    riders=parse_riders(elevator_lines[i]),
                    capacity=header.capacity,
                )
                for i in range(header.elevator_count)
            ],
            floors=[
                FloorSnapshot(floor=i, waiting=parse_riders(floor_lines[i]))
                for i in range(header.num_floors)
            ],
        )
        self.turn += 1
        return state
