from __future__ import annotations

from typing import Dict, List, Sequence

from .interface import ElevatorSnapshot, FloorSnapshot
from .utils import PickupLedger, format_open


class ScanScheduler:
    """Implements an elevator SCAN algorithm (elevator algorithm).

    Each car keeps sweeping in one direction while it has riders or waiting
    passengers ahead, and only boards passengers travelling its way.
    """

    def __init__(self) -> None:
        self.directions: Dict[int, int] = {}

    def select_actions(
        self,
        elevator_state: Sequence[ElevatorSnapshot],
        floors: Sequence[FloorSnapshot],
    ) -> List[str]:
        ledger = PickupLedger(floors)
        return [self._decide(elevator, floors, ledger) for elevator in elevator_state]

    def _decide(
        self,
        elevator: ElevatorSnapshot,
        floors: Sequence[FloorSnapshot],
        ledger: PickupLedger,
    ) -> str:
        current = elevator.floor
        direction = self.directions.get(elevator.elevator_id, 1)
        space = elevator.capacity_after_dropoff()

        if not self._work_ahead(elevator, floors, ledger, direction):
            # Nothing left this way: turn around before choosing who boards.
            if self._work_ahead(elevator, floors, ledger, -direction) or self._boarding(
                floors[current], ledger, -direction
            ):
                direction = -direction
        self.directions[elevator.elevator_id] = direction

        boarding = self._boarding(floors[current], ledger, direction)[:space]
        if elevator.alighting_here() or boarding:
            return format_open(ledger.claim(current, boarding))

        if self._work_ahead(elevator, floors, ledger, direction):
            return "UP" if direction > 0 else "DOWN"
        if self._work_ahead(elevator, floors, ledger, -direction):
            self.directions[elevator.elevator_id] = -direction
            return "UP" if direction < 0 else "DOWN"
        return "STAY"

    def _boarding(self, floor: FloorSnapshot, ledger: PickupLedger, direction: int) -> List[int]:
        return [i for i in ledger.available(floor.floor) if floor.direction_of(i) == direction]

    def _work_ahead(
        self,
        elevator: ElevatorSnapshot,
        floors: Sequence[FloorSnapshot],
        ledger: PickupLedger,
        direction: int,
    ) -> bool:
        current = elevator.floor
        for rider in elevator.riders:
            if (rider.destination - current) * direction > 0:
                return True
        for floor in floors:
            if (floor.floor - current) * direction > 0 and ledger.has_available(floor.floor):
                return True
        return False
