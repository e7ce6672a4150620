from __future__ import annotations

from typing import List, Optional, Sequence, Set

from .interface import ElevatorSnapshot, FloorSnapshot
from .utils import PickupLedger, direction_towards, format_open


class FirstComeFirstServedScheduler:
    """Serves the passengers that have waited longest first."""

    def select_actions(
        self,
        elevator_state: Sequence[ElevatorSnapshot],
        floors: Sequence[FloorSnapshot],
    ) -> List[str]:
        ledger = PickupLedger(floors)
        targeted: Set[int] = set()
        actions: List[str] = []
        for elevator in elevator_state:
            current = elevator.floor
            waiting = floors[current].waiting
            space = elevator.capacity_after_dropoff()
            available = ledger.available(current)

            if elevator.alighting_here() or (space and available):
                oldest = sorted(available, key=lambda i: -waiting[i].elapsed)[:space]
                actions.append(format_open(ledger.claim(current, oldest)))
                continue

            if elevator.riders:
                oldest_rider = max(elevator.riders, key=lambda rider: rider.elapsed)
                actions.append(direction_towards(current, oldest_rider.destination))
                continue

            target = self._oldest_request(floors, ledger, targeted, current)
            if target is None:
                actions.append("STAY")
                continue
            targeted.add(target)
            actions.append(direction_towards(current, target))
        return actions

    def _oldest_request(
        self,
        floors: Sequence[FloorSnapshot],
        ledger: PickupLedger,
        targeted: Set[int],
        current: int,
    ) -> Optional[int]:
        best: Optional[int] = None
        best_key = None
        for floor in floors:
            if floor.floor in targeted or not ledger.has_available(floor.floor):
                continue
            oldest = max(floor.waiting[i].elapsed for i in ledger.available(floor.floor))
            key = (-oldest, abs(floor.floor - current))
            if best_key is None or key < best_key:
                best, best_key = floor.floor, key
        return best
