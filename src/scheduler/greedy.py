from __future__ import annotations

from typing import List, Sequence

from .interface import ElevatorSnapshot, FloorSnapshot
from .utils import PickupLedger, direction_towards, format_open, nearest_floor


class GreedyScheduler:
    """Opens whenever it can drop off or pick up, otherwise heads for the nearest work."""

    def select_actions(
        self,
        elevator_state: Sequence[ElevatorSnapshot],
        floors: Sequence[FloorSnapshot],
    ) -> List[str]:
        ledger = PickupLedger(floors)
        actions: List[str] = []
        for elevator in elevator_state:
            current = elevator.floor
            has_delivery = elevator.alighting_here() > 0
            space = elevator.capacity_after_dropoff()
            can_pickup = space > 0 and ledger.has_available(current)

            if has_delivery or can_pickup:
                picks: List[int] = []
                if can_pickup:
                    picks = ledger.claim(current, ledger.available(current)[:space])
                actions.append(format_open(picks))
                continue

            if elevator.riders:
                actions.append(direction_towards(current, elevator.riders[0].destination))
                continue

            target = nearest_floor(current, [f.floor for f in floors if f.waiting])
            if target is None:
                actions.append("STAY")
            else:
                actions.append(direction_towards(current, target))
        return actions
