from __future__ import annotations

from typing import List, Sequence

from .interface import ElevatorSnapshot, FloorSnapshot


class StayScheduler:
    """Keeps every elevator parked; the baseline every other strategy should beat."""

    def select_actions(
        self,
        elevator_state: Sequence[ElevatorSnapshot],
        floors: Sequence[FloorSnapshot],
    ) -> List[str]:
        return ["STAY" for _ in elevator_state]
