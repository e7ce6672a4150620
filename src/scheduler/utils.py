from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Set

from .interface import FloorSnapshot


def direction_towards(current: int, target: int) -> str:
    if target > current:
        return "UP"
    if target < current:
        return "DOWN"
    return "STAY"


def nearest_floor(current: int, candidates: Iterable[int]) -> Optional[int]:
    """Closest candidate floor, lower floor first on ties."""
    best: Optional[int] = None
    for floor in sorted(candidates):
        if best is None or abs(floor - current) < abs(best - current):
            best = floor
    return best


def format_open(picks: Sequence[int]) -> str:
    return " ".join(["OPEN"] + [str(index) for index in picks])


class PickupLedger:
    """Tracks which waiting passengers earlier elevators already claimed this turn.

    Indices handed to ``claim`` are positions in the queue as reported at the
    start of the turn; the returned indices are valid for the queue as the
    judge will see it when this elevator's action is applied.
    """

    def __init__(self, floors: Sequence[FloorSnapshot]) -> None:
        self._floors = {floor.floor: floor for floor in floors}
        self._claimed: Dict[int, Set[int]] = {floor.floor: set() for floor in floors}

    def available(self, floor: int) -> List[int]:
        claimed = self._claimed[floor]
        return [i for i in range(len(self._floors[floor].waiting)) if i not in claimed]

    def has_available(self, floor: int) -> bool:
        return len(self._claimed[floor]) < len(self._floors[floor].waiting)

    def claim(self, floor: int, indices: Iterable[int]) -> List[int]:
        claimed = self._claimed[floor]
        chosen = sorted(set(indices) - claimed)
        live = [index - sum(1 for c in claimed if c < index) for index in chosen]
        claimed.update(chosen)
        return live
