from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .passenger import Passenger


@dataclass
class Floor:
    """Represents a floor with a single ordered waiting queue."""

    number: int
    waiting: List[Passenger] = field(default_factory=list)

    def add_passenger(self, passenger: Passenger) -> None:
        self.waiting.append(passenger)

    def take(self, index: int) -> Passenger:
        return self.waiting.pop(index)

    def __len__(self) -> int:
        return len(self.waiting)
