from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScenarioParameters:
    """Fixed parameters of one scenario: N floors, M elevators of capacity C, T turns."""

    num_floors: int = 10
    elevator_count: int = 3
    capacity: int = 10
    turns: int = 100
    arrival_rate: float = 0.1

    def validate(self) -> None:
        if self.num_floors < 1:
            raise ValueError(f"num_floors must be at least 1, got {self.num_floors}")
        if self.elevator_count < 1:
            raise ValueError(f"elevator_count must be at least 1, got {self.elevator_count}")
        if self.capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {self.capacity}")
        if self.turns < 0:
            raise ValueError(f"turns must be non-negative, got {self.turns}")
        if not self.arrival_rate >= 0:
            raise ValueError(f"arrival_rate must be non-negative, got {self.arrival_rate}")

    def header(self) -> str:
        """Return the ``N M C T lambda`` line shared by scenario files and the wire."""
        return (
            f"{self.num_floors} {self.elevator_count} {self.capacity} "
            f"{self.turns} {format_rate(self.arrival_rate)}"
        )


def format_rate(rate: float) -> str:
    text = repr(float(rate))
    if text.endswith(".0"):
        return text[:-2]
    return text
