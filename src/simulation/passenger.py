from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Passenger:
    """A rider waiting at a floor or travelling in an elevator.

    Where the passenger is lives in whichever container holds it, so the
    record itself never changes after creation.
    """

    passenger_id: int
    arrival_turn: int
    destination: int

    def elapsed(self, turn: int) -> int:
        return turn - self.arrival_turn

    def delivery_cost(self, turn: int) -> int:
        """Score added when delivered during ``turn`` (arrival turn counts)."""
        return (turn - self.arrival_turn + 1) ** 2

    def stranded_cost(self, final_turn: int) -> int:
        """Score added at finalization for a passenger never delivered."""
        return (final_turn - self.arrival_turn) ** 2
