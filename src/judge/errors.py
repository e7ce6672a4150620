from __future__ import annotations

from typing import Optional

from simulation.errors import SimulationError


class ProtocolError(SimulationError):
    """The decision process broke the request/response exchange."""

    def __init__(
        self,
        message: str,
        turn: Optional[int] = None,
        elevator_index: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.turn = turn
        self.elevator_index = elevator_index

    def __str__(self) -> str:
        where = []
        if self.turn is not None:
            where.append(f"turn {self.turn}")
        if self.elevator_index is not None:
            where.append(f"elevator {self.elevator_index}")
        if not where:
            return self.message
        return f"{', '.join(where)}: {self.message}"
