from __future__ import annotations

from typing import Optional


class SimulationError(Exception):
    """Base class for every fatal error raised while judging a run."""


class ScenarioFormatError(SimulationError):
    """Scenario input could not be parsed into an arrival table."""


class ActionError(SimulationError):
    """An elevator action was rejected by the engine."""

    def __init__(
        self,
        message: str,
        turn: Optional[int] = None,
        elevator_index: Optional[int] = None,
        action: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.turn = turn
        self.elevator_index = elevator_index
        self.action = action

    def __str__(self) -> str:
        where = []
        if self.turn is not None:
            where.append(f"turn {self.turn}")
        if self.elevator_index is not None:
            where.append(f"elevator {self.elevator_index}")
        if not where:
            return self.message
        return f"{', '.join(where)}: {self.message}"
