from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Sequence

from .interface import Scheduler
from .wire import AgentReader


class AgentSession:
    """Runs a scheduler against judge lines, producing reply lines per turn."""

    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler
        self.reader = AgentReader()

    def feed(self, line: str) -> List[str]:
        state = self.reader.feed(line)
        if state is None:
            return []
        actions = self.scheduler.select_actions(state.elevators, state.floors)
        if len(actions) != len(state.elevators):
            raise ValueError(
                f"Scheduler returned {len(actions)} actions for {len(state.elevators)} elevators"
            )
        return actions


class InProcessChannel:
    """Decision channel backed by a scheduler running in this process."""

    def __init__(self, scheduler: Scheduler) -> None:
        self.session = AgentSession(scheduler)
        self._replies: Deque[str] = deque()
        self.closed = False

    def send(self, lines: Sequence[str]) -> None:
        if self.closed:
            raise BrokenPipeError("Channel is closed")
        for line in lines:
            self._replies.extend(self.session.feed(line))

    def receive(self) -> Optional[str]:
        if self.closed or not self._replies:
            return None
        return self._replies.popleft()

    def close(self) -> None:
        self.closed = True
