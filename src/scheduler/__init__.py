from __future__ import annotations

from typing import Dict, Type

from .fcfs import FirstComeFirstServedScheduler
from .greedy import GreedyScheduler
from .interface import ElevatorSnapshot, FloorSnapshot, Rider, Scheduler
from .scan import ScanScheduler
from .session import AgentSession, InProcessChannel
from .stay import StayScheduler

__all__ = [
    "AgentSession",
    "ElevatorSnapshot",
    "FirstComeFirstServedScheduler",
    "FloorSnapshot",
    "GreedyScheduler",
    "InProcessChannel",
    "Rider",
    "ScanScheduler",
    "Scheduler",
    "StayScheduler",
    "get_scheduler",
]


SCHEDULER_REGISTRY: Dict[str, Type[Scheduler]] = {
    "stay": StayScheduler,
    "greedy": GreedyScheduler,
    "fcfs": FirstComeFirstServedScheduler,
    "scan": ScanScheduler,
}


def get_scheduler(name: str, **kwargs) -> Scheduler:
    cls = SCHEDULER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown scheduler '{name}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
    return cls(**kwargs)
