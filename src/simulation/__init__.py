"""Simulation primitives for LiftJudge."""

from .building import Building
from .config import ScenarioParameters
from .elevator import Elevator
from .errors import ActionError, ScenarioFormatError, SimulationError
from .floor import Floor
from .generator import generate_scenario
from .passenger import Passenger
from .scenario import Scenario, format_scenario, load_scenario, parse_scenario
from .simulation import MetricsSnapshot, Simulation
from .snapshot import TurnSnapshot

__all__ = [
    "ActionError",
    "Building",
    "Elevator",
    "Floor",
    "MetricsSnapshot",
    "Passenger",
    "Scenario",
    "ScenarioFormatError",
    "ScenarioParameters",
    "Simulation",
    "SimulationError",
    "TurnSnapshot",
    "format_scenario",
    "generate_scenario",
    "load_scenario",
    "parse_scenario",
]
