from __future__ import annotations

from typing import List

import pytest

from simulation import Passenger, ScenarioParameters, Simulation
from simulation.scenario import Scenario, build_scenario


def empty_table(num_floors: int, turns: int) -> List[List[List[int]]]:
    return [[[] for _ in range(turns)] for _ in range(num_floors)]


def quiet_scenario(num_floors: int = 10, elevator_count: int = 3, capacity: int = 10, turns: int = 100) -> Scenario:
    params = ScenarioParameters(num_floors, elevator_count, capacity, turns, 0.1)
    return build_scenario(params, empty_table(num_floors, turns))


@pytest.fixture
def simulation() -> Simulation:
    return Simulation(ScenarioParameters(num_floors=10, elevator_count=3, capacity=10, turns=100))


def waiting(sim: Simulation, floor: int, *destinations: int, arrival_turn: int = 0) -> List[Passenger]:
    start = 1000 + sum(len(f) for f in sim.building.floors)
    passengers = [
        Passenger(start + i, arrival_turn=arrival_turn, destination=d)
        for i, d in enumerate(destinations)
    ]
    for passenger in passengers:
        sim.add_passenger(floor, passenger)
    return passengers
