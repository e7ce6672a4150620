import pytest

from judge import Judge
from scheduler import (
    ElevatorSnapshot,
    FloorSnapshot,
    GreedyScheduler,
    InProcessChannel,
    Rider,
    get_scheduler,
)
from scheduler.session import AgentSession
from scheduler.utils import PickupLedger, direction_towards, nearest_floor
from scheduler.wire import AgentReader, parse_riders
from simulation import ScenarioParameters, generate_scenario


def run(name, scenario):
    return Judge(scenario, InProcessChannel(get_scheduler(name))).run()


@pytest.fixture(scope="module")
def busy_scenario():
    return generate_scenario(42, ScenarioParameters(arrival_rate=0.3))


def test_greedy_beats_standing_still(busy_scenario):
    stay = run("stay", busy_scenario)
    greedy = run("greedy", busy_scenario)
    assert stay.delivered == 0
    assert greedy.delivered > 0
    assert greedy.score < stay.score


@pytest.mark.parametrize("name", ["fcfs", "scan"])
def test_other_schedulers_play_valid_runs(name, busy_scenario):
    stay = run("stay", busy_scenario)
    result = run(name, busy_scenario)
    assert result.delivered > 0
    assert result.score <= stay.score


def test_tight_capacity_runs_stay_valid():
    scenario = generate_scenario(9, ScenarioParameters(num_floors=6, elevator_count=4, capacity=1, turns=60, arrival_rate=0.6))
    for name in ("greedy", "fcfs", "scan"):
        result = run(name, scenario)
        assert result.turns == 60


def test_unknown_scheduler():
    with pytest.raises(ValueError):
        get_scheduler("random")


def test_greedy_shares_a_floor_between_elevators():
    floors = [
        FloorSnapshot(0, [Rider(3, 0), Rider(2, 1), Rider(1, 0)]),
        FloorSnapshot(1, []),
        FloorSnapshot(2, []),
        FloorSnapshot(3, []),
    ]
    elevators = [
        ElevatorSnapshot(0, 0, [], capacity=2),
        ElevatorSnapshot(1, 0, [], capacity=2),
        ElevatorSnapshot(2, 3, [], capacity=2),
    ]
    actions = GreedyScheduler().select_actions(elevators, floors)
    # The second car sees the queue after the first took two riders.
    assert actions == ["OPEN 0 1", "OPEN 0", "DOWN"]


def test_greedy_drops_off_when_full():
    floors = [FloorSnapshot(0, [Rider(1, 0)]), FloorSnapshot(1, [])]
    elevators = [ElevatorSnapshot(0, 1, [Rider(1, 3)], capacity=1)]
    assert GreedyScheduler().select_actions(elevators, floors) == ["OPEN"]


def test_pickup_ledger_translates_indices():
    floor = FloorSnapshot(0, [Rider(1, 0)] * 4)
    ledger = PickupLedger([floor])
    assert ledger.claim(0, [0, 2]) == [0, 2]
    assert ledger.available(0) == [1, 3]
    assert ledger.claim(0, [3, 1]) == [0, 1]
    assert not ledger.has_available(0)


def test_helpers():
    assert direction_towards(2, 5) == "UP"
    assert direction_towards(5, 2) == "DOWN"
    assert direction_towards(3, 3) == "STAY"
    assert nearest_floor(4, [1, 5, 2]) == 5
    assert nearest_floor(4, [2, 6]) == 2
    assert nearest_floor(4, []) is None


def test_agent_reader():
    reader = AgentReader()
    assert reader.feed("3 2 5 10 0.1\n") is None
    lines = ["1 0", "1 2 4", "0", "2 1 0 2 3", "0", "0"]
    states = [reader.feed(line) for line in lines]
    assert states[:-1] == [None] * 5
    state = states[-1]
    assert state.turn == 0
    assert [e.floor for e in state.elevators] == [1, 0]
    assert state.elevators[0].riders == [Rider(2, 4)]
    assert state.elevators[1].capacity == 5
    assert state.floors[0].waiting == [Rider(1, 0), Rider(2, 3)]
    assert state.floors[2].waiting == []


def test_parse_riders_checks_count():
    with pytest.raises(ValueError):
        parse_riders("2 1 0")
    with pytest.raises(ValueError):
        parse_riders("")


def test_session_answers_once_per_turn():
    session = AgentSession(get_scheduler("stay"))
    assert session.feed("2 2 1 5 0.1") == []
    replies = [session.feed(line) for line in ["1 1", "0", "0", "0", "0"]]
    assert replies == [[], [], [], [], ["STAY", "STAY"]]
