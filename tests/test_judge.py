import io

import pytest

from judge import Judge, ProtocolError, ScriptedChannel, judge_scenario, parse_reply
from scheduler import InProcessChannel, StayScheduler
from simulation import ActionError, ScenarioParameters
from simulation.scenario import build_scenario

from conftest import empty_table, quiet_scenario


def single_rider_scenario(capacity: int = 2, turns: int = 2):
    params = ScenarioParameters(3, 1, capacity, turns, 0.5)
    table = empty_table(3, turns)
    table[0][0] = [2]
    return build_scenario(params, table)


def test_idle_run_scores_zero():
    scenario = quiet_scenario(10, 3, 10, 100)
    result = judge_scenario(scenario, ScriptedChannel(["STAY"] * 300))
    assert result.score == 0
    assert result.turns == 100


def test_idle_run_with_in_process_agent():
    scenario = quiet_scenario(10, 3, 10, 100)
    result = judge_scenario(scenario, InProcessChannel(StayScheduler()))
    assert result.score == 0


def test_wire_format():
    channel = ScriptedChannel(["DOWN", "OPEN 0"])
    result = Judge(single_rider_scenario(), channel).run()

    assert channel.sent == [
        "3 1 2 2 0.5",
        # turn 0
        "1",
        "0",
        "1 2 0",
        "0",
        "0",
        # turn 1
        "0",
        "0",
        "1 2 1",
        "0",
        "0",
    ]
    # Boarded but never delivered: (T - 0) ** 2
    assert result.score == 4
    assert result.undelivered == 1


def test_delivery_through_the_protocol():
    params = ScenarioParameters(3, 1, 1, 4, 0.1)
    table = empty_table(3, 4)
    table[1][0] = [2]
    scenario = build_scenario(params, table)
    channel = ScriptedChannel(["OPEN 0", "UP", "OPEN", "STAY"])

    result = Judge(scenario, channel).run()

    # Riding passengers report their destination and elapsed turns.
    assert channel.sent[7] == "1 2 1"
    # Delivered during turn 2 after arriving on turn 0.
    assert result.score == 9
    assert result.delivered == 1
    assert result.undelivered == 0
    assert result.metrics.average_duration == 3.0


def test_stream_ending_early_names_turn_and_elevator():
    scenario = quiet_scenario(4, 3, 2, 3)
    with pytest.raises(ProtocolError) as excinfo:
        Judge(scenario, ScriptedChannel(["STAY"] * 4)).run()
    assert excinfo.value.turn == 1
    assert excinfo.value.elevator_index == 1
    assert "terminated" in str(excinfo.value)


def test_empty_reply_line():
    scenario = quiet_scenario(4, 2, 2, 3)
    with pytest.raises(ProtocolError) as excinfo:
        Judge(scenario, ScriptedChannel(["STAY", "   "])).run()
    assert (excinfo.value.turn, excinfo.value.elevator_index) == (0, 1)


@pytest.mark.parametrize("line", ["OPEN x", "OPEN -1", "OPEN 1.5", "OPEN 0 ²"])
def test_unparseable_pick(line):
    scenario = quiet_scenario(4, 1, 2, 3)
    with pytest.raises(ProtocolError):
        Judge(scenario, ScriptedChannel([line])).run()


def test_unknown_keyword_reports_turn_and_elevator():
    scenario = quiet_scenario(4, 2, 2, 3)
    channel = ScriptedChannel(["STAY", "STAY", "STAY", "JUMP"])
    with pytest.raises(ActionError) as excinfo:
        Judge(scenario, channel).run()
    assert (excinfo.value.turn, excinfo.value.elevator_index, excinfo.value.action) == (1, 1, "JUMP")


def test_out_of_range_pick_is_an_action_error():
    with pytest.raises(ActionError):
        Judge(single_rider_scenario(), ScriptedChannel(["OPEN 0"])).run()


def test_tokens_after_movement_are_ignored():
    scenario = quiet_scenario(4, 1, 2, 2)
    result = Judge(scenario, ScriptedChannel(["UP 3 4", "DOWN junk"])).run()
    assert result.score == 0


def test_reply_log_records_raw_lines():
    log = io.StringIO()
    scenario = quiet_scenario(4, 1, 2, 2)
    Judge(scenario, ScriptedChannel(["UP", "OPEN"]), reply_log=log).run()
    assert log.getvalue() == "UP\nOPEN\n"


def test_history_is_recorded_per_turn():
    channel = ScriptedChannel(["DOWN", "OPEN 0"])
    judge = Judge(single_rider_scenario(), channel, record_history=True)
    result = judge.run()
    assert [snapshot.turn for snapshot in result.history] == [0, 1]
    assert result.history[0].elevators[0].floor == 0
    assert result.history[0].floors[0].waiting_count == 1
    assert result.history[1].elevators[0].passenger_count == 1


def test_write_failure_is_a_protocol_error():
    class ClosedChannel(ScriptedChannel):
        def send(self, lines):
            raise BrokenPipeError("gone")

    with pytest.raises(ProtocolError) as excinfo:
        Judge(quiet_scenario(4, 1, 2, 2), ClosedChannel([])).run()
    assert excinfo.value.turn == 0


def test_play_turn_after_last_turn():
    judge = Judge(quiet_scenario(4, 1, 2, 1), ScriptedChannel(["STAY"]))
    judge.play_turn()
    assert judge.finished
    with pytest.raises(RuntimeError):
        judge.play_turn()


def test_header_is_sent_once():
    channel = ScriptedChannel(["STAY", "STAY"])
    judge = Judge(quiet_scenario(2, 1, 1, 2), channel)
    judge.start()
    judge.run()
    assert channel.sent.count("2 1 1 2 0.1") == 1


def test_parse_reply():
    command = parse_reply("OPEN 3 0 2", turn=0, elevator_index=0)
    assert command.action == "OPEN"
    assert command.picks == [3, 0, 2]
    assert parse_reply("  STAY  ", 0, 0).picks == []
    assert parse_reply("OPEN", 0, 0).picks == []
