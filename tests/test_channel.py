import os
import sys
from pathlib import Path

import pytest

from judge import Judge, ProtocolError, SubprocessChannel
from scheduler import GreedyScheduler, InProcessChannel
from simulation import generate_scenario

from conftest import quiet_scenario

SRC = Path(__file__).resolve().parent.parent / "src"

STAY_AGENT = """
import sys
n, m, c, t = map(int, sys.stdin.readline().split()[:4])
for _ in range(t):
    for _ in range(1 + m + n):
        sys.stdin.readline()
    for _ in range(m):
        print("STAY", flush=True)
"""


def test_subprocess_agent_idle_run():
    with SubprocessChannel([sys.executable, "-c", STAY_AGENT]) as channel:
        result = Judge(quiet_scenario(10, 3, 10, 100), channel).run()
    assert result.score == 0
    assert channel.process.returncode is not None


def test_agent_exiting_early():
    with SubprocessChannel([sys.executable, "-c", "pass"]) as channel:
        with pytest.raises(ProtocolError) as excinfo:
            Judge(quiet_scenario(4, 2, 2, 3), channel).run()
    assert excinfo.value.turn == 0


def test_close_terminates_a_stalled_agent():
    channel = SubprocessChannel(
        [sys.executable, "-c", "import time; time.sleep(60)"], kill_timeout=0.5
    )
    channel.close()
    assert channel.process.returncode is not None
    assert channel.receive() is None


def test_scheduler_module_matches_in_process_run():
    scenario = generate_scenario(5)
    env = dict(os.environ, PYTHONPATH=str(SRC))
    with SubprocessChannel([sys.executable, "-m", "scheduler", "greedy"], env=env) as channel:
        external = Judge(scenario, channel).run()

    internal = Judge(scenario, InProcessChannel(GreedyScheduler())).run()
    assert external.score == internal.score
    assert external.delivered > 0


def test_reply_that_is_not_utf8():
    agent = (
        "import sys\n"
        "for _ in range(1 + 1 + 1 + 2):\n"
        "    sys.stdin.readline()\n"
        "sys.stdout.buffer.write(b'OPEN \\xff\\n')\n"
        "sys.stdout.flush()\n"
    )
    with SubprocessChannel([sys.executable, "-c", agent]) as channel:
        with pytest.raises(ProtocolError) as excinfo:
            Judge(quiet_scenario(2, 1, 1, 1), channel).run()
    assert (excinfo.value.turn, excinfo.value.elevator_index) == (0, 0)
