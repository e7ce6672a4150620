from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TextIO

from simulation import MetricsSnapshot, Scenario, Simulation, TurnSnapshot

from .channel import DecisionChannel
from .errors import ProtocolError
from .protocol import format_header, format_turn, parse_reply

logger = logging.getLogger(__name__)


@dataclass
class JudgeResult:
    score: int
    turns: int
    delivered: int
    undelivered: int
    metrics: MetricsSnapshot
    history: List[TurnSnapshot] = field(default_factory=list)


class Judge:
    """Drives one scenario against a decision process in lock step.

    Each turn the full state is written before any reply is read, and every
    reply is applied before the next one is read. The channel belongs to the
    caller, which must close it whatever the outcome.
    """

    def __init__(
        self,
        scenario: Scenario,
        channel: DecisionChannel,
        reply_log: Optional[TextIO] = None,
        record_history: bool = False,
    ) -> None:
        self.scenario = scenario
        self.channel = channel
        self.reply_log = reply_log
        self.record_history = record_history
        self.simulation = Simulation(scenario.parameters)
        self.history: List[TurnSnapshot] = []
        self._started = False

    @property
    def current_turn(self) -> int:
        return self.simulation.current_turn

    @property
    def finished(self) -> bool:
        return self.simulation.current_turn >= self.scenario.parameters.turns

    def start(self) -> None:
        if self._started:
            return
        params = self.scenario.parameters
        logger.info(
            "Starting run: %d floors, %d elevators, capacity %d, %d turns, %d passengers",
            params.num_floors,
            params.elevator_count,
            params.capacity,
            params.turns,
            self.scenario.passenger_count,
        )
        self._send([format_header(params)])
        self._started = True

    def play_turn(self) -> TurnSnapshot:
        self.start()
        if self.finished:
            raise RuntimeError("All turns have already been played")
        simulation = self.simulation
        turn = simulation.current_turn

        arrived = simulation.admit_arrivals(self.scenario.arrivals_at(turn))
        self._send(format_turn(simulation))

        for elevator_index in range(self.scenario.parameters.elevator_count):
            try:
                line = self.channel.receive()
            except UnicodeDecodeError as exc:
                raise ProtocolError(
                    f"Reply is not valid UTF-8: {exc}",
                    turn=turn,
                    elevator_index=elevator_index,
                ) from exc
            if line is None:
                raise ProtocolError(
                    "Agent process terminated unexpectedly",
                    turn=turn,
                    elevator_index=elevator_index,
                )
            if self.reply_log is not None:
                self.reply_log.write(line + "\n")
            command = parse_reply(line, turn, elevator_index)
            simulation.apply_action(elevator_index, command.action, command.picks)

        snapshot = simulation.snapshot()
        if self.record_history:
            self.history.append(snapshot)
        logger.debug("Turn %d: %d arrived, score %d", turn, arrived, simulation.score)
        simulation.advance()
        return snapshot

    def run(self) -> JudgeResult:
        self.start()
        while not self.finished:
            self.play_turn()
        return self.result()

    def result(self) -> JudgeResult:
        simulation = self.simulation
        score = simulation.final_score()
        undelivered = simulation.building.waiting_count() + simulation.building.riding_count()
        logger.info(
            "Run finished after %d turns: score %d, %d delivered, %d undelivered",
            simulation.current_turn,
            score,
            simulation.metrics.delivered,
            undelivered,
        )
        return JudgeResult(
            score=score,
            turns=simulation.current_turn,
            delivered=simulation.metrics.delivered,
            undelivered=undelivered,
            metrics=simulation.metrics_snapshot(),
            history=list(self.history),
        )

    def _send(self, lines: Sequence[str]) -> None:
        try:
            self.channel.send(lines)
        except OSError as exc:
            raise ProtocolError(
                f"Failed to write to agent process: {exc}",
                turn=self.simulation.current_turn,
            ) from exc


def judge_scenario(
    scenario: Scenario,
    channel: DecisionChannel,
    reply_log: Optional[TextIO] = None,
    record_history: bool = False,
) -> JudgeResult:
    return Judge(scenario, channel, reply_log=reply_log, record_history=record_history).run()
