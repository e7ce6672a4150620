"""Turn protocol driver that judges external decision processes."""

from .channel import DecisionChannel, ScriptedChannel, SubprocessChannel
from .driver import Judge, JudgeResult, judge_scenario
from .errors import ProtocolError
from .protocol import Command, format_header, format_turn, parse_reply

__all__ = [
    "Command",
    "DecisionChannel",
    "Judge",
    "JudgeResult",
    "ProtocolError",
    "ScriptedChannel",
    "SubprocessChannel",
    "format_header",
    "format_turn",
    "judge_scenario",
    "parse_reply",
]
