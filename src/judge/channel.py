"""Bidirectional line channels to a decision process."""
from __future__ import annotations

import contextlib
import logging
import subprocess
from typing import IO, Iterable, List, Mapping, Optional, Protocol, Sequence, Union

logger = logging.getLogger(__name__)


class DecisionChannel(Protocol):
    """Capability the judge needs from a decision process."""

    def send(self, lines: Sequence[str]) -> None:
        """Write ``lines`` and flush. Raise ``BrokenPipeError`` if the peer is gone."""
        ...

    def receive(self) -> Optional[str]:
        """Return the next reply line without its newline, or ``None`` once exhausted."""
        ...

    def close(self) -> None:
        ...


class SubprocessChannel:
    """Talks to an external program over its standard input and output."""

    def __init__(
        self,
        command: Sequence[str],
        stderr: Union[None, int, IO] = None,
        env: Optional[Mapping[str, str]] = None,
        kill_timeout: float = 1.0,
    ) -> None:
        self.command = list(command)
        self.kill_timeout = kill_timeout
        logger.debug("Spawning decision process: %s", self.command)
        self.process = subprocess.Popen(
            self.command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=stderr,
            env=env,
            encoding="utf-8",
            bufsize=1,
        )

    def __enter__(self) -> "SubprocessChannel":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def send(self, lines: Sequence[str]) -> None:
        stdin = self.process.stdin
        if stdin is None or stdin.closed:
            raise BrokenPipeError("Decision process input is closed")
        try:
            stdin.write("".join(line + "\n" for line in lines))
            stdin.flush()
        except ValueError as exc:
            raise BrokenPipeError(str(exc)) from exc

    def receive(self) -> Optional[str]:
        stdout = self.process.stdout
        if stdout is None or stdout.closed:
            return None
        line = stdout.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def close(self) -> None:
        if self.process.stdin is not None:
            with contextlib.suppress(OSError, ValueError):
                self.process.stdin.close()
        if self.process.poll() is None:
            self.process.terminate()
            try:
                self.process.wait(timeout=self.kill_timeout)
            except subprocess.TimeoutExpired:
                logger.warning("Decision process %s ignored terminate, killing it", self.process.pid)
                self.process.kill()
                self.process.wait()
        if self.process.stdout is not None:
            with contextlib.suppress(OSError):
                self.process.stdout.close()
        logger.debug("Decision process exited with status %s", self.process.returncode)


class ScriptedChannel:
    """Replays a fixed list of reply lines, e.g. a saved agent output."""

    def __init__(self, replies: Iterable[str]) -> None:
        self._replies: List[str] = list(replies)
        self._position = 0
        self.sent: List[str] = []
        self.closed = False

    @classmethod
    def from_text(cls, text: str) -> "ScriptedChannel":
        return cls(text.splitlines())

    def send(self, lines: Sequence[str]) -> None:
        if self.closed:
            raise BrokenPipeError("Channel is closed")
        self.sent.extend(lines)

    def receive(self) -> Optional[str]:
        if self.closed or self._position >= len(self._replies):
            return None
        line = self._replies[self._position]
        self._position += 1
        return line

    def close(self) -> None:
        self.closed = True
