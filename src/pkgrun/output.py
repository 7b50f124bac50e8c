"""Execution results and user-facing reporting."""

import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TextIO


@dataclass
class ExecutionResult:
    """Result of running one stage."""

    stage: str
    command: str
    returncode: int
    duration: float

    @property
    def succeeded(self) -> bool:
        """Whether the command exited with code 0."""
        return self.returncode == 0


class Reporter:
    """Prints informational lines, errors and lists."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    def info(self, message: str) -> None:
        print(f"info {message}", file=self.out)

    def error(self, message: str) -> None:
        print(f"error {message}", file=self.err)

    def log(self, message: str) -> None:
        print(message, file=self.out)

    def list(self, items: Sequence[str], hints: Mapping[str, str] | None = None) -> None:
        """Print a bulleted list, each item followed by its hint if any."""
        hints = hints or {}
        for item in items:
            print(f"   - {item}", file=self.out)
            hint = hints.get(item)
            if hint:
                print(f"      {hint}", file=self.out)
