from __future__ import annotations

from typing import Callable, Protocol

from ..errors import StepFailure


class Prompter(Protocol):
    def wait_for_confirmation(self, message: str) -> None:
        """Block until the operator acknowledges `message`."""
        ...


class TerminalPrompter:
    """Waits on stdin with no timeout."""

    def __init__(self, read_line: Callable[[str], str] = input) -> None:
        self._read_line = read_line

    def wait_for_confirmation(self, message: str) -> None:
        try:
            self._read_line(f"{message} Press Enter when done... ")
        except EOFError as e:
            raise StepFailure("No operator input available (stdin closed)") from e
