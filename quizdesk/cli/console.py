"""
Console I/O boundary.

The shell only ever reads one line or writes one line; it never touches
stdin/stdout directly. RichConsoleIO is the terminal implementation.
"""

from __future__ import annotations

from typing import Protocol

from rich.console import Console


class ConsoleIO(Protocol):
    """Protocol for the line-oriented console."""

    def read_line(self, prompt: str = "", secret: bool = False) -> str | None:
        """Block for one line of input. Returns None at end of input."""
        ...

    def write_line(self, text: str = "") -> None:
        """Write one line of plain text."""
        ...


class RichConsoleIO:
    """ConsoleIO on a rich Console. Output is printed verbatim (no markup)."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def read_line(self, prompt: str = "", secret: bool = False) -> str | None:
        try:
            return self.console.input(prompt, markup=False, password=secret)
        except EOFError:
            return None

    def write_line(self, text: str = "") -> None:
        self.console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def write_lines(io: ConsoleIO, lines: list[str]) -> None:
    for line in lines:
        io.write_line(line)
