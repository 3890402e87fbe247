"""
Command registry.

A dispatcher maps verbs to handlers for one kind of caller. The login phase
uses a CommandDispatcher[None]; the logged-in phase a
CommandDispatcher[Student], so its handlers always receive a student.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from loguru import logger

from quizdesk.cli.args import CommandArgs, parse_args
from quizdesk.cli.console import ConsoleIO

C = TypeVar("C")

Command = Callable[[C, CommandArgs], None]

UNKNOWN_COMMAND_MESSAGE = "Invalid command!"


class CommandDispatcher(Generic[C]):
    """Verb -> handler table for callers of type C."""

    def __init__(self, io: ConsoleIO):
        self.io = io
        self._commands: dict[str, Command[C]] = {}

    def register(self, name: str, command: Command[C]) -> CommandDispatcher[C]:
        """Register a handler, replacing any existing one of that name."""
        self._commands[name] = command
        return self

    def get(self, name: str) -> Command[C] | None:
        return self._commands.get(name)

    @property
    def names(self) -> list[str]:
        return sorted(self._commands)

    def dispatch(self, caller: C, raw_line: str) -> None:
        """
        Run the command named by the first token of raw_line.

        Unknown verbs print a message and change nothing. Exceptions raised
        by a handler propagate to the caller.
        """
        tokens = raw_line.split()
        if not tokens:
            return

        verb, rest = tokens[0], tokens[1:]
        command = self._commands.get(verb)
        if command is None:
            logger.debug(f"Unknown command: {verb}")
            self.io.write_line(UNKNOWN_COMMAND_MESSAGE)
            return

        command(caller, parse_args(rest))
