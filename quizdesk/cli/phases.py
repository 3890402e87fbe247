"""
Session phases.

A phase bundles a command dispatcher with the caller its commands run for:

- LoginPhase: no caller yet; login, signup, help, exit
- LoggedInPhase: a student; quiz, logout, help, exit (+ report for admins)

Entering a phase prints its help screen.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

from quizdesk.cli.commands import common, login, student as student_commands
from quizdesk.cli.console import write_lines
from quizdesk.cli.dispatcher import CommandDispatcher
from quizdesk.models.student import Student

if TYPE_CHECKING:
    from quizdesk.cli.session import SessionController

C = TypeVar("C")


class Phase(ABC, Generic[C]):
    """Base class for phases."""

    name = "phase"

    def __init__(self, session: SessionController):
        self.session = session
        self.dispatcher: CommandDispatcher[C] = CommandDispatcher(session.io)
        common.register_commands(self.dispatcher, session)

    @property
    @abstractmethod
    def caller(self) -> C:
        ...

    @abstractmethod
    def help_lines(self) -> list[str]:
        ...

    def display_help(self) -> None:
        write_lines(self.session.io, self.help_lines())

    def enter(self) -> None:
        self.display_help()

    def exit(self) -> None:
        pass

    def execute(self, raw_line: str) -> None:
        self.dispatcher.dispatch(self.caller, raw_line)


class LoginPhase(Phase[None]):
    """Nobody is logged in."""

    name = "login"

    def __init__(self, session: SessionController):
        super().__init__(session)
        login.register_commands(self.dispatcher, session)

    @property
    def caller(self) -> None:
        return None

    def help_lines(self) -> list[str]:
        return [
            "QuizDesk",
            "",
            "Commands:",
            "  login <username> <password>",
            "    Log in to QuizDesk",
            "  signup",
            "    Register as a new student",
            "  help",
            "    Show this help",
            "  exit",
            "    Exit the program",
        ]


class LoggedInPhase(Phase[Student]):
    """A student is logged in."""

    name = "logged_in"

    def __init__(self, session: SessionController, student: Student):
        super().__init__(session)
        self.student = student
        student_commands.register_commands(self.dispatcher, session, student)

    @property
    def caller(self) -> Student:
        return self.student

    def help_lines(self) -> list[str]:
        lines = [
            f"Welcome to QuizDesk, {self.student.fullname}",
            "",
            "Available Subjects:",
        ]
        subjects = self.session.app.catalog.all()
        if subjects:
            lines.extend(f"  {subject.id} ({subject.name})" for subject in subjects)
        else:
            lines.append("  (none)")

        lines.extend([
            "",
            "Difficulties:",
            "  easy, medium, hard",
            "",
            "Commands:",
            "  quiz <subject> <difficulty>",
            "    Take a quiz",
            "  logout",
            "    Log out",
            "  help",
            "    Show this help",
            "  exit",
            "    Exit the program",
        ])

        # Only shown to admins; the command is only registered for them too
        if self.student.is_admin:
            lines.extend([
                "",
                "Administrator Commands:",
                "  report -g <student|quiz> [-o <out.txt>] [generator options]",
                "    -g student -s <username>",
                "    -g quiz -q <subject>:<difficulty>",
            ])
        return lines
