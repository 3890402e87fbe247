"""Commands for a logged-in student: quiz, logout, and report for admins."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from quizdesk.cli.args import CommandArgs
from quizdesk.cli.console import write_lines
from quizdesk.cli.dispatcher import CommandDispatcher
from quizdesk.core.errors import LookupFailure, UsageError
from quizdesk.core.grading import Difficulty
from quizdesk.models.student import Student
from quizdesk.reports.generator import report_command
from quizdesk.study.quiz_engine import QuizEngine, summary_lines

if TYPE_CHECKING:
    from quizdesk.cli.session import SessionController


def quiz_command(session: SessionController, caller: Student, args: CommandArgs) -> None:
    if len(args.positional) != 2:
        raise UsageError("Invalid input. quiz <subject> <difficulty>")

    raw_subject, raw_difficulty = args.positional
    subject = session.app.catalog.lookup(raw_subject)
    difficulty = Difficulty.get(raw_difficulty)
    if subject is None or difficulty is None:
        raise LookupFailure("Invalid choice of subject or difficulty!")

    outcome = QuizEngine(session.app).run_quiz(caller, subject, difficulty)
    write_lines(session.io, summary_lines(outcome))


def logout_command(session: SessionController, caller: Student, args: CommandArgs) -> None:
    session.log_out()


def register_commands(
    dispatcher: CommandDispatcher[Student],
    session: SessionController,
    student: Student,
) -> None:
    dispatcher.register("quiz", partial(quiz_command, session))
    dispatcher.register("logout", partial(logout_command, session))

    if student.is_admin:
        dispatcher.register("report", partial(report_command, session.app))
