"""
Report generators for the admin `report` command.

    report -g student -s <username> [-o <path>]
    report -g quiz -q <subject>:<difficulty> [-o <path>]

Each ReportKind has one generator, registered with @register. A generator
validates its own flags and returns the report body; nothing is written
unless it succeeds.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable

from loguru import logger

from quizdesk.cli.args import CommandArgs
from quizdesk.core.context import ApplicationContext
from quizdesk.core.errors import LookupFailure, PersistenceError, UsageError
from quizdesk.core.grading import Difficulty
from quizdesk.models.student import Student
from quizdesk.reports.aggregator import format_percentage, quiz_statistics, student_attempt_lines
from quizdesk.storage.roster_store import write_atomically

REPORT_BANNER = ["QuizDesk Report", "==============="]


class ReportKind(str, Enum):
    """Report variants selectable with -g."""

    STUDENT = "student"
    QUIZ = "quiz"


ReportGenerator = Callable[[ApplicationContext, CommandArgs], list[str]]

# Generator registry - populated by @register decorator
GENERATORS: dict[ReportKind, ReportGenerator] = {}


def register(kind: ReportKind):
    """Decorator to register a report generator."""
    def decorator(func: ReportGenerator) -> ReportGenerator:
        GENERATORS[kind] = func
        return func
    return decorator


@register(ReportKind.STUDENT)
def student_report(app: ApplicationContext, args: CommandArgs) -> list[str]:
    """Every attempt of one student, oldest first, with its grade."""
    if not args.has_flag("s"):
        raise UsageError("No student to produce a report on was specified!")

    student = app.roster.get(args.flag("s"))
    if student is None:
        raise LookupFailure("Invalid student selection!")

    lines = [
        f"Report produced for the student: {student.fullname} ({student.username})",
        "",
        "## Quiz Attempts",
    ]
    for line in student_attempt_lines(student):
        lines.append(f"- {line.subject}:{line.difficulty.value} GRADE: {line.grade.text}")
    return lines


@register(ReportKind.QUIZ)
def quiz_report(app: ApplicationContext, args: CommandArgs) -> list[str]:
    """Average and best result for one subject:difficulty, and who got the best."""
    if not args.has_flag("q"):
        raise UsageError("No quiz provided to produce a report on was specified!")

    raw_subject, sep, raw_difficulty = args.flag("q").partition(":")
    subject = app.catalog.lookup(raw_subject) if sep else None
    difficulty = Difficulty.get(raw_difficulty) if sep else None
    if subject is None or difficulty is None:
        raise LookupFailure("Invalid quiz selection!")

    lines = [
        f"Report produced for the quiz: {subject.id}:{difficulty.value}",
        "",
    ]

    stats = quiz_statistics(app.roster.students, subject.id, difficulty)
    if stats is not None:
        lines.append(
            f"The average percentage attained is: {format_percentage(stats.average)}% "
            f"(grade: {stats.average_grade.text})"
        )
        lines.append(
            f"The max percentage attained is: {stats.maximum}% "
            f"(grade: {stats.maximum_grade.text})"
        )
        lines.append(f"Achieved by: {', '.join(stats.achieved_by)}")
    return lines


def render_report(body: list[str]) -> str:
    return "\n".join([*REPORT_BANNER, "", *body]) + "\n"


def generate_report(app: ApplicationContext, args: CommandArgs) -> Path:
    """
    Validate the flags, build the selected report and write it out.

    Returns the path written. Raises UsageError/LookupFailure before any
    file is touched, PersistenceError if the file cannot be written.
    """
    if not args.has_flag("g"):
        raise UsageError("No report generator was specified!")

    try:
        kind = ReportKind(args.flag("g"))
    except ValueError:
        raise LookupFailure("Invalid report generator selection!") from None

    body = GENERATORS[kind](app, args)

    path = Path(args.flag("o") or app.settings.report_default_path)
    try:
        write_atomically(path, render_report(body))
    except OSError as e:
        raise PersistenceError(f"Failed to create the report at {path}: {e}") from e

    logger.info(f"Wrote {kind.value} report to {path}")
    return path


def report_command(app: ApplicationContext, caller: Student, args: CommandArgs) -> None:
    """The `report` verb, registered for admin callers only."""
    path = generate_report(app, args)
    app.io.write_line(f"Report written to {path}")
