"""
Commands for the login phase.

login <username> <password>
    An unknown username and a wrong password produce the same message, so
    the prompt cannot be used to discover which usernames exist.
signup
    Prompts for the student's details. The first student ever registered
    becomes the administrator.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from loguru import logger

from quizdesk.cli.args import CommandArgs
from quizdesk.cli.dispatcher import CommandDispatcher
from quizdesk.core.errors import LookupFailure, UsageError
from quizdesk.models.student import create_student, parse_student_params

if TYPE_CHECKING:
    from quizdesk.cli.session import SessionController


LOGIN_FAILED_MESSAGE = "Username or Password is incorrect."

# (field, prompt, read without echo)
SIGNUP_PROMPTS = [
    ("fullname", "Enter your full name: ", False),
    ("age", "Enter your age: ", False),
    ("year_group", "Enter your year group: ", False),
    ("password", "Enter your password: ", True),
]


def login_command(session: SessionController, caller: None, args: CommandArgs) -> None:
    if len(args.positional) != 2:
        raise UsageError("Invalid input. login <username> <password>")

    username, password = args.positional
    app = session.app

    student = app.roster.get(username)
    if student is None or not app.hasher.verify(password, student.password_hash):
        logger.debug("Rejected login attempt")
        raise LookupFailure(LOGIN_FAILED_MESSAGE)

    logger.info(f"{student.username} logged in")
    session.log_in(student)


def signup_command(session: SessionController, caller: None, args: CommandArgs) -> None:
    app = session.app
    io = session.io

    # Decided before prompting, so the answer can't change mid-signup
    admin = app.roster.is_empty()

    answers: dict[str, str] = {}
    for field, prompt, secret in SIGNUP_PROMPTS:
        io.write_line(prompt)
        raw = io.read_line(secret=secret)
        if raw is None:
            raise UsageError("Signup cancelled.")
        answers[field] = raw

    params = parse_student_params(**answers, admin=admin)
    student = create_student(params, app.hasher, app.roster.usernames)
    app.roster.register(student)

    io.write_line(f"Your username is: {student.username}")
    session.log_in(student)


def register_commands(dispatcher: CommandDispatcher[None], session: SessionController) -> None:
    dispatcher.register("login", partial(login_command, session))
    dispatcher.register("signup", partial(signup_command, session))
