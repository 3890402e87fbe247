"""Commands available in every phase: help and exit."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any

from quizdesk.cli.args import CommandArgs
from quizdesk.cli.dispatcher import CommandDispatcher

if TYPE_CHECKING:
    from quizdesk.cli.session import SessionController


def help_command(session: SessionController, caller: Any, args: CommandArgs) -> None:
    session.current_phase.display_help()


def exit_command(session: SessionController, caller: Any, args: CommandArgs) -> None:
    session.io.write_line("Exiting QuizDesk.")
    session.stop()


def register_commands(dispatcher: CommandDispatcher[Any], session: SessionController) -> None:
    dispatcher.register("help", partial(help_command, session))
    dispatcher.register("exit", partial(exit_command, session))
