"""
Session controller.

Owns the active phase and the input loop. Each line is handed to the active
phase and runs to completion before the next line is read. Errors raised by
commands are printed on the console and the loop carries on.
"""

from __future__ import annotations

from loguru import logger

from quizdesk.cli.phases import LoggedInPhase, LoginPhase, Phase
from quizdesk.core.context import ApplicationContext
from quizdesk.core.errors import PersistenceError, QuizDeskError
from quizdesk.models.student import Student

PROMPT = "> "


class SessionController:
    """Drives phase transitions and feeds input to the active phase."""

    def __init__(self, app: ApplicationContext):
        self.app = app
        self.io = app.io
        self.running = False
        self.exit_code = 0
        self._stopped = False
        self.login_phase = LoginPhase(self)
        self.current_phase: Phase = self.login_phase

    @property
    def stopped(self) -> bool:
        return self._stopped

    def transition_to(self, phase: Phase) -> None:
        logger.debug(f"Phase {self.current_phase.name} -> {phase.name}")
        self.current_phase.exit()
        self.current_phase = phase
        self.current_phase.enter()

    def log_in(self, student: Student) -> None:
        self.transition_to(LoggedInPhase(self, student))

    def log_out(self) -> None:
        self.transition_to(self.login_phase)

    def feed(self, line: str) -> None:
        """Dispatch one line of input to the active phase."""
        if not line.strip():
            return
        try:
            self.current_phase.execute(line)
        except QuizDeskError as e:
            logger.debug(f"{type(e).__name__}: {e}")
            self.io.write_line(str(e))

    def run(self) -> int:
        """Read and dispatch lines until `exit` or end of input. Returns the exit code."""
        self.running = True
        self.current_phase.enter()

        while self.running:
            line = self.io.read_line(PROMPT)
            if line is None:
                self.stop()
                break
            self.feed(line)

        return self.exit_code

    def stop(self) -> None:
        """Leave the active phase and flush the roster before the loop ends."""
        if self._stopped:
            return
        self._stopped = True
        self.running = False
        self.current_phase.exit()

        try:
            self.app.roster.flush()
        except PersistenceError as e:
            self.io.write_line(str(e))
            self.exit_code = 1
