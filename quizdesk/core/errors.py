"""
Error taxonomy for QuizDesk.

Every error a command can raise derives from QuizDeskError. The session
controller catches them, prints the message on the user's console, and keeps
reading input. Only a PersistenceError during startup is fatal.
"""

from __future__ import annotations


class QuizDeskError(Exception):
    """Base class for errors reported back to the console user."""


class UsageError(QuizDeskError):
    """A command was invoked with the wrong arguments or flags."""


class LookupFailure(QuizDeskError, LookupError):
    """A username, subject, difficulty or selector did not resolve."""


class PersistenceError(QuizDeskError):
    """The roster or another durable file could not be read or written."""


class EmptyQuestionBankError(QuizDeskError):
    """A quiz was selected that has no questions at that difficulty."""

    def __init__(self, subject_id: str, difficulty_id: str):
        self.subject_id = subject_id
        self.difficulty_id = difficulty_id
        super().__init__(f"There are no {difficulty_id} questions for {subject_id} yet!")
