"""
In-memory roster with write-through persistence.

Every mutation is applied, then the full roster is saved. If the save fails
the mutation is undone before the PersistenceError propagates, so memory
never holds state the store does not.
"""

from __future__ import annotations

from loguru import logger

from quizdesk.core.errors import PersistenceError
from quizdesk.models.student import Attempt, Student
from quizdesk.storage.roster_store import RosterStore


class Roster:
    """The registered students, in registration order."""

    def __init__(self, store: RosterStore, students: list[Student] | None = None):
        self.store = store
        self._students: list[Student] = list(students or [])

    @classmethod
    def load(cls, store: RosterStore) -> Roster:
        return cls(store, store.load_all())

    @property
    def students(self) -> tuple[Student, ...]:
        return tuple(self._students)

    @property
    def usernames(self) -> set[str]:
        return {s.username for s in self._students}

    def __len__(self) -> int:
        return len(self._students)

    def is_empty(self) -> bool:
        return not self._students

    def get(self, username: str) -> Student | None:
        for student in self._students:
            if student.username == username:
                return student
        return None

    def register(self, student: Student) -> None:
        """Add a new student and persist the roster."""
        if self.get(student.username) is not None:
            raise ValueError(f"Username already registered: {student.username}")

        self._students.append(student)
        try:
            self.flush()
        except PersistenceError:
            self._students.pop()
            raise
        logger.info(f"Registered student {student.username}")

    def record_attempt(self, student: Student, attempt: Attempt) -> None:
        """Append an attempt to a student's history and persist the roster."""
        student.add_attempt(attempt)
        try:
            self.flush()
        except PersistenceError:
            student.attempts.pop()
            raise

    def flush(self) -> None:
        self.store.save_all(list(self._students))
