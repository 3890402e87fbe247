"""
RosterStore backed by a SQL database through SQLAlchemy.

save_all() replaces the whole roster inside one transaction, so a failed
write leaves the previous roster intact.
"""

from __future__ import annotations

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from quizdesk.core.errors import PersistenceError
from quizdesk.db.database import make_engine, make_session_factory, session_scope
from quizdesk.db.models import AttemptRow, StudentRow
from quizdesk.models.student import Attempt, Student


class SqlRosterStore:
    """RosterStore over the `students` and `attempts` tables."""

    def __init__(self, database_url: str, echo: bool = False):
        try:
            self.engine = make_engine(database_url, echo=echo)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to open the roster database: {e}") from e
        self._factory = make_session_factory(self.engine)

    def load_all(self) -> list[Student]:
        try:
            with session_scope(self._factory) as session:
                rows = session.scalars(
                    select(StudentRow)
                    .options(selectinload(StudentRow.attempts))
                    .order_by(StudentRow.position)
                ).all()
                students = [_to_student(row) for row in rows]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read the roster database: {e}") from e

        logger.debug(f"Loaded {len(students)} students from the database")
        return students

    def save_all(self, students: list[Student]) -> None:
        try:
            with session_scope(self._factory) as session:
                session.execute(delete(AttemptRow))
                session.execute(delete(StudentRow))
                session.add_all(_to_row(student, position) for position, student in enumerate(students))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to update the roster database: {e}") from e

        logger.debug(f"Saved {len(students)} students to the database")

    def close(self) -> None:
        self.engine.dispose()


def _to_student(row: StudentRow) -> Student:
    return Student(
        username=row.username,
        fullname=row.fullname,
        age=row.age,
        year_group=row.year_group,
        password_hash=row.password_hash,
        admin=row.admin,
        attempts=[
            Attempt(subject=a.subject, difficulty=a.difficulty, percentage=a.percentage)
            for a in row.attempts
        ],
    )


def _to_row(student: Student, position: int) -> StudentRow:
    return StudentRow(
        username=student.username,
        position=position,
        fullname=student.fullname,
        age=student.age,
        year_group=student.year_group,
        password_hash=student.password_hash,
        admin=student.admin,
        attempts=[
            AttemptRow(
                seq=seq,
                subject=attempt.subject,
                difficulty=attempt.difficulty.value,
                percentage=attempt.percentage,
            )
            for seq, attempt in enumerate(student.attempts)
        ],
    )
