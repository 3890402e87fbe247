"""
Report aggregation over the roster.

Pure functions: they read students and attempts and return plain values,
leaving rendering and file output to the report generators.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from quizdesk.core.grading import Difficulty, Grade
from quizdesk.models.student import Student


@dataclass(frozen=True)
class AttemptLine:
    """One row of a student report."""

    subject: str
    difficulty: Difficulty
    percentage: int

    @property
    def grade(self) -> Grade:
        return Grade.of(self.percentage)


@dataclass(frozen=True)
class QuizStatistics:
    """Aggregate results for one subject:difficulty quiz."""

    attempts: int
    average: float
    maximum: int
    achieved_by: tuple[str, ...]

    @property
    def average_grade(self) -> Grade:
        return Grade.of(self.average)

    @property
    def maximum_grade(self) -> Grade:
        return Grade.of(self.maximum)


def student_attempt_lines(student: Student) -> list[AttemptLine]:
    """The student's attempts in the order they were taken."""
    return [
        AttemptLine(subject=a.subject, difficulty=a.difficulty, percentage=a.percentage)
        for a in student.attempts
    ]


def quiz_statistics(
    students: Iterable[Student],
    subject_id: str,
    difficulty: Difficulty,
) -> QuizStatistics | None:
    """
    Average and maximum percentage over every matching attempt.

    achieved_by lists the full names of students with at least one attempt
    at the maximum, once each, in roster order. Returns None when nobody has
    attempted the quiz.
    """
    per_student: list[tuple[Student, list[int]]] = []
    for student in students:
        scores = [
            a.percentage
            for a in student.attempts
            if a.subject == subject_id and a.difficulty == difficulty
        ]
        if scores:
            per_student.append((student, scores))

    if not per_student:
        return None

    all_scores = [score for _, scores in per_student for score in scores]
    maximum = max(all_scores)
    achieved_by = tuple(
        student.fullname for student, scores in per_student if maximum in scores
    )

    return QuizStatistics(
        attempts=len(all_scores),
        average=sum(all_scores) / len(all_scores),
        maximum=maximum,
        achieved_by=achieved_by,
    )


def format_percentage(value: float) -> str:
    """90.0 -> '90', 86.666... -> '86.67'."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"
