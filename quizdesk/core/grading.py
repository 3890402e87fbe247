"""
Fixed lookup tables: quiz difficulties and letter grades.
"""

from __future__ import annotations

from enum import Enum


class Difficulty(str, Enum):
    """Quiz difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def available_answers(self) -> int:
        """Number of answer choices a question at this level is expected to offer."""
        return _AVAILABLE_ANSWERS[self]

    @classmethod
    def get(cls, raw: str) -> Difficulty | None:
        """Resolve a difficulty from its id, or None if it is not one."""
        try:
            return cls(raw)
        except ValueError:
            return None


_AVAILABLE_ANSWERS = {
    Difficulty.EASY: 2,
    Difficulty.MEDIUM: 3,
    Difficulty.HARD: 4,
}


class Grade(Enum):
    """Letter bands, highest first. Each value is (text, inclusive lower bound)."""

    A_STAR = ("A*", 100)
    A = ("A", 80)
    B = ("B", 60)
    C = ("C", 40)
    D = ("D", 20)
    F = ("F", 0)

    def __init__(self, text: str, lower_bound: int):
        self.text = text
        self.lower_bound = lower_bound

    @classmethod
    def of(cls, percentage: float) -> Grade:
        """Map a percentage to the first band whose lower bound it reaches."""
        for grade in cls:
            if percentage >= grade.lower_bound:
                return grade
        return cls.F
