"""
Subject and question models.

A subject is listed in the subject index and points at a definition file
holding its question bank, partitioned by difficulty:

    {
        "easy":   [{"title": "...", "answers": ["...", "..."], "correct_answer": 0}],
        "medium": [...],
        "hard":   [...]
    }
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from quizdesk.core.grading import Difficulty


class Question(BaseModel):
    """A single multiple choice question."""

    model_config = ConfigDict(frozen=True)

    title: str
    answers: list[str] = Field(default_factory=list)
    correct_answer: int = Field(ge=0)


class QuestionBank(BaseModel):
    """Ordered questions for each difficulty of one subject."""

    easy: list[Question] = Field(default_factory=list)
    medium: list[Question] = Field(default_factory=list)
    hard: list[Question] = Field(default_factory=list)

    def get(self, difficulty: Difficulty) -> list[Question]:
        return list(getattr(self, difficulty.value))


class Subject(BaseModel):
    """An entry of the subject index, with its loaded question bank."""

    id: str
    name: str
    definition_file: str
    bank: QuestionBank = Field(default_factory=QuestionBank, exclude=True)

    def questions_for(self, difficulty: Difficulty) -> list[Question]:
        """Questions for a difficulty, in file order. May be empty."""
        return self.bank.get(difficulty)
