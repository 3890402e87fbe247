"""
Quiz Engine.

Runs one quiz attempt on the console:

1. Fetch the ordered questions for (subject, difficulty)
2. For each question, show the title and zero-indexed answers, read one line
3. Score the attempt, record it on the student and persist the roster

Questions are asked strictly in order with no skipping and no time limit.
If the input ends or an answer is not a number, the remaining questions are
abandoned and the attempt is scored on what was answered, out of the full
question count.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from quizdesk.core.context import ApplicationContext
from quizdesk.core.errors import EmptyQuestionBankError
from quizdesk.core.grading import Difficulty, Grade
from quizdesk.models.student import Attempt, Student, create_attempt
from quizdesk.models.subject import Question, Subject


def score_percentage(correct: int, total: int) -> int:
    """round(100 * correct / total), rounding halves up, in integer arithmetic."""
    if total < 1:
        raise ValueError("A quiz needs at least one question to be scored")
    return (200 * correct + total) // (2 * total)


@dataclass(frozen=True)
class QuizOutcome:
    """The recorded attempt plus the raw tally it was computed from."""

    attempt: Attempt
    correct: int
    total: int
    answered: int

    @property
    def grade(self) -> Grade:
        return Grade.of(self.attempt.percentage)

    @property
    def completed(self) -> bool:
        return self.answered == self.total


class QuizEngine:
    """Presents questions, scores answers and records the attempt."""

    def __init__(self, app: ApplicationContext):
        self.app = app
        self.io = app.io

    def run_quiz(self, student: Student, subject: Subject, difficulty: Difficulty) -> QuizOutcome:
        """
        Run a full quiz for the student.

        Raises:
            EmptyQuestionBankError: the subject has no questions at this difficulty.
            PersistenceError: the roster could not be saved; the attempt is not kept.
        """
        questions = subject.questions_for(difficulty)
        if not questions:
            raise EmptyQuestionBankError(subject.id, difficulty.value)

        correct = 0
        answered = 0
        for question in questions:
            answer = self._ask(question)
            if answer is None:
                logger.info(
                    f"Quiz {subject.id}:{difficulty.value} for {student.username} "
                    f"stopped after {answered}/{len(questions)} questions"
                )
                break

            answered += 1
            if answer == question.correct_answer:
                self.io.write_line("You answered correctly!")
                correct += 1
            else:
                self.io.write_line("You answered incorrectly!")

        attempt = create_attempt(subject, difficulty, score_percentage(correct, len(questions)))
        self.app.roster.record_attempt(student, attempt)
        logger.info(
            f"{student.username} scored {attempt.percentage}% on {subject.id}:{difficulty.value}"
        )

        return QuizOutcome(attempt=attempt, correct=correct, total=len(questions), answered=answered)

    def _ask(self, question: Question) -> int | None:
        """Show one question and read the chosen index. None if the read failed."""
        self.io.write_line(question.title)
        for i, potential_answer in enumerate(question.answers):
            self.io.write_line(f"{i} | {potential_answer}")
        self.io.write_line("Your answer:")

        raw = self.io.read_line()
        if raw is None:
            return None
        try:
            return int(raw.strip())
        except ValueError:
            self.io.write_line(f"'{raw.strip()}' is not an answer number, ending the quiz.")
            return None


def summary_lines(outcome: QuizOutcome) -> list[str]:
    """Lines shown to the student once a quiz is over."""
    lines = []
    if not outcome.completed:
        lines.append(f"Quiz ended early ({outcome.answered} of {outcome.total} answered).")
    else:
        lines.append("Well Done!")
    lines.extend([
        f"You achieved a {outcome.grade.text}!",
        f"You scored {outcome.correct}/{outcome.total} ({outcome.attempt.percentage}%)",
    ])
    return lines
