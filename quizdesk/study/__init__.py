"""
Quiz-taking.

Exports:
- QuizEngine: runs one quiz and records the attempt
- QuizOutcome: the attempt plus its raw tally
"""

from .quiz_engine import QuizEngine, QuizOutcome, score_percentage, summary_lines

__all__ = [
    "QuizEngine",
    "QuizOutcome",
    "score_percentage",
    "summary_lines",
]
