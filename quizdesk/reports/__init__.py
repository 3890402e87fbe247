"""
Admin reports over the roster.

- aggregator: pure statistics over students and attempts
- generator: the `report` command and its per-kind generators
"""

from .aggregator import QuizStatistics, quiz_statistics, student_attempt_lines
from .generator import GENERATORS, ReportKind, generate_report

__all__ = [
    "GENERATORS",
    "QuizStatistics",
    "ReportKind",
    "generate_report",
    "quiz_statistics",
    "student_attempt_lines",
]
