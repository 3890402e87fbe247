"""
QuizDesk - a console quiz runner for students, with admin reporting.

Students sign up or log in, take subject/difficulty scoped quizzes, and
administrators generate per-student or per-quiz reports from the roster.
"""

__version__ = "1.0.0"
