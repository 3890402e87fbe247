"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from collections import deque
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings
from quizdesk.core.context import ApplicationContext
from quizdesk.core.grading import Difficulty
from quizdesk.core.roster import Roster
from quizdesk.models.student import Attempt, Student, StudentParams, create_student
from quizdesk.models.subject import Question, QuestionBank, Subject
from quizdesk.security.passwords import BcryptPasswordHasher
from quizdesk.storage.catalog import SubjectCatalog
from quizdesk.storage.roster_store import JsonRosterStore


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (full shell sessions)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


class ScriptedConsole:
    """ConsoleIO that replays queued input lines and records output."""

    def __init__(self, lines=()):
        self.inputs = deque(lines)
        self.output: list[str] = []
        self.secret_reads = 0

    def feed(self, *lines):
        self.inputs.extend(lines)

    def read_line(self, prompt="", secret=False):
        if secret:
            self.secret_reads += 1
        if not self.inputs:
            return None
        return self.inputs.popleft()

    def write_line(self, text=""):
        self.output.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.output)

    def clear(self):
        self.output.clear()


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def hasher():
    """bcrypt at the minimum cost factor, to keep tests fast."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def console():
    return ScriptedConsole()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_dir=tmp_path,
        bcrypt_rounds=4,
        report_default_path=str(tmp_path / "out.txt"),
    )


@pytest.fixture
def maths_subject():
    """Maths with three easy questions, one hard question and no medium ones."""
    return Subject(
        id="maths",
        name="Mathematics",
        definition_file="maths.json",
        bank=QuestionBank(
            easy=[
                Question(title="What is 1 + 1?", answers=["2", "3"], correct_answer=0),
                Question(title="What is 2 x 3?", answers=["5", "6"], correct_answer=1),
                Question(title="What is 10 / 2?", answers=["5", "4"], correct_answer=0),
            ],
            hard=[
                Question(title="Differentiate x^2", answers=["x", "2x", "x^2", "2"], correct_answer=1),
            ],
        ),
    )


@pytest.fixture
def catalog(maths_subject):
    return SubjectCatalog([maths_subject])


@pytest.fixture
def roster_path(tmp_path):
    return tmp_path / "students.json"


@pytest.fixture
def roster(roster_path):
    return Roster.load(JsonRosterStore(roster_path))


@pytest.fixture
def make_student(hasher):
    """Build (but do not register) a student."""
    def _make(fullname="Alice Smith", age=16, year_group="11", password="secret", admin=False, attempts=()):
        student = create_student(
            StudentParams(fullname=fullname, age=age, year_group=year_group, password=password, admin=admin),
            hasher,
        )
        for subject, difficulty, percentage in attempts:
            student.add_attempt(Attempt(subject=subject, difficulty=Difficulty(difficulty), percentage=percentage))
        return student
    return _make


@pytest.fixture
def app(settings, console, roster, catalog, hasher):
    return ApplicationContext(
        settings=settings,
        io=console,
        roster=roster,
        catalog=catalog,
        hasher=hasher,
    )


@pytest.fixture
def session(app):
    from quizdesk.cli.session import SessionController

    return SessionController(app)
