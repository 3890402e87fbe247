"""
Student and attempt models.

Both are built through constructor functions from validated inputs:

    params = StudentParams(fullname="Alice Smith", age=16, year_group="11", password="pw")
    student = create_student(params, hasher, taken_usernames)
    attempt = create_attempt(subject, Difficulty.EASY, 80)

A student's attempt history only ever grows; attempts themselves are frozen.
"""

from __future__ import annotations

from collections.abc import Container
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from quizdesk.core.errors import UsageError
from quizdesk.core.grading import Difficulty

if TYPE_CHECKING:
    from quizdesk.models.subject import Subject
    from quizdesk.security.passwords import PasswordHasher


USERNAME_PREFIX_LENGTH = 3


class Attempt(BaseModel):
    """The outcome of one completed quiz."""

    model_config = ConfigDict(frozen=True)

    subject: str
    difficulty: Difficulty
    percentage: int = Field(ge=0, le=100)


class Student(BaseModel):
    """A registered student and their quiz history."""

    username: str
    fullname: str
    age: int
    year_group: str
    password_hash: str
    admin: bool = False
    attempts: list[Attempt] = Field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        return self.admin

    def add_attempt(self, attempt: Attempt) -> None:
        self.attempts.append(attempt)


class StudentParams(BaseModel):
    """Signup details, validated before a Student is created."""

    fullname: str = Field(min_length=1)
    age: int = Field(gt=0, lt=150)
    year_group: str = Field(min_length=1)
    password: str = Field(min_length=1)
    admin: bool = False

    @field_validator("fullname", "year_group", "password", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def _single_token(cls, value: str) -> str:
        # login reads the password back as one positional argument
        if any(c.isspace() for c in value) or value.startswith("-"):
            raise ValueError("must be a single word not starting with '-'")
        return value


def derive_username(fullname: str, age: int, taken: Container[str] = ()) -> str:
    """
    Build a username from the first letters of the name and the age.

    The base form is e.g. ``Ali16``; if that is taken a counter suffix is
    appended (``Ali16_2``, ``Ali16_3``, ...).
    Leading dashes are dropped so the username never parses as a flag.
    """
    prefix = "".join(fullname.split()).lstrip("-")[:USERNAME_PREFIX_LENGTH]
    base = prefix + str(age)
    if base not in taken:
        return base
    counter = 2
    while f"{base}_{counter}" in taken:
        counter += 1
    return f"{base}_{counter}"


def create_student(
    params: StudentParams,
    hasher: PasswordHasher,
    taken: Container[str] = (),
) -> Student:
    """Create a new student with a derived, unique username and a hashed password."""
    return Student(
        username=derive_username(params.fullname, params.age, taken),
        fullname=params.fullname,
        age=params.age,
        year_group=params.year_group,
        password_hash=hasher.hash(params.password),
        admin=params.admin,
    )


def parse_student_params(**raw) -> StudentParams:
    """Validate raw signup input, raising UsageError with a readable message."""
    try:
        return StudentParams(**raw)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]).replace("_", " ")
            for err in e.errors()
        )
        raise UsageError(f"Invalid signup details: {fields}") from e


def create_attempt(subject: Subject, difficulty: Difficulty, percentage: int) -> Attempt:
    """Create the attempt record for a finished quiz."""
    try:
        return Attempt(subject=subject.id, difficulty=difficulty, percentage=percentage)
    except ValidationError as e:
        raise UsageError(f"Invalid attempt: {e.errors()[0]['msg']}") from e
