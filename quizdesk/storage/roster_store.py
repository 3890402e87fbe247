"""
Roster persistence.

The roster is always read and written as a whole: loaded once at startup,
rewritten after every mutation. The JSON store keeps it in a single file,
written to a temporary sibling and swapped into place so readers never see
a half-written roster.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from quizdesk.core.errors import PersistenceError
from quizdesk.models.student import Student

_STUDENT_LIST = TypeAdapter(list[Student])


class RosterStore(Protocol):
    """Protocol for roster stores."""

    def load_all(self) -> list[Student]:
        """Load every student, in registration order."""
        ...

    def save_all(self, students: list[Student]) -> None:
        """Replace the stored roster. Raises PersistenceError on failure."""
        ...


def write_atomically(path: Path, content: str) -> None:
    """Write text to path via temp file + fsync + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class JsonRosterStore:
    """
    RosterStore backed by a JSON file.

    A missing file is created as an empty roster on first load.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load_all(self) -> list[Student]:
        if not self.path.exists():
            logger.info(f"No roster at {self.path}, creating an empty one")
            self.save_all([])
            return []

        try:
            raw = self.path.read_text(encoding="utf-8")
            students = _STUDENT_LIST.validate_json(raw)
        except OSError as e:
            raise PersistenceError(f"Failed to open the roster file {self.path}: {e}") from e
        except ValidationError as e:
            raise PersistenceError(f"The roster file {self.path} is invalid: {e}") from e

        logger.debug(f"Loaded {len(students)} students from {self.path}")
        return students

    def save_all(self, students: list[Student]) -> None:
        payload = json.dumps(
            _STUDENT_LIST.dump_python(students, mode="json"),
            indent=2,
        )
        try:
            write_atomically(self.path, payload + "\n")
        except OSError as e:
            raise PersistenceError(f"Failed to update the roster file {self.path}: {e}") from e

        logger.debug(f"Saved {len(students)} students to {self.path}")
