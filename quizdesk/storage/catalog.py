"""
Subject catalog.

Reads the subject index and every subject's question bank once at startup.
The catalog is read-only afterwards.
"""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from quizdesk.core.errors import PersistenceError
from quizdesk.core.grading import Difficulty
from quizdesk.models.subject import QuestionBank, Subject
from quizdesk.storage.roster_store import write_atomically

_SUBJECT_LIST = TypeAdapter(list[Subject])


class SubjectCatalog:
    """Loaded subjects, keyed by id, in index order."""

    def __init__(self, subjects: list[Subject] | None = None):
        self._subjects: dict[str, Subject] = {}
        for subject in subjects or []:
            self._subjects[subject.id] = subject

    def lookup(self, subject_id: str) -> Subject | None:
        return self._subjects.get(subject_id)

    def all(self) -> list[Subject]:
        return list(self._subjects.values())

    def __len__(self) -> int:
        return len(self._subjects)

    @classmethod
    def load(cls, index_path: Path, data_dir: Path | None = None) -> SubjectCatalog:
        """
        Load the subject index and each subject's definition file.

        Definition paths are resolved relative to data_dir (defaults to the
        index's directory). A missing index is created empty; a missing or
        invalid definition file raises PersistenceError.
        """
        index_path = Path(index_path)
        data_dir = Path(data_dir) if data_dir is not None else index_path.parent

        if not index_path.exists():
            logger.info(f"No subject index at {index_path}, creating an empty one")
            try:
                write_atomically(index_path, "[]\n")
            except OSError as e:
                raise PersistenceError(f"Failed to create the subject index {index_path}: {e}") from e

        try:
            subjects = _SUBJECT_LIST.validate_json(index_path.read_text(encoding="utf-8"))
        except OSError as e:
            raise PersistenceError(f"Failed to open the subject index {index_path}: {e}") from e
        except ValidationError as e:
            raise PersistenceError(f"The subject index {index_path} is invalid: {e}") from e

        for subject in subjects:
            subject.bank = _load_bank(subject, data_dir / subject.definition_file)

        logger.debug(f"Loaded {len(subjects)} subjects from {index_path}")
        return cls(subjects)


def _load_bank(subject: Subject, path: Path) -> QuestionBank:
    if not path.exists():
        raise PersistenceError(f"The question definition file for {subject.id} does not exist!")

    try:
        bank = QuestionBank.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise PersistenceError(f"The question definition file for {subject.id} was invalid!") from e

    for difficulty in Difficulty:
        for question in bank.get(difficulty):
            if len(question.answers) != difficulty.available_answers:
                logger.warning(
                    f"{subject.id}:{difficulty.value} question '{question.title}' has "
                    f"{len(question.answers)} answers, expected {difficulty.available_answers}"
                )
    return bank
