"""
Application context.

Everything a command needs - settings, console, roster, subject catalog and
password hasher - is carried in one ApplicationContext and handed to the
session controller, the quiz engine and the report generators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from config import Settings
from quizdesk.core.roster import Roster
from quizdesk.security.passwords import BcryptPasswordHasher, PasswordHasher
from quizdesk.storage.catalog import SubjectCatalog
from quizdesk.storage.roster_store import JsonRosterStore, RosterStore

if TYPE_CHECKING:
    from quizdesk.cli.console import ConsoleIO


@dataclass
class ApplicationContext:
    """Shared state for one run of the shell."""

    settings: Settings
    io: ConsoleIO
    roster: Roster
    catalog: SubjectCatalog
    hasher: PasswordHasher


def build_roster_store(settings: Settings) -> RosterStore:
    """Pick the roster store configured by roster_backend."""
    if settings.roster_backend == "sql":
        from quizdesk.storage.sql_store import SqlRosterStore

        return SqlRosterStore(settings.database_url, echo=settings.log_level == "DEBUG")
    return JsonRosterStore(settings.students_path)


def build_context(settings: Settings, io: ConsoleIO) -> ApplicationContext:
    """
    Load the roster and the subject catalog.

    Raises PersistenceError if either cannot be read; startup must not
    continue in that case.
    """
    roster = Roster.load(build_roster_store(settings))
    catalog = SubjectCatalog.load(settings.subjects_path, settings.data_dir)
    logger.info(f"Loaded {len(roster)} students and {len(catalog)} subjects")

    return ApplicationContext(
        settings=settings,
        io=io,
        roster=roster,
        catalog=catalog,
        hasher=BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
    )
