"""
Configuration settings for the QuizDesk console.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Data Files
    # ========================================
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the subject index, question banks and roster",
    )
    subjects_file: str = Field(
        default="subjects.json",
        description="Subject index file, relative to data_dir",
    )
    students_file: str = Field(
        default="students.json",
        description="JSON roster file, relative to data_dir",
    )

    # ========================================
    # Roster Storage
    # ========================================
    roster_backend: Literal["json", "sql"] = Field(
        default="json",
        description="Roster store implementation",
    )
    database_url: str = Field(
        default="sqlite:///quizdesk.db",
        description="SQLAlchemy connection string for the sql roster backend",
    )

    # ========================================
    # Reports
    # ========================================
    report_default_path: str = Field(
        default="out.txt",
        description="Report output path when -o is not given",
    )

    # ========================================
    # Security
    # ========================================
    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        description="bcrypt cost factor for password hashing",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Helper Methods
    # ========================================
    @property
    def subjects_path(self) -> Path:
        """Absolute-or-relative path of the subject index."""
        return self.data_dir / self.subjects_file

    @property
    def students_path(self) -> Path:
        """Path of the JSON roster."""
        return self.data_dir / self.students_file


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
