"""
SQLAlchemy models for the sql roster backend.

- StudentRow: one row per student, `position` keeps registration order
- AttemptRow: one row per quiz attempt, `seq` keeps insertion order per student
"""
from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class StudentRow(Base):
    __tablename__ = "students"

    username: Mapped[str] = mapped_column(String(64), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    fullname: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    year_group: Mapped[str] = mapped_column(String(32), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    attempts: Mapped[list[AttemptRow]] = relationship(
        back_populates="student",
        cascade="all, delete-orphan",
        order_by="AttemptRow.seq",
    )


class AttemptRow(Base):
    __tablename__ = "attempts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        ForeignKey("students.username", ondelete="CASCADE"), nullable=False, index=True
    )
    seq: Mapped[int] = mapped_column(Integer, nullable=False)
    subject: Mapped[str] = mapped_column(String(64), nullable=False)
    difficulty: Mapped[str] = mapped_column(String(16), nullable=False)
    percentage: Mapped[int] = mapped_column(Integer, nullable=False)

    student: Mapped[StudentRow] = relationship(back_populates="attempts")
