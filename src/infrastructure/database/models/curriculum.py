# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curriculum hierarchy models.

subjects -> units -> chapters -> lessons. Lessons own activities and a
lesson plan.
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, TimestampMixin, uuid_pk


class Subject(Base, TimestampMixin):
    """A curriculum subject, shown to authors as a curriculum."""

    __tablename__ = "subjects"

    subject_id: Mapped[str] = uuid_pk()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    curriculum_title: Mapped[str | None] = mapped_column(String(255))
    curriculum_description: Mapped[str | None] = mapped_column(Text)


class Unit(Base, TimestampMixin):
    """A unit within a subject."""

    __tablename__ = "units"

    unit_id: Mapped[str] = uuid_pk()
    subject_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("subjects.subject_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    unit_title: Mapped[str | None] = mapped_column(String(255))


class Chapter(Base, TimestampMixin):
    """A chapter within a unit."""

    __tablename__ = "chapters"

    chapter_id: Mapped[str] = uuid_pk()
    unit_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("units.unit_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)


class Lesson(Base, TimestampMixin):
    """A lesson within a chapter."""

    __tablename__ = "lessons"

    lesson_id: Mapped[str] = uuid_pk()
    chapter_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("chapters.chapter_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    subject_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("subjects.subject_id", ondelete="SET NULL"),
    )
    lesson_name: Mapped[str | None] = mapped_column(String(255))
