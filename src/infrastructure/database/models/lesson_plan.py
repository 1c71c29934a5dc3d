# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lesson plan models.

A lesson plan belongs to a lesson and is split into ordered sections
(named from the lp_section_names lookup). Each section holds ordered,
timed directions. ``lp_sections.lessone_plan_id`` is exposed as
``Section.lesson_plan_id``.
"""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    published_column,
    uuid_pk,
)

SECTION_LESSON_PLAN_COLUMN = "lessone_plan_id"


class LessonPlan(Base, TimestampMixin):
    __tablename__ = "lesson_plans"

    lesson_plan_id: Mapped[str] = uuid_pk()
    lesson_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("lessons.lesson_id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    subject_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("subjects.subject_id", ondelete="SET NULL"),
    )


class SectionName(Base):
    """Lookup of section headings (Warm Up, Direct Instruction, ...)."""

    __tablename__ = "lp_section_names"

    lp_section_name_id: Mapped[str] = uuid_pk()
    section_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class Focus(Base):
    """Lookup of direction focus labels."""

    __tablename__ = "lp_focus"

    lp_focus_id: Mapped[str] = uuid_pk()
    lp_focus: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class Section(Base):
    __tablename__ = "lp_sections"

    lp_sections_id: Mapped[str] = uuid_pk()
    lesson_plan_id: Mapped[str] = mapped_column(
        SECTION_LESSON_PLAN_COLUMN,
        UUID(as_uuid=False),
        ForeignKey("lesson_plans.lesson_plan_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    lp_section_names_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("lp_section_names.lp_section_name_id", ondelete="SET NULL"),
    )
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    published: Mapped[str] = published_column()


class Direction(Base):
    __tablename__ = "lp_directions"

    lp_directions_id: Mapped[str] = uuid_pk()
    lesson_plan_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("lesson_plans.lesson_plan_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    lp_sections_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("lp_sections.lp_sections_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    lp_focus_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("lp_focus.lp_focus_id", ondelete="SET NULL"),
    )
    activity_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("activities.activity_id", ondelete="SET NULL"),
    )
    time: Mapped[int | None] = mapped_column(Integer)
    directions: Mapped[str | None] = mapped_column(Text)
    slide_image: Mapped[str | None] = mapped_column(Text)
    alt: Mapped[str | None] = mapped_column(Text)
    support: Mapped[str | None] = mapped_column(Text)
    answers: Mapped[str | None] = mapped_column(Text)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    published: Mapped[str] = published_column()
