# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lesson activity models.

An activity is an ordered slot within a lesson. Its content lives in one
of nine kind tables, each keyed by its own primary key and pointing back
at the activity. Question rows additionally own a Part B row and a list
of answer choices.

Irregular column names in the existing schema are kept as database
column names and mapped onto regular attribute names here:

- ``in_text_source.actvity_id`` is exposed as ``InTextSource.activity_id``
- ``reaing_text`` is exposed as ``reading_text`` on the three reading tables
"""

from typing import Any

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    published_column,
    uuid_pk,
)

IN_TEXT_SOURCE_ACTIVITY_COLUMN = "actvity_id"
READING_TEXT_COLUMN = "reaing_text"


def _activity_fk(column_name: str | None = None) -> Mapped[str]:
    args: tuple[Any, ...] = (column_name,) if column_name else ()
    return mapped_column(
        *args,
        UUID(as_uuid=False),
        ForeignKey("activities.activity_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class Activity(Base, TimestampMixin):
    """An ordered content slot within a lesson (1-based dense order)."""

    __tablename__ = "activities"

    activity_id: Mapped[str] = uuid_pk()
    lesson_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("lessons.lesson_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    order: Mapped[int | None] = mapped_column(Integer)
    name: Mapped[str | None] = mapped_column(String(255))
    published: Mapped[str] = published_column()


class ActivityChildMixin:
    """Columns shared by every activity kind table (0-based order)."""

    order: Mapped[int | None] = mapped_column(Integer)
    published: Mapped[str] = published_column()


class Reading(Base, ActivityChildMixin):
    __tablename__ = "readings"

    reading_id: Mapped[str] = uuid_pk()
    activity_id: Mapped[str] = _activity_fk()
    reading_title: Mapped[str | None] = mapped_column(String(500))
    reading_text: Mapped[str | None] = mapped_column(READING_TEXT_COLUMN, Text)


class ReadingAddon(Base, ActivityChildMixin):
    __tablename__ = "readings_addon"

    reading_id: Mapped[str] = uuid_pk()
    activity_id: Mapped[str] = _activity_fk()
    reading_text: Mapped[str | None] = mapped_column(READING_TEXT_COLUMN, Text)


class SubReading(Base, ActivityChildMixin):
    __tablename__ = "sub_readings"

    reading_id: Mapped[str] = uuid_pk()
    activity_id: Mapped[str] = _activity_fk()
    reading_title: Mapped[str | None] = mapped_column(String(500))
    reading_text: Mapped[str | None] = mapped_column(READING_TEXT_COLUMN, Text)


class Source(Base, ActivityChildMixin):
    __tablename__ = "sources"

    source_id: Mapped[str] = uuid_pk()
    activity_id: Mapped[str] = _activity_fk()
    source_title_ce: Mapped[str | None] = mapped_column(String(500))
    source_title_ad: Mapped[str | None] = mapped_column(String(500))
    source_text: Mapped[str | None] = mapped_column(Text)
    source_image: Mapped[str | None] = mapped_column(Text)
    source_image_description: Mapped[str | None] = mapped_column(Text)


class InTextSource(Base, ActivityChildMixin):
    __tablename__ = "in_text_source"

    in_text_source_id: Mapped[str] = uuid_pk()
    activity_id: Mapped[str] = _activity_fk(IN_TEXT_SOURCE_ACTIVITY_COLUMN)
    source_title_ad: Mapped[str | None] = mapped_column(String(500))
    source_title_ce: Mapped[str | None] = mapped_column(String(500))
    source_intro: Mapped[str | None] = mapped_column(Text)
    source_text: Mapped[str | None] = mapped_column(Text)


class Question(Base, ActivityChildMixin):
    __tablename__ = "questions"

    question_id: Mapped[str] = uuid_pk()
    activity_id: Mapped[str] = _activity_fk()
    question: Mapped[str | None] = mapped_column(Text)
    question_text: Mapped[str | None] = mapped_column(Text)
    question_title: Mapped[str | None] = mapped_column(String(500))
    question_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="Open Ended",
        server_default="Open Ended",
    )


class QuestionPartB(Base):
    """Follow-up prompt of a Part A / Part B question, keyed by the Part A id."""

    __tablename__ = "questions_partb"

    part_a_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("questions.question_id", ondelete="CASCADE"),
        primary_key=True,
    )
    question_text: Mapped[str | None] = mapped_column(Text)


class QuestionChoice(Base):
    """Answer option of a multiple choice or multiple select question."""

    __tablename__ = "question_choices"

    question_choices_id: Mapped[str] = uuid_pk()
    question_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("questions.question_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    choice_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class GraphicOrganizer(Base, ActivityChildMixin):
    __tablename__ = "graphic_organizers"

    go_id: Mapped[str] = uuid_pk()
    activity_id: Mapped[str] = _activity_fk()
    template_type: Mapped[str | None] = mapped_column(String(100))
    content: Mapped[dict[str, Any] | None] = mapped_column()


class Vocabulary(Base, ActivityChildMixin):
    """One vocabulary word. ``order`` is the activity-level order of the
    vocabulary block, ``vocab_order`` the position of the word in it."""

    __tablename__ = "vocabulary"

    vocabulary_id: Mapped[str] = uuid_pk()
    activity_id: Mapped[str] = _activity_fk()
    word: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    definition: Mapped[str] = mapped_column(Text, nullable=False, default="")
    vocab_order: Mapped[int | None] = mapped_column(Integer)


class Image(Base, ActivityChildMixin):
    __tablename__ = "images"

    image_id: Mapped[str] = uuid_pk()
    activity_id: Mapped[str] = _activity_fk()
    img_url: Mapped[str | None] = mapped_column(Text)
    img_title: Mapped[str | None] = mapped_column(String(500))
    description_title: Mapped[str | None] = mapped_column(String(500))
    description: Mapped[str | None] = mapped_column(Text)
    alt: Mapped[str | None] = mapped_column(Text)
    position: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="center",
        server_default="center",
    )
