# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the curriculum hierarchy service."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domains.curriculum import CurriculumNotFoundError, CurriculumService
from src.infrastructure.database.models import Chapter, Lesson, Subject, Unit
from src.models.curriculum import LessonCreateRequest, UnitCreateRequest, UnitUpdateRequest


def _rows(*rows: object) -> MagicMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(rows)
    return result


@pytest.fixture
def subjects() -> list[Subject]:
    return [
        Subject(subject_id="subject-1", name="World History"),
        Subject(subject_id="subject-2", name="Earth  Science"),
    ]


class TestSubjects:
    @pytest.mark.asyncio
    async def test_list_adds_slugs(self, mock_db: AsyncMock, subjects: list[Subject]) -> None:
        mock_db.execute.return_value = _rows(*subjects)

        listed = await CurriculumService(mock_db).list_subjects()

        assert [s.slug for s in listed] == ["world-history", "earth-science"]

    @pytest.mark.asyncio
    async def test_find_by_slug(self, mock_db: AsyncMock, subjects: list[Subject]) -> None:
        mock_db.execute.return_value = _rows(*subjects)

        subject = await CurriculumService(mock_db).get_subject_by_slug("Earth Science")

        assert subject.subject_id == "subject-2"

    @pytest.mark.asyncio
    async def test_unknown_slug(self, mock_db: AsyncMock, subjects: list[Subject]) -> None:
        mock_db.execute.return_value = _rows(*subjects)

        with pytest.raises(CurriculumNotFoundError, match="Subject art not found"):
            await CurriculumService(mock_db).get_subject_by_slug("art")


class TestUnits:
    @pytest.mark.asyncio
    async def test_create_requires_subject(self, mock_db: AsyncMock) -> None:
        mock_db.get.return_value = None

        with pytest.raises(CurriculumNotFoundError, match="Subject nope not found"):
            await CurriculumService(mock_db).create_unit(
                UnitCreateRequest(subject_id="nope", name="Unit 1")
            )

        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_only_sent_fields(self, mock_db: AsyncMock) -> None:
        unit = Unit(unit_id="unit-1", subject_id="subject-1", name="Unit 1", unit_title="Rivers")
        mock_db.get.return_value = unit

        response = await CurriculumService(mock_db).update_unit(
            "unit-1", UnitUpdateRequest(name="Unit One")
        )

        assert response.name == "Unit One"
        assert response.unit_title == "Rivers"


class TestLessons:
    @pytest.mark.asyncio
    async def test_subject_defaults_to_chapter_subject(self, mock_db: AsyncMock) -> None:
        chapter = Chapter(chapter_id="chapter-1", unit_id="unit-1", name="Egypt")
        unit = Unit(unit_id="unit-1", subject_id="subject-1", name="Unit 1")
        mock_db.get.side_effect = [chapter, unit]

        async def refresh(obj: Lesson) -> None:
            obj.lesson_id = "lesson-1"

        mock_db.refresh.side_effect = refresh

        lesson = await CurriculumService(mock_db).create_lesson(
            LessonCreateRequest(chapter_id="chapter-1", lesson_name="The Nile Floods")
        )

        assert lesson.subject_id == "subject-1"
        assert lesson.slug == "the-nile-floods"

    @pytest.mark.asyncio
    async def test_find_lesson_by_slugs(
        self, mock_db: AsyncMock, subjects: list[Subject]
    ) -> None:
        lessons = [
            Lesson(lesson_id="l1", chapter_id="c1", subject_id="subject-1", lesson_name="Rome"),
            Lesson(
                lesson_id="l2",
                chapter_id="c1",
                subject_id="subject-1",
                lesson_name="The Nile Floods",
            ),
        ]
        mock_db.execute.side_effect = [_rows(*subjects), _rows(*lessons)]

        lesson = await CurriculumService(mock_db).get_lesson_by_slug(
            "world-history", "the-nile-floods"
        )

        assert lesson.lesson_id == "l2"

    @pytest.mark.asyncio
    async def test_missing_lesson(self, mock_db: AsyncMock) -> None:
        mock_db.get.return_value = None

        with pytest.raises(CurriculumNotFoundError, match="Lesson nope not found"):
            await CurriculumService(mock_db).get_lesson("nope")
