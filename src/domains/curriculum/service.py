# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curriculum service for the subject hierarchy.

This module provides the CurriculumService class for:
- Subject, unit, chapter and lesson CRUD
- Subject and lesson lookup by URL slug

Example:
    >>> service = CurriculumService(db_session)
    >>> subject = await service.get_subject_by_slug("world-history")
"""

import logging
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.curriculum.slugs import slugify
from src.infrastructure.database.models import Base, Chapter, Lesson, Subject, Unit
from src.models.curriculum import (
    ChapterCreateRequest,
    ChapterResponse,
    ChapterUpdateRequest,
    LessonCreateRequest,
    LessonResponse,
    LessonUpdateRequest,
    SubjectCreateRequest,
    SubjectResponse,
    SubjectUpdateRequest,
    UnitCreateRequest,
    UnitResponse,
    UnitUpdateRequest,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class CurriculumServiceError(Exception):
    """Base exception for curriculum service errors."""

    pass


class CurriculumNotFoundError(CurriculumServiceError):
    """Raised when a subject, unit, chapter or lesson is not found."""

    pass


class CurriculumService:
    """Service for the curriculum hierarchy.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # Subjects

    async def list_subjects(self) -> list[SubjectResponse]:
        result = await self.db.execute(select(Subject).order_by(Subject.name))
        return [self._subject_response(subject) for subject in result.scalars().all()]

    async def get_subject(self, subject_id: str) -> SubjectResponse:
        return self._subject_response(await self._get(Subject, subject_id))

    async def get_subject_by_slug(self, slug: str) -> SubjectResponse:
        """Find a subject whose name slugifies to ``slug``.

        Raises:
            CurriculumNotFoundError: If no subject matches.
        """
        wanted = slugify(slug)
        for subject in await self.list_subjects():
            if subject.slug == wanted:
                return subject
        raise CurriculumNotFoundError(f"Subject {slug} not found")

    async def create_subject(self, request: SubjectCreateRequest) -> SubjectResponse:
        subject = await self._create(Subject(**request.model_dump()))
        logger.info("Created subject %s (%s)", subject.name, subject.subject_id)
        return self._subject_response(subject)

    async def update_subject(self, subject_id: str, request: SubjectUpdateRequest) -> SubjectResponse:
        subject = await self._update(await self._get(Subject, subject_id), request.model_dump(exclude_unset=True))
        return self._subject_response(subject)

    async def delete_subject(self, subject_id: str) -> None:
        await self._delete(await self._get(Subject, subject_id))

    # Units

    async def list_units(self, subject_id: str) -> list[UnitResponse]:
        result = await self.db.execute(
            select(Unit).where(Unit.subject_id == subject_id).order_by(Unit.created_at)
        )
        return [UnitResponse.model_validate(unit) for unit in result.scalars().all()]

    async def get_unit(self, unit_id: str) -> UnitResponse:
        return UnitResponse.model_validate(await self._get(Unit, unit_id))

    async def create_unit(self, request: UnitCreateRequest) -> UnitResponse:
        await self._get(Subject, request.subject_id)
        unit = await self._create(Unit(**request.model_dump()))
        logger.info("Created unit %s in subject %s", unit.unit_id, unit.subject_id)
        return UnitResponse.model_validate(unit)

    async def update_unit(self, unit_id: str, request: UnitUpdateRequest) -> UnitResponse:
        unit = await self._update(await self._get(Unit, unit_id), request.model_dump(exclude_unset=True))
        return UnitResponse.model_validate(unit)

    async def delete_unit(self, unit_id: str) -> None:
        await self._delete(await self._get(Unit, unit_id))

    # Chapters

    async def list_chapters(self, unit_id: str) -> list[ChapterResponse]:
        result = await self.db.execute(
            select(Chapter).where(Chapter.unit_id == unit_id).order_by(Chapter.created_at)
        )
        return [ChapterResponse.model_validate(chapter) for chapter in result.scalars().all()]

    async def get_chapter(self, chapter_id: str) -> ChapterResponse:
        return ChapterResponse.model_validate(await self._get(Chapter, chapter_id))

    async def create_chapter(self, request: ChapterCreateRequest) -> ChapterResponse:
        await self._get(Unit, request.unit_id)
        chapter = await self._create(Chapter(**request.model_dump()))
        logger.info("Created chapter %s in unit %s", chapter.chapter_id, chapter.unit_id)
        return ChapterResponse.model_validate(chapter)

    async def update_chapter(self, chapter_id: str, request: ChapterUpdateRequest) -> ChapterResponse:
        chapter = await self._update(
            await self._get(Chapter, chapter_id), request.model_dump(exclude_unset=True)
        )
        return ChapterResponse.model_validate(chapter)

    async def delete_chapter(self, chapter_id: str) -> None:
        await self._delete(await self._get(Chapter, chapter_id))

    # Lessons

    async def list_lessons(self, chapter_id: str) -> list[LessonResponse]:
        result = await self.db.execute(
            select(Lesson).where(Lesson.chapter_id == chapter_id).order_by(Lesson.created_at)
        )
        return [self._lesson_response(lesson) for lesson in result.scalars().all()]

    async def get_lesson(self, lesson_id: str) -> LessonResponse:
        return self._lesson_response(await self._get(Lesson, lesson_id))

    async def get_lesson_by_slug(self, subject_slug: str, lesson_slug: str) -> LessonResponse:
        """Find a lesson of a subject by the slugs of both names.

        Raises:
            CurriculumNotFoundError: If the subject or lesson is missing.
        """
        subject = await self.get_subject_by_slug(subject_slug)
        result = await self.db.execute(select(Lesson).where(Lesson.subject_id == subject.subject_id))
        wanted = slugify(lesson_slug)
        for lesson in result.scalars().all():
            if slugify(lesson.lesson_name) == wanted:
                return self._lesson_response(lesson)
        raise CurriculumNotFoundError(f"Lesson {lesson_slug} not found")

    async def create_lesson(self, request: LessonCreateRequest) -> LessonResponse:
        """Create a lesson; its subject defaults to the chapter's subject."""
        chapter = await self._get(Chapter, request.chapter_id)
        subject_id = request.subject_id
        if subject_id is None:
            unit = await self._get(Unit, chapter.unit_id)
            subject_id = unit.subject_id

        lesson = await self._create(
            Lesson(
                chapter_id=request.chapter_id,
                subject_id=subject_id,
                lesson_name=request.lesson_name,
            )
        )
        logger.info("Created lesson %s in chapter %s", lesson.lesson_id, lesson.chapter_id)
        return self._lesson_response(lesson)

    async def update_lesson(self, lesson_id: str, request: LessonUpdateRequest) -> LessonResponse:
        lesson = await self._update(await self._get(Lesson, lesson_id), request.model_dump(exclude_unset=True))
        return self._lesson_response(lesson)

    async def delete_lesson(self, lesson_id: str) -> None:
        await self._delete(await self._get(Lesson, lesson_id))

    # Helpers

    async def _get(self, model: type[ModelT], pk: str) -> ModelT:
        obj = await self.db.get(model, pk)
        if obj is None:
            raise CurriculumNotFoundError(f"{model.__name__} {pk} not found")
        return obj

    async def _create(self, obj: ModelT) -> ModelT:
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def _update(self, obj: ModelT, changes: dict[str, Any]) -> ModelT:
        for key, value in changes.items():
            setattr(obj, key, value)
        await self.db.commit()
        await self.db.refresh(obj)
        logger.info("Updated %s", type(obj).__name__)
        return obj

    async def _delete(self, obj: Base) -> None:
        await self.db.delete(obj)
        await self.db.commit()
        logger.info("Deleted %s", type(obj).__name__)

    @staticmethod
    def _subject_response(subject: Subject) -> SubjectResponse:
        response = SubjectResponse.model_validate(subject)
        return response.model_copy(update={"slug": slugify(subject.name)})

    @staticmethod
    def _lesson_response(lesson: Lesson) -> LessonResponse:
        response = LessonResponse.model_validate(lesson)
        return response.model_copy(update={"slug": slugify(lesson.lesson_name)})
