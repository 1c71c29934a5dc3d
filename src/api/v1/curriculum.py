# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curriculum API endpoints.

This module provides endpoints for the subject hierarchy:
- /subjects - Subject CRUD, plus lookup by slug
- /subjects/{subject_id}/units, /units - Unit CRUD
- /units/{unit_id}/chapters, /chapters - Chapter CRUD
- /chapters/{chapter_id}/lessons, /lessons - Lesson CRUD, plus lookup by
  subject and lesson slug

Reads require a signed-in user; writes require a teacher or admin.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, require_auth, require_staff
from src.api.middleware.auth import CurrentUser
from src.domains.curriculum import CurriculumNotFoundError, CurriculumService
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

router = APIRouter()


def _get_service(db: AsyncSession) -> CurriculumService:
    return CurriculumService(db=db)


def _not_found(e: CurriculumNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# =========================================================================
# Subjects
# =========================================================================


@router.get("/subjects", response_model=list[SubjectResponse], summary="List subjects")
async def list_subjects(
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> list[SubjectResponse]:
    return await _get_service(db).list_subjects()


@router.get(
    "/subjects/by-slug/{slug}",
    response_model=SubjectResponse,
    summary="Get subject by slug",
)
async def get_subject_by_slug(
    slug: str,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> SubjectResponse:
    try:
        return await _get_service(db).get_subject_by_slug(slug)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.get("/subjects/{subject_id}", response_model=SubjectResponse, summary="Get subject")
async def get_subject(
    subject_id: str,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> SubjectResponse:
    try:
        return await _get_service(db).get_subject(subject_id)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.post(
    "/subjects",
    response_model=SubjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create subject",
)
async def create_subject(
    data: SubjectCreateRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> SubjectResponse:
    return await _get_service(db).create_subject(data)


@router.put("/subjects/{subject_id}", response_model=SubjectResponse, summary="Update subject")
async def update_subject(
    subject_id: str,
    data: SubjectUpdateRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> SubjectResponse:
    try:
        return await _get_service(db).update_subject(subject_id, data)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.delete(
    "/subjects/{subject_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete subject",
)
async def delete_subject(
    subject_id: str,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await _get_service(db).delete_subject(subject_id)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


# =========================================================================
# Units
# =========================================================================


@router.get(
    "/subjects/{subject_id}/units",
    response_model=list[UnitResponse],
    summary="List units of a subject",
)
async def list_units(
    subject_id: str,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> list[UnitResponse]:
    return await _get_service(db).list_units(subject_id)


@router.get("/units/{unit_id}", response_model=UnitResponse, summary="Get unit")
async def get_unit(
    unit_id: str,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> UnitResponse:
    try:
        return await _get_service(db).get_unit(unit_id)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.post(
    "/units",
    response_model=UnitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create unit",
)
async def create_unit(
    data: UnitCreateRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> UnitResponse:
    try:
        return await _get_service(db).create_unit(data)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.put("/units/{unit_id}", response_model=UnitResponse, summary="Update unit")
async def update_unit(
    unit_id: str,
    data: UnitUpdateRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> UnitResponse:
    try:
        return await _get_service(db).update_unit(unit_id, data)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.delete("/units/{unit_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete unit")
async def delete_unit(
    unit_id: str,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await _get_service(db).delete_unit(unit_id)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


# =========================================================================
# Chapters
# =========================================================================


@router.get(
    "/units/{unit_id}/chapters",
    response_model=list[ChapterResponse],
    summary="List chapters of a unit",
)
async def list_chapters(
    unit_id: str,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> list[ChapterResponse]:
    return await _get_service(db).list_chapters(unit_id)


@router.get("/chapters/{chapter_id}", response_model=ChapterResponse, summary="Get chapter")
async def get_chapter(
    chapter_id: str,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> ChapterResponse:
    try:
        return await _get_service(db).get_chapter(chapter_id)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.post(
    "/chapters",
    response_model=ChapterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create chapter",
)
async def create_chapter(
    data: ChapterCreateRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> ChapterResponse:
    try:
        return await _get_service(db).create_chapter(data)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.put("/chapters/{chapter_id}", response_model=ChapterResponse, summary="Update chapter")
async def update_chapter(
    chapter_id: str,
    data: ChapterUpdateRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> ChapterResponse:
    try:
        return await _get_service(db).update_chapter(chapter_id, data)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.delete(
    "/chapters/{chapter_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete chapter",
)
async def delete_chapter(
    chapter_id: str,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await _get_service(db).delete_chapter(chapter_id)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


# =========================================================================
# Lessons
# =========================================================================


@router.get(
    "/chapters/{chapter_id}/lessons",
    response_model=list[LessonResponse],
    summary="List lessons of a chapter",
)
async def list_lessons(
    chapter_id: str,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> list[LessonResponse]:
    return await _get_service(db).list_lessons(chapter_id)


@router.get(
    "/subjects/by-slug/{subject_slug}/lessons/{lesson_slug}",
    response_model=LessonResponse,
    summary="Get lesson by slugs",
)
async def get_lesson_by_slug(
    subject_slug: str,
    lesson_slug: str,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> LessonResponse:
    try:
        return await _get_service(db).get_lesson_by_slug(subject_slug, lesson_slug)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.get("/lessons/{lesson_id}", response_model=LessonResponse, summary="Get lesson")
async def get_lesson(
    lesson_id: str,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> LessonResponse:
    try:
        return await _get_service(db).get_lesson(lesson_id)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.post(
    "/lessons",
    response_model=LessonResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create lesson",
)
async def create_lesson(
    data: LessonCreateRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> LessonResponse:
    try:
        return await _get_service(db).create_lesson(data)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.put("/lessons/{lesson_id}", response_model=LessonResponse, summary="Update lesson")
async def update_lesson(
    lesson_id: str,
    data: LessonUpdateRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> LessonResponse:
    try:
        return await _get_service(db).update_lesson(lesson_id, data)
    except CurriculumNotFoundError as e:
        raise _not_found(e)


@router.delete(
    "/lessons/{lesson_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete lesson",
)
async def delete_lesson(
    lesson_id: str,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await _get_service(db).delete_lesson(lesson_id)
    except CurriculumNotFoundError as e:
        raise _not_found(e)
