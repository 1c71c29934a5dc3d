# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lesson plan API endpoints.

This module provides endpoints for lesson plans:
- GET / - List plans
- POST / - Create the plan of a lesson
- GET /section-names - Section name lookup
- GET /focuses - Focus lookup
- GET /lessons/{lesson_id} - Get the plan of a lesson
- GET /{lesson_plan_id}/sections - Load sections with directions
- PUT /{lesson_plan_id}/sections - Save sections with directions
- DELETE /{lesson_plan_id} - Delete a plan
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, require_staff
from src.api.middleware.auth import CurrentUser
from src.domains.lesson_plan import (
    LessonPlanExistsError,
    LessonPlanNotFoundError,
    LessonPlanSaveError,
    LessonPlanService,
)
from src.models.lesson_plan import (
    FocusResponse,
    LessonPlanContent,
    LessonPlanCreateRequest,
    LessonPlanResponse,
    SaveLessonPlanRequest,
    SectionNameResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_service(db: AsyncSession) -> LessonPlanService:
    return LessonPlanService(db=db)


@router.get("", response_model=list[LessonPlanResponse], summary="List lesson plans")
async def list_plans(
    subject_id: Annotated[str | None, Query(description="Filter by subject")] = None,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> list[LessonPlanResponse]:
    return await _get_service(db).list_plans(subject_id=subject_id)


@router.post(
    "",
    response_model=LessonPlanResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create lesson plan",
)
async def create_plan(
    data: LessonPlanCreateRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> LessonPlanResponse:
    service = _get_service(db)

    try:
        return await service.create_plan(data)
    except LessonPlanNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except LessonPlanExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get(
    "/section-names",
    response_model=list[SectionNameResponse],
    summary="List section names",
)
async def list_section_names(
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> list[SectionNameResponse]:
    return await _get_service(db).list_section_names()


@router.get("/focuses", response_model=list[FocusResponse], summary="List focuses")
async def list_focuses(
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> list[FocusResponse]:
    return await _get_service(db).list_focuses()


@router.get(
    "/lessons/{lesson_id}",
    response_model=LessonPlanResponse,
    summary="Get the plan of a lesson",
)
async def get_plan_for_lesson(
    lesson_id: str,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> LessonPlanResponse:
    plan = await _get_service(db).get_plan_for_lesson(lesson_id)
    if plan is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Lesson {lesson_id} has no lesson plan",
        )
    return plan


@router.get(
    "/{lesson_plan_id}/sections",
    response_model=LessonPlanContent,
    summary="Load lesson plan sections",
)
async def load_plan(
    lesson_plan_id: str,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> LessonPlanContent:
    service = _get_service(db)

    try:
        return await service.load_plan(lesson_plan_id)
    except LessonPlanNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put(
    "/{lesson_plan_id}/sections",
    response_model=LessonPlanContent,
    summary="Save lesson plan sections",
)
async def save_plan(
    lesson_plan_id: str,
    data: SaveLessonPlanRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> LessonPlanContent:
    """Save the section editor state of a plan in one transaction."""
    logger.info(
        "Saving %d sections of lesson plan %s by %s",
        len(data.sections),
        lesson_plan_id,
        current_user.id,
    )
    service = _get_service(db)

    try:
        return await service.save_plan(lesson_plan_id, data.sections)
    except LessonPlanNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except LessonPlanSaveError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete(
    "/{lesson_plan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete lesson plan",
)
async def delete_plan(
    lesson_plan_id: str,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> None:
    service = _get_service(db)

    try:
        await service.delete_plan(lesson_plan_id)
    except LessonPlanNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
