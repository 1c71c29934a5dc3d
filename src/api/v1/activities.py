# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lesson activity editor API endpoints.

This module provides endpoints for the activity editor:
- GET /lessons/{lesson_id}/activities - Load all activities of a lesson
- PUT /lessons/{lesson_id}/activities - Save the editor state of a lesson
- DELETE /activities/{activity_id} - Delete one activity with its content

A save replaces the lesson's activities with the request: orders are
renumbered, missing rows are deleted and everything is written in one
transaction.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, require_staff
from src.api.middleware.auth import CurrentUser
from src.domains.activity import (
    ActivityLoadError,
    ActivityNotFoundError,
    ActivitySaveError,
    ActivityService,
    ActivityValidationError,
)
from src.models.activity import (
    DetailValidationErrorResponse,
    LessonActivities,
    SaveLessonActivitiesRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_service(db: AsyncSession) -> ActivityService:
    return ActivityService(db=db)


@router.get(
    "/lessons/{lesson_id}/activities",
    response_model=LessonActivities,
    summary="Load lesson activities",
)
async def load_activities(
    lesson_id: str,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> LessonActivities:
    """Load every activity of a lesson with its children and details.

    Raises:
        HTTPException: 500 if any table could not be read.
    """
    service = _get_service(db)

    try:
        return await service.load_lesson(lesson_id)
    except ActivityLoadError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        )


@router.put(
    "/lessons/{lesson_id}/activities",
    response_model=LessonActivities,
    responses={422: {"model": DetailValidationErrorResponse}},
    summary="Save lesson activities",
)
async def save_activities(
    lesson_id: str,
    data: SaveLessonActivitiesRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
):
    """Save the editor state of a lesson.

    Returns:
        The saved state, or 422 with messages keyed by activity type id
        when content is incomplete.
    """
    logger.info(
        "Saving %d activities for lesson %s by %s",
        len(data.activities),
        lesson_id,
        current_user.id,
    )

    service = _get_service(db)

    try:
        return await service.save_lesson(lesson_id, data)
    except ActivityValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=DetailValidationErrorResponse(errors=e.errors).model_dump(),
        )
    except ActivitySaveError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        )


@router.delete(
    "/activities/{activity_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete activity",
)
async def delete_activity(
    activity_id: str,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
) -> None:
    service = _get_service(db)

    try:
        await service.delete_activity(activity_id)
    except ActivityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ActivitySaveError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        )
