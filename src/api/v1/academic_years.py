# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic year management API endpoints.

This module provides endpoints for academic year management:
- POST / - Create a new academic year
- GET / - List academic years
- GET /{year_id} - Get academic year details
- PUT /{year_id} - Update academic year
- DELETE /{year_id} - Delete academic year
- POST /{year_id}/set-current - Set as the site's current year

Changes require admin access.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, require_admin, require_auth
from src.api.middleware.auth import CurrentUser
from src.domains.academic_year import (
    AcademicYearInUseError,
    AcademicYearNotFoundError,
    AcademicYearService,
)
from src.models.organization import (
    AcademicYearCreateRequest,
    AcademicYearListResponse,
    AcademicYearResponse,
    AcademicYearUpdateRequest,
    SiteSettingsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_service(db: AsyncSession) -> AcademicYearService:
    """Get academic year service instance."""
    return AcademicYearService(db=db)


@router.post(
    "",
    response_model=AcademicYearResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create academic year",
    description="Create a new academic year. Requires admin access.",
)
async def create_academic_year(
    data: AcademicYearCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> AcademicYearResponse:
    logger.info(
        "Creating academic year: %s (expires %s) by %s",
        data.year_range,
        data.expiry_date,
        current_user.id,
    )

    service = _get_service(db)
    return await service.create_academic_year(request=data)


@router.get(
    "",
    response_model=AcademicYearListResponse,
    summary="List academic years",
)
async def list_academic_years(
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> AcademicYearListResponse:
    service = _get_service(db)

    items, total = await service.list_academic_years()

    return AcademicYearListResponse(items=items, total=total)


@router.get(
    "/{year_id}",
    response_model=AcademicYearResponse,
    summary="Get academic year",
)
async def get_academic_year(
    year_id: str,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> AcademicYearResponse:
    service = _get_service(db)

    try:
        return await service.get_academic_year(year_id)
    except AcademicYearNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Academic year not found",
        )


@router.put(
    "/{year_id}",
    response_model=AcademicYearResponse,
    summary="Update academic year",
    description="Update academic year information. Requires admin access.",
)
async def update_academic_year(
    year_id: str,
    data: AcademicYearUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> AcademicYearResponse:
    logger.info("Updating academic year: %s by %s", year_id, current_user.id)

    service = _get_service(db)

    try:
        return await service.update_academic_year(year_id, data)
    except AcademicYearNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Academic year not found",
        )


@router.delete(
    "/{year_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete academic year",
    description="Delete an academic year no invitation code refers to.",
)
async def delete_academic_year(
    year_id: str,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete an academic year.

    Raises:
        HTTPException: 404 if not found, 409 if invitation codes use it.
    """
    logger.info("Deleting academic year: %s by %s", year_id, current_user.id)

    service = _get_service(db)

    try:
        await service.delete_academic_year(year_id)
    except AcademicYearNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Academic year not found",
        )
    except AcademicYearInUseError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )


@router.post(
    "/{year_id}/set-current",
    response_model=SiteSettingsResponse,
    summary="Set current academic year",
    description="Make an academic year the default for new invitation codes.",
)
async def set_current_academic_year(
    year_id: str,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> SiteSettingsResponse:
    logger.info("Setting current academic year: %s by %s", year_id, current_user.id)

    service = _get_service(db)

    try:
        return await service.set_current_year(year_id)
    except AcademicYearNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Academic year not found",
        )
