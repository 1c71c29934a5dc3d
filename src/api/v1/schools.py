# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School management API endpoints.

This module provides endpoints for schools:
- GET / - List schools, optionally of one district
- POST / - Create a school
- GET /{school_id} - Get school details
- PUT /{school_id} - Update a school
- DELETE /{school_id} - Delete a school

Listing is public so the sign-up form can offer the district's schools.
Changes require admin access.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, require_admin, require_auth
from src.api.middleware.auth import CurrentUser
from src.domains.school import DistrictNotFoundError, OrganizationService, SchoolNotFoundError
from src.models.organization import SchoolCreateRequest, SchoolResponse, SchoolUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_service(db: AsyncSession) -> OrganizationService:
    return OrganizationService(db=db)


@router.get("", response_model=list[SchoolResponse], summary="List schools")
async def list_schools(
    district_id: Annotated[str | None, Query(description="Filter by district")] = None,
    db: AsyncSession = Depends(get_db),
) -> list[SchoolResponse]:
    return await _get_service(db).list_schools(district_id=district_id)


@router.post(
    "",
    response_model=SchoolResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create school",
)
async def create_school(
    data: SchoolCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> SchoolResponse:
    logger.info("Creating school %s by %s", data.school_name, current_user.id)

    try:
        return await _get_service(db).create_school(data)
    except DistrictNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{school_id}", response_model=SchoolResponse, summary="Get school")
async def get_school(
    school_id: str,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> SchoolResponse:
    try:
        return await _get_service(db).get_school(school_id)
    except SchoolNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{school_id}", response_model=SchoolResponse, summary="Update school")
async def update_school(
    school_id: str,
    data: SchoolUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> SchoolResponse:
    try:
        return await _get_service(db).update_school(school_id, data)
    except (SchoolNotFoundError, DistrictNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{school_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete school")
async def delete_school(
    school_id: str,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await _get_service(db).delete_school(school_id)
    except SchoolNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
