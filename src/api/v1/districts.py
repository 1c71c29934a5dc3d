# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""District management API endpoints.

This module provides endpoints for districts:
- GET / - List districts
- POST / - Create a district
- GET /{district_id} - Get district details
- GET /{district_id}/domains - Email domains accepted at sign-up
- PUT /{district_id} - Update a district
- DELETE /{district_id} - Delete a district without schools

District management requires admin access.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, require_admin, require_auth
from src.api.middleware.auth import CurrentUser
from src.domains.school import DistrictInUseError, DistrictNotFoundError, OrganizationService
from src.models.organization import (
    DistrictCreateRequest,
    DistrictDomainsResponse,
    DistrictResponse,
    DistrictUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_service(db: AsyncSession) -> OrganizationService:
    return OrganizationService(db=db)


@router.get("", response_model=list[DistrictResponse], summary="List districts")
async def list_districts(
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> list[DistrictResponse]:
    return await _get_service(db).list_districts()


@router.post(
    "",
    response_model=DistrictResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create district",
)
async def create_district(
    data: DistrictCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> DistrictResponse:
    logger.info("Creating district %s by %s", data.district_name, current_user.id)
    return await _get_service(db).create_district(data)


@router.get("/{district_id}", response_model=DistrictResponse, summary="Get district")
async def get_district(
    district_id: str,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> DistrictResponse:
    try:
        return await _get_service(db).get_district(district_id)
    except DistrictNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "/{district_id}/domains",
    response_model=DistrictDomainsResponse,
    summary="Get sign-up email domains",
    description="Public: the sign-up form shows these before an account exists.",
)
async def get_district_domains(
    district_id: str,
    db: AsyncSession = Depends(get_db),
) -> DistrictDomainsResponse:
    try:
        return await _get_service(db).get_district_domains(district_id)
    except DistrictNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{district_id}", response_model=DistrictResponse, summary="Update district")
async def update_district(
    district_id: str,
    data: DistrictUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> DistrictResponse:
    try:
        return await _get_service(db).update_district(district_id, data)
    except DistrictNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete(
    "/{district_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete district",
)
async def delete_district(
    district_id: str,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await _get_service(db).delete_district(district_id)
    except DistrictNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DistrictInUseError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
