# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Site settings API endpoints.

- GET / - Current academic year of the site
- PUT / - Set or clear the current academic year
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, require_admin, require_auth
from src.api.middleware.auth import CurrentUser
from src.domains.academic_year import AcademicYearNotFoundError, AcademicYearService
from src.models.organization import SiteSettingsResponse, SiteSettingsUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=SiteSettingsResponse, summary="Get site settings")
async def get_site_settings(
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
) -> SiteSettingsResponse:
    return await AcademicYearService(db=db).get_site_settings()


@router.put("", response_model=SiteSettingsResponse, summary="Update site settings")
async def update_site_settings(
    data: SiteSettingsUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> SiteSettingsResponse:
    try:
        return await AcademicYearService(db=db).set_current_year(data.academic_year_id)
    except AcademicYearNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Academic year not found",
        )
