# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User administration API endpoints.

This module provides endpoints for the users admin:
- GET / - List users with role, district and schools
- POST / - Add a user with a login account

Both require admin access.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_auth_provider, get_db, require_admin
from src.api.middleware.auth import CurrentUser
from src.domains.registration import AuthProvider
from src.domains.user import (
    UserAlreadyExistsError,
    UserReferenceNotFoundError,
    UserService,
    UserServiceError,
)
from src.domains.user.service import DEFAULT_PAGE_SIZE
from src.models.user import UserCreateRequest, UserListResponse, UserSummary

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_service(db: AsyncSession, auth_provider: AuthProvider) -> UserService:
    return UserService(db=db, auth_provider=auth_provider)


@router.get("", response_model=UserListResponse, summary="List users")
async def list_users(
    search: Annotated[str | None, Query(description="Match name, role or email")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=100)] = DEFAULT_PAGE_SIZE,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    auth_provider: AuthProvider = Depends(get_auth_provider),
) -> UserListResponse:
    return await _get_service(db, auth_provider).list_users(
        search=search, page=page, page_size=page_size
    )


@router.post(
    "",
    response_model=UserSummary,
    status_code=status.HTTP_201_CREATED,
    summary="Add user",
)
async def create_user(
    data: UserCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    auth_provider: AuthProvider = Depends(get_auth_provider),
) -> UserSummary:
    logger.info("Adding %s user by %s", data.role, current_user.id)

    try:
        return await _get_service(db, auth_provider).create_user(data)
    except UserReferenceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except UserServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
