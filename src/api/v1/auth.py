# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication API endpoints.

This module provides endpoints for user authentication:
- POST /login - Exchange email and password for tokens
- POST /refresh - Refresh access token
- GET /me - Get current user info
- PUT /me - Update the current user's name

Example:
    POST /api/v1/auth/login
    Body:
        {"email": "teacher@school.org", "password": "..."}
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, get_jwt_manager, get_password_hasher, require_auth
from src.api.middleware.auth import CurrentUser
from src.api.middleware.rate_limit import get_ip_only, limiter
from src.domains.auth.jwt import JWTManager, TokenPair
from src.domains.auth.password import PasswordHasher
from src.domains.auth.service import AuthService, InvalidCredentialsError, TokenRefreshError
from src.models.auth import (
    LoginRequest,
    LoginResponse,
    ProfileUpdateRequest,
    RefreshRequest,
    UserProfile,
)

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_LOGIN = "20/minute"


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
)
@limiter.limit(RATE_LIMIT_LOGIN, key_func=get_ip_only)
async def login(
    request: Request,
    data: LoginRequest,
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> LoginResponse:
    """Authenticate with email and password.

    Raises:
        HTTPException: 401 if the credentials do not match.
    """
    service = AuthService(db, jwt_manager, hasher)

    try:
        return await service.login(data.email, data.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh tokens",
)
async def refresh(
    data: RefreshRequest,
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> TokenPair:
    service = AuthService(db, jwt_manager)

    try:
        return await service.refresh_tokens(data.refresh_token)
    except TokenRefreshError as e:
        logger.info("Token refresh rejected: %s", str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.get(
    "/me",
    response_model=UserProfile,
    summary="Current user",
)
async def get_me(
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> UserProfile:
    service = AuthService(db, jwt_manager)

    try:
        return await service.get_profile(current_user.id)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )


@router.put(
    "/me",
    response_model=UserProfile,
    summary="Update current user",
)
async def update_me(
    data: ProfileUpdateRequest,
    current_user: CurrentUser = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> UserProfile:
    """Change the signed-in user's first and last name."""
    service = AuthService(db, jwt_manager)

    try:
        return await service.update_profile(current_user.id, data)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
