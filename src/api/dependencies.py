# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions
- Get authenticated users and enforce roles
- Get token managers, the auth provider and media storage

Example:
    @router.get("/lessons/{lesson_id}/activities")
    async def load_activities(
        lesson_id: str,
        db: AsyncSession = Depends(get_db),
        current_user: CurrentUser = Depends(require_staff),
    ):
        ...
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.middleware.auth import CurrentUser, get_current_user
from src.core.config import get_settings
from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.domains.invitation.tokens import InvitationTokenManager
from src.domains.registration.auth_provider import AuthProvider, LocalAuthProvider
from src.infrastructure.database.connection import (
    close_database,
    get_session,
    get_sessionmaker,
    init_database,
)
from src.infrastructure.storage import MediaStorage

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Initialize the database connection pool."""
    await init_database(get_settings())


async def close_db() -> None:
    """Close the database connection pool."""
    await close_database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for the request.

    Yields:
        AsyncSession bound to the application engine.
    """
    async with get_session() as session:
        yield session


# =========================================================================
# Authentication Dependencies
# =========================================================================


def get_optional_user(request: Request) -> CurrentUser | None:
    return get_current_user(request)


def require_auth(request: Request) -> CurrentUser:
    """Require authenticated user.

    Raises:
        HTTPException: If not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_admin(request: Request) -> CurrentUser:
    """Require an administrator.

    Raises:
        HTTPException: If not authenticated or not admin.
    """
    user = require_auth(request)
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


def require_staff(request: Request) -> CurrentUser:
    """Require an administrator or teacher.

    Raises:
        HTTPException: If not authenticated or not staff.
    """
    user = require_auth(request)
    if not user.is_staff:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Teacher or admin access required",
        )
    return user


# =========================================================================
# Service Dependencies
# =========================================================================


def get_jwt_manager() -> JWTManager:
    return JWTManager(get_settings().jwt)


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


def get_invitation_tokens() -> InvitationTokenManager:
    settings = get_settings()
    return InvitationTokenManager(settings.jwt, settings.invitation)


def get_auth_provider(
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthProvider:
    """Get the account store used by registration.

    The provider opens its own sessions so an account survives a rollback
    of the registration transaction and can be deleted as compensation.
    """
    return LocalAuthProvider(get_sessionmaker(), hasher)


def get_media_storage() -> MediaStorage:
    settings = get_settings()
    return MediaStorage(settings.media, settings.jwt)


# =========================================================================
# Type Aliases for Cleaner Endpoint Signatures
# =========================================================================

DB = Annotated[AsyncSession, Depends(get_db)]
OptionalUser = Annotated[CurrentUser | None, Depends(get_optional_user)]
AuthenticatedUser = Annotated[CurrentUser, Depends(require_auth)]
AdminUser = Annotated[CurrentUser, Depends(require_admin)]
StaffUser = Annotated[CurrentUser, Depends(require_staff)]
