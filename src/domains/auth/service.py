# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication service for local accounts.

This module provides the AuthService that handles:
- Email and password login
- Token refresh
- Profile lookup and name changes for the signed-in user

Example:
    >>> auth_service = AuthService(db_session, jwt_manager)
    >>> response = await auth_service.login("teacher@school.org", "secret")
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.auth.jwt import InvalidTokenError, JWTManager, TokenExpiredError, TokenPair
from src.domains.auth.password import PasswordHasher
from src.infrastructure.database.models import User, UserInformation
from src.models.auth import LoginResponse, ProfileUpdateRequest, UserProfile
from src.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Base exception for authentication errors."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when email or password is wrong."""

    pass


class TokenRefreshError(AuthenticationError):
    """Raised when token refresh fails."""

    pass


class AuthService:
    """Authentication service for local accounts.

    Attributes:
        _db: Database session for queries.
        _jwt_manager: JWT token manager.
        _hasher: Password hasher.
    """

    def __init__(
        self,
        db: AsyncSession,
        jwt_manager: JWTManager,
        hasher: PasswordHasher | None = None,
    ) -> None:
        self._db = db
        self._jwt_manager = jwt_manager
        self._hasher = hasher or PasswordHasher()

    async def login(self, email: str, password: str) -> LoginResponse:
        """Authenticate a user and issue tokens.

        Args:
            email: Account email, matched case-insensitively.
            password: Plain text password.

        Returns:
            Tokens and the user's profile.

        Raises:
            InvalidCredentialsError: If the account does not exist or the
                password does not match. Both cases share one message.
        """
        user = await self._get_user_by_email(email)
        verified = user is not None and await asyncio.to_thread(
            self._hasher.verify, password, user.password_hash
        )
        if not verified:
            logger.info("Failed login for %s", email.lower())
            raise InvalidCredentialsError("Invalid email or password")

        profile = await self.get_profile(user.id, user=user)
        user.last_login_at = utc_now()
        await self._db.commit()

        tokens = self._jwt_manager.create_token_pair(
            user_id=user.id,
            role=profile.role,
            email=user.email,
        )
        logger.info("User %s logged in as %s", user.id, profile.role)
        return LoginResponse(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_in=tokens.expires_in,
            user=profile,
        )

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """Issue a new token pair from a refresh token.

        The role is re-read from the database so role changes apply on
        the next refresh.

        Raises:
            TokenRefreshError: If the token is invalid, expired or its user
                no longer exists.
        """
        try:
            payload = self._jwt_manager.decode_token(refresh_token, expected_type="refresh")
        except (TokenExpiredError, InvalidTokenError) as e:
            raise TokenRefreshError(str(e)) from e

        user = await self._db.get(User, payload.sub)
        if user is None:
            raise TokenRefreshError("User no longer exists")

        profile = await self.get_profile(user.id, user=user)
        return self._jwt_manager.create_token_pair(
            user_id=user.id,
            role=profile.role,
            email=user.email,
        )

    async def get_profile(self, user_id: str, user: User | None = None) -> UserProfile:
        """Profile of a user; users without a profile row are students.

        Raises:
            InvalidCredentialsError: If the user does not exist.
        """
        if user is None:
            user = await self._db.get(User, user_id)
            if user is None:
                raise InvalidCredentialsError("User not found")

        result = await self._db.execute(
            select(UserInformation).where(UserInformation.user_id == user.id)
        )
        info = result.scalar_one_or_none()

        return UserProfile(
            id=user.id,
            email=user.email,
            role=info.role if info else "student",
            first_name=info.first_name if info else None,
            last_name=info.last_name if info else None,
        )

    async def update_profile(self, user_id: str, request: ProfileUpdateRequest) -> UserProfile:
        """Change the first and last name of a user.

        Blank names are stored as NULL. A user without a profile row gets
        one with the student role.

        Raises:
            InvalidCredentialsError: If the user does not exist.
        """
        user = await self._db.get(User, user_id)
        if user is None:
            raise InvalidCredentialsError("User not found")

        result = await self._db.execute(
            select(UserInformation).where(UserInformation.user_id == user.id)
        )
        info = result.scalar_one_or_none()
        if info is None:
            info = UserInformation(user_id=user.id, role="student")
            self._db.add(info)

        for field, value in request.model_dump(exclude_unset=True).items():
            setattr(info, field, (value or "").strip() or None)
        await self._db.commit()

        logger.info("Updated profile of user %s", user.id)
        return UserProfile(
            id=user.id,
            email=user.email,
            role=info.role,
            first_name=info.first_name,
            last_name=info.last_name,
        )

    async def _get_user_by_email(self, email: str) -> User | None:
        result = await self._db.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()
