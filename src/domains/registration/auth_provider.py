# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Account creation backends used by registration.

Registration talks to an ``AuthProvider`` so the identity store can be
swapped out. The bundled ``LocalAuthProvider`` stores accounts in the
``users`` table using its own session, so an account exists independently
of the registration transaction and is removed explicitly when the rest
of the registration fails.
"""

import asyncio
import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domains.auth.password import PasswordHasher
from src.infrastructure.database.models import User

logger = logging.getLogger(__name__)


class AuthProviderError(Exception):
    """Raised when an account could not be created or removed."""

    pass


class EmailAlreadyRegisteredError(AuthProviderError):
    """Raised when an account with the email exists."""

    pass


class AuthProvider(Protocol):
    """Identity store that creates and deletes login accounts."""

    async def create_user(self, email: str, password: str) -> str:
        """Create an account and return its user id."""
        ...

    async def delete_user(self, user_id: str) -> None:
        ...


class LocalAuthProvider:
    """Accounts in the ``users`` table with bcrypt password hashes.

    Attributes:
        _sessionmaker: Factory for the provider's own sessions.
        _hasher: Password hasher.
    """

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        hasher: PasswordHasher | None = None,
    ) -> None:
        self._sessionmaker = sessionmaker
        self._hasher = hasher or PasswordHasher()

    async def create_user(self, email: str, password: str) -> str:
        """Create an account. Hashing runs in a worker thread.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken.
            AuthProviderError: If the password is unusable.
        """
        email = email.strip().lower()
        try:
            password_hash = await asyncio.to_thread(self._hasher.hash, password)
        except ValueError as e:
            raise AuthProviderError(str(e)) from e

        async with self._sessionmaker() as session:
            existing = await session.execute(select(User.id).where(User.email == email))
            if existing.scalar_one_or_none() is not None:
                raise EmailAlreadyRegisteredError(f"{email} has already been registered")

            user = User(email=email, password_hash=password_hash)
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise EmailAlreadyRegisteredError(f"{email} has already been registered") from e

            logger.info("Created account %s", user.id)
            return user.id

    async def delete_user(self, user_id: str) -> None:
        async with self._sessionmaker() as session:
            user = await session.get(User, user_id)
            if user is None:
                return
            await session.delete(user)
            await session.commit()
            logger.info("Deleted account %s", user_id)
