# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User administration service.

This module provides the UserService that handles:
- Listing users with their role, district and schools, searchable by
  name, role or email and paged
- Adding a user with a login account, profile and registrations

Example:
    >>> service = UserService(db_session, auth_provider)
    >>> page = await service.list_users(search="teacher", page=2)
"""

import logging
from collections import defaultdict

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.registration.auth_provider import (
    AuthProvider,
    AuthProviderError,
    EmailAlreadyRegisteredError,
)
from src.infrastructure.database.models import (
    District,
    DistrictRegistration,
    School,
    SchoolRegistration,
    User,
    UserInformation,
)
from src.models.user import UserCreateRequest, UserListResponse, UserSummary

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 25


class UserServiceError(Exception):
    """Base exception for user administration errors."""

    pass


class UserAlreadyExistsError(UserServiceError):
    """Raised when the email already has an account."""

    pass


class UserReferenceNotFoundError(UserServiceError):
    """Raised when the district or school of a new user does not exist."""

    pass


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class UserService:
    """Service for the users admin.

    Attributes:
        db: Async database session for profiles and registrations.
        auth_provider: Store that owns login accounts.
    """

    def __init__(self, db: AsyncSession, auth_provider: AuthProvider) -> None:
        self.db = db
        self.auth_provider = auth_provider

    async def list_users(
        self,
        search: str | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> UserListResponse:
        """List users, newest first.

        Args:
            search: Case-insensitive text matched against first name, last
                name, role and email.
            page: 1-based page number.
            page_size: Users per page.
        """
        query = select(UserInformation, User.email).join(
            User, User.id == UserInformation.user_id
        )
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(
                    UserInformation.first_name.ilike(pattern),
                    UserInformation.last_name.ilike(pattern),
                    UserInformation.role.ilike(pattern),
                    User.email.ilike(pattern),
                )
            )

        count = await self.db.execute(select(func.count()).select_from(query.subquery()))
        total = count.scalar_one()

        result = await self.db.execute(
            query.order_by(UserInformation.created_at.desc(), UserInformation.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        rows = result.all()

        user_ids = [info.user_id for info, _ in rows]
        districts: dict[str, str] = {}
        schools: dict[str, list[str]] = defaultdict(list)
        if user_ids:
            result = await self.db.execute(
                select(DistrictRegistration).where(DistrictRegistration.user_id.in_(user_ids))
            )
            for registration in result.scalars().all():
                districts.setdefault(registration.user_id, registration.district_id)

            result = await self.db.execute(
                select(SchoolRegistration).where(SchoolRegistration.user_id.in_(user_ids))
            )
            for registration in result.scalars().all():
                schools[registration.user_id].append(registration.school_id)

        users = [
            UserSummary(
                user_id=info.user_id,
                email=email,
                first_name=info.first_name,
                last_name=info.last_name,
                role=info.role,
                district_id=districts.get(info.user_id),
                school_ids=schools.get(info.user_id, []),
                created_at=info.created_at,
            )
            for info, email in rows
        ]
        return UserListResponse(
            users=users,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=(total + page_size - 1) // page_size,
        )

    async def create_user(self, request: UserCreateRequest) -> UserSummary:
        """Add a user with an account, a profile and registrations.

        The account is deleted again if the profile cannot be written.

        Raises:
            UserReferenceNotFoundError: If the district or school does not
                exist, or the school is in another district.
            UserAlreadyExistsError: If the email already has an account.
            UserServiceError: If the account or profile could not be created.
        """
        district_id = request.district_id
        if request.school_id:
            school = await self.db.get(School, request.school_id)
            if school is None:
                raise UserReferenceNotFoundError(f"School {request.school_id} not found")
            if district_id and school.district_id != district_id:
                raise UserReferenceNotFoundError(
                    f"School {request.school_id} is not in district {district_id}"
                )
            district_id = school.district_id
        elif district_id and await self.db.get(District, district_id) is None:
            raise UserReferenceNotFoundError(f"District {district_id} not found")

        try:
            user_id = await self.auth_provider.create_user(request.email, request.password)
        except EmailAlreadyRegisteredError as e:
            raise UserAlreadyExistsError(str(e)) from e
        except AuthProviderError as e:
            raise UserServiceError(str(e)) from e

        info = UserInformation(
            user_id=user_id,
            first_name=_clean(request.first_name),
            last_name=_clean(request.last_name),
            role=request.role,
        )
        self.db.add(info)
        if request.school_id:
            self.db.add(SchoolRegistration(user_id=user_id, school_id=request.school_id))
        if district_id:
            self.db.add(DistrictRegistration(user_id=user_id, district_id=district_id))

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to write profile of %s: %s", user_id, e)
            await self.auth_provider.delete_user(user_id)
            raise UserServiceError("Failed to create user information") from e

        logger.info("Added user %s as %s", user_id, request.role)
        return UserSummary(
            user_id=user_id,
            email=request.email.lower(),
            first_name=info.first_name,
            last_name=info.last_name,
            role=info.role,
            district_id=district_id,
            school_ids=[request.school_id] if request.school_id else [],
        )
