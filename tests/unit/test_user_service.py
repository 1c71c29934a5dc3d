# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the users admin service."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from src.domains.registration import EmailAlreadyRegisteredError
from src.domains.user import (
    UserAlreadyExistsError,
    UserReferenceNotFoundError,
    UserService,
    UserServiceError,
)
from src.infrastructure.database.models import (
    DistrictRegistration,
    School,
    SchoolRegistration,
    UserInformation,
)
from src.models.user import UserCreateRequest


def _scalars(*rows: object) -> MagicMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(rows)
    return result


def _count(value: int) -> MagicMock:
    result = MagicMock()
    result.scalar_one.return_value = value
    return result


def _page(*rows: tuple) -> MagicMock:
    result = MagicMock()
    result.all.return_value = list(rows)
    return result


@pytest.fixture
def auth_provider() -> AsyncMock:
    provider = AsyncMock()
    provider.create_user.return_value = "user-9"
    return provider


@pytest.fixture
def service(mock_db: AsyncMock, auth_provider: AsyncMock) -> UserService:
    return UserService(mock_db, auth_provider)


def _request(**overrides: object) -> UserCreateRequest:
    data = {
        "email": "edna@springfield.k12.us",
        "password": "correct-horse-battery",
        "role": "teacher",
        "first_name": " Edna ",
        "last_name": "Krabappel",
    }
    data.update(overrides)
    return UserCreateRequest(**data)


class TestListUsers:
    @pytest.mark.asyncio
    async def test_rows_carry_registrations(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        info = UserInformation(user_id="u1", first_name="Edna", last_name="K", role="teacher")
        mock_db.execute.side_effect = [
            _count(26),
            _page((info, "edna@springfield.k12.us")),
            _scalars(DistrictRegistration(user_id="u1", district_id="d1")),
            _scalars(
                SchoolRegistration(user_id="u1", school_id="s1"),
                SchoolRegistration(user_id="u1", school_id="s2"),
            ),
        ]

        response = await service.list_users(search="edna", page=2)

        assert response.total == 26
        assert response.page == 2
        assert response.total_pages == 2
        (user,) = response.users
        assert user.email == "edna@springfield.k12.us"
        assert user.district_id == "d1"
        assert user.school_ids == ["s1", "s2"]

    @pytest.mark.asyncio
    async def test_empty_page_skips_registration_queries(
        self, service: UserService, mock_db: AsyncMock
    ) -> None:
        mock_db.execute.side_effect = [_count(0), _page()]

        response = await service.list_users()

        assert response.users == []
        assert response.total_pages == 0
        assert mock_db.execute.await_count == 2


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_district_comes_from_school(
        self, service: UserService, mock_db: AsyncMock, auth_provider: AsyncMock
    ) -> None:
        mock_db.get.return_value = School(school_id="s1", school_name="Elementary", district_id="d1")

        summary = await service.create_user(_request(school_id="s1"))

        assert summary.user_id == "user-9"
        assert summary.first_name == "Edna"
        assert summary.district_id == "d1"
        assert summary.school_ids == ["s1"]
        assert auth_provider.create_user.await_args.args[1] == "correct-horse-battery"

        added = [call.args[0] for call in mock_db.add.call_args_list]
        assert {type(obj) for obj in added} == {
            UserInformation,
            SchoolRegistration,
            DistrictRegistration,
        }
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_school_from_another_district(
        self, service: UserService, mock_db: AsyncMock, auth_provider: AsyncMock
    ) -> None:
        mock_db.get.return_value = School(school_id="s1", school_name="Elementary", district_id="d2")

        with pytest.raises(UserReferenceNotFoundError, match="not in district d1"):
            await service.create_user(_request(school_id="s1", district_id="d1"))

        auth_provider.create_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_district(
        self, service: UserService, mock_db: AsyncMock, auth_provider: AsyncMock
    ) -> None:
        mock_db.get.return_value = None

        with pytest.raises(UserReferenceNotFoundError, match="District nope not found"):
            await service.create_user(_request(district_id="nope"))

        auth_provider.create_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_email_taken(
        self, service: UserService, mock_db: AsyncMock, auth_provider: AsyncMock
    ) -> None:
        auth_provider.create_user.side_effect = EmailAlreadyRegisteredError("taken")

        with pytest.raises(UserAlreadyExistsError):
            await service.create_user(_request())

        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_profile_removes_account(
        self, service: UserService, mock_db: AsyncMock, auth_provider: AsyncMock
    ) -> None:
        mock_db.commit.side_effect = SQLAlchemyError("connection lost")

        with pytest.raises(UserServiceError, match="Failed to create user information"):
            await service.create_user(_request())

        mock_db.rollback.assert_awaited_once()
        auth_provider.delete_user.assert_awaited_once_with("user-9")
