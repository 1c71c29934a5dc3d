# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for invitation-based registration."""

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from src.core.config.settings import InvitationSettings, JWTSettings
from src.domains.invitation.tokens import InvitationTokenManager
from src.domains.registration.auth_provider import AuthProviderError, EmailAlreadyRegisteredError
from src.domains.registration.email_domains import extract_email_domain, is_domain_allowed
from src.domains.registration.service import (
    MSG_EMAIL_TAKEN,
    MSG_INVALID_INVITATION,
    MSG_PROFILE_FAILED,
    MSG_SELECT_SCHOOL,
    MSG_UNEXPECTED,
    RegistrationService,
    domain_error_message,
)
from src.infrastructure.database.models import (
    DistrictRegistration,
    InvitationCodeUse,
    SchoolRegistration,
    UserInformation,
)
from src.models.invitation import InvitationData
from src.models.registration import RegisterRequest


class TestEmailDomains:
    def test_extract_domain(self) -> None:
        assert extract_email_domain("Edna@Springfield.K12.us") == "springfield.k12.us"
        assert extract_email_domain("no-at-sign") == ""
        assert extract_email_domain("") == ""

    def test_empty_allow_list_allows_everything(self) -> None:
        assert is_domain_allowed("anything.test", [])

    def test_exact_match_ignores_case(self) -> None:
        assert is_domain_allowed("springfield.k12.us", ["Springfield.K12.us"])
        assert not is_domain_allowed("shelbyville.k12.us", ["springfield.k12.us"])

    def test_wildcard_matches_base_and_subdomains(self) -> None:
        allowed = ["*.springfield.k12.us"]

        assert is_domain_allowed("springfield.k12.us", allowed)
        assert is_domain_allowed("staff.springfield.k12.us", allowed)
        assert not is_domain_allowed("notspringfield.k12.us", allowed)

    def test_error_message_lists_domains(self) -> None:
        assert domain_error_message(["a.org", "b.org"]) == (
            "Please use an email from one of these domains: a.org, b.org"
        )


@pytest.fixture
def tokens(jwt_settings: JWTSettings, invitation_settings: InvitationSettings) -> InvitationTokenManager:
    return InvitationTokenManager(jwt_settings, invitation_settings)


@pytest.fixture
def auth_provider() -> AsyncMock:
    provider = AsyncMock()
    provider.create_user.return_value = "user-1"
    return provider


@pytest.fixture
def savepoint() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(
    mock_db: AsyncMock,
    auth_provider: AsyncMock,
    tokens: InvitationTokenManager,
    savepoint: MagicMock,
) -> RegistrationService:
    mock_db.begin_nested = MagicMock(return_value=savepoint)
    mock_db.get.return_value = SimpleNamespace(allowed_domains=["springfield.k12.us"])
    return RegistrationService(mock_db, auth_provider, tokens)


def _token(tokens: InvitationTokenManager, **overrides: Any) -> str:
    values = {
        "id": "code-1",
        "role": "teacher",
        "district_id": "district-1",
        "school_id": None,
        "academic_year_id": "year-1",
        "code": "AB12CD",
    }
    values.update(overrides)
    return tokens.create_token(InvitationData(**values))


def _added(mock_db: AsyncMock) -> list[Any]:
    return [call.args[0] for call in mock_db.add.call_args_list]


class TestRegister:
    """Tests for RegistrationService.register."""

    @pytest.mark.asyncio
    async def test_successful_registration_writes_all_rows(
        self,
        service: RegistrationService,
        tokens: InvitationTokenManager,
        mock_db: AsyncMock,
        auth_provider: AsyncMock,
        sample_register_data: dict[str, Any],
    ) -> None:
        result = await service.register(RegisterRequest(**sample_register_data), _token(tokens))

        assert result.success is True
        assert result.user_id == "user-1"
        auth_provider.create_user.assert_awaited_once_with(
            sample_register_data["email"], sample_register_data["password"]
        )

        rows = _added(mock_db)
        assert [type(row) for row in rows] == [
            UserInformation,
            SchoolRegistration,
            DistrictRegistration,
            InvitationCodeUse,
        ]
        assert rows[0].role == "teacher"
        assert rows[1].school_id == sample_register_data["school_id"]
        assert rows[3].invitation_code_id == "code-1"
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_or_bad_token(
        self,
        service: RegistrationService,
        auth_provider: AsyncMock,
        sample_register_data: dict[str, Any],
    ) -> None:
        request = RegisterRequest(**sample_register_data)

        for token in (None, "garbage"):
            result = await service.register(request, token)
            assert result.success is False
            assert result.message == MSG_INVALID_INVITATION
        auth_provider.create_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_email_outside_district_domains(
        self,
        service: RegistrationService,
        tokens: InvitationTokenManager,
        auth_provider: AsyncMock,
        sample_register_data: dict[str, Any],
    ) -> None:
        request = RegisterRequest(**{**sample_register_data, "email": "edna@gmail.com"})

        result = await service.register(request, _token(tokens))

        assert result.success is False
        assert result.message == domain_error_message(["springfield.k12.us"])
        auth_provider.create_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_district_skips_domain_check(
        self,
        service: RegistrationService,
        tokens: InvitationTokenManager,
        mock_db: AsyncMock,
        sample_register_data: dict[str, Any],
    ) -> None:
        mock_db.get.return_value = None
        request = RegisterRequest(**{**sample_register_data, "email": "edna@gmail.com"})

        result = await service.register(request, _token(tokens))

        assert result.success is True

    @pytest.mark.asyncio
    async def test_teacher_must_choose_a_school(
        self,
        service: RegistrationService,
        tokens: InvitationTokenManager,
        sample_register_data: dict[str, Any],
    ) -> None:
        request = RegisterRequest(**{**sample_register_data, "school_id": None})

        result = await service.register(request, _token(tokens))

        assert result.message == MSG_SELECT_SCHOOL

    @pytest.mark.asyncio
    async def test_student_gets_school_from_invitation(
        self,
        service: RegistrationService,
        tokens: InvitationTokenManager,
        mock_db: AsyncMock,
        sample_register_data: dict[str, Any],
    ) -> None:
        request = RegisterRequest(**{**sample_register_data, "school_id": None})
        token = _token(tokens, role="student", district_id=None, school_id="school-9")

        result = await service.register(request, token)

        assert result.success is True
        schools = [row for row in _added(mock_db) if isinstance(row, SchoolRegistration)]
        assert [row.school_id for row in schools] == ["school-9"]
        assert not any(isinstance(row, DistrictRegistration) for row in _added(mock_db))

    @pytest.mark.asyncio
    async def test_email_already_registered(
        self,
        service: RegistrationService,
        tokens: InvitationTokenManager,
        auth_provider: AsyncMock,
        sample_register_data: dict[str, Any],
    ) -> None:
        auth_provider.create_user.side_effect = EmailAlreadyRegisteredError("taken")

        result = await service.register(RegisterRequest(**sample_register_data), _token(tokens))

        assert result.message == MSG_EMAIL_TAKEN

    @pytest.mark.asyncio
    async def test_provider_error_message_is_passed_through(
        self,
        service: RegistrationService,
        tokens: InvitationTokenManager,
        auth_provider: AsyncMock,
        sample_register_data: dict[str, Any],
    ) -> None:
        auth_provider.create_user.side_effect = AuthProviderError("Password is too weak")

        result = await service.register(RegisterRequest(**sample_register_data), _token(tokens))

        assert result.message == "Password is too weak"

    @pytest.mark.asyncio
    async def test_failed_profile_write_deletes_the_account(
        self,
        service: RegistrationService,
        tokens: InvitationTokenManager,
        mock_db: AsyncMock,
        auth_provider: AsyncMock,
        sample_register_data: dict[str, Any],
    ) -> None:
        mock_db.flush.side_effect = SQLAlchemyError("constraint violated")

        result = await service.register(RegisterRequest(**sample_register_data), _token(tokens))

        assert result.success is False
        assert result.message == MSG_PROFILE_FAILED
        mock_db.rollback.assert_awaited_once()
        auth_provider.delete_user.assert_awaited_once_with("user-1")

    @pytest.mark.asyncio
    async def test_failed_code_use_does_not_fail_registration(
        self,
        service: RegistrationService,
        tokens: InvitationTokenManager,
        mock_db: AsyncMock,
        auth_provider: AsyncMock,
        savepoint: MagicMock,
        sample_register_data: dict[str, Any],
    ) -> None:
        savepoint.__aenter__.side_effect = SQLAlchemyError("savepoint failed")

        result = await service.register(RegisterRequest(**sample_register_data), _token(tokens))

        assert result.success is True
        mock_db.commit.assert_awaited_once()
        auth_provider.delete_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unexpected_error(
        self,
        service: RegistrationService,
        tokens: InvitationTokenManager,
        mock_db: AsyncMock,
        sample_register_data: dict[str, Any],
    ) -> None:
        mock_db.get.side_effect = RuntimeError("boom")

        result = await service.register(RegisterRequest(**sample_register_data), _token(tokens))

        assert result.message == MSG_UNEXPECTED
