# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Invitation code service.

This module provides the InvitationService class for:
- Invitation code CRUD with usage counts and status
- Generating unused random codes
- Validating a code typed by a prospective user and issuing the
  invitation token
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.invitation.codes import (
    compute_status,
    generate_code,
    is_limit_reached,
    is_valid_code_format,
)
from src.domains.invitation.tokens import InvitationTokenManager
from src.infrastructure.database.models import (
    AcademicYear,
    InvitationCode,
    InvitationCodeUse,
    SiteSetting,
)
from src.models.invitation import (
    InvitationCodeCreateRequest,
    InvitationCodeResponse,
    InvitationCodeUpdateRequest,
    InvitationData,
    ValidationResult,
    normalize_code,
)
from src.utils.datetime import is_date_passed

logger = logging.getLogger(__name__)

MSG_INVALID = "Invalid invitation code"
MSG_EXPIRED = "This invitation code has expired"
MSG_LIMIT = "This invitation code has reached its usage limit"
MSG_VALID = "Invitation code validated successfully"
MSG_LOOKUP_FAILED = "Error validating invitation code"
MSG_UNEXPECTED = "An error occurred while validating the invitation code"


class InvitationServiceError(Exception):
    """Base exception for invitation service errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvitationCodeNotFoundError(InvitationServiceError):
    """Raised when an invitation code does not exist."""

    pass


class InvitationCodeExistsError(InvitationServiceError):
    """Raised when a code is already taken."""

    pass


class InvitationCodeFormatError(InvitationServiceError):
    """Raised when a code is not six upper-case letters or digits."""

    pass


class InvitationCodeInUseError(InvitationServiceError):
    """Raised when deleting a code that has been used."""

    pass


class InvitationService:
    """Service for invitation codes.

    Attributes:
        db: Async database session.
        tokens: Invitation token manager.
        code_length: Length of generated codes.
        max_attempts: Attempts at generating an unused code.
    """

    def __init__(
        self,
        db: AsyncSession,
        tokens: InvitationTokenManager,
        code_length: int = 6,
        max_attempts: int = 10,
    ) -> None:
        self.db = db
        self.tokens = tokens
        self.code_length = code_length
        self.max_attempts = max_attempts

    async def validate_code(self, code: str) -> tuple[ValidationResult, str | None]:
        """Validate a code and issue an invitation token for it.

        Expiry of the academic year is checked before the usage limit.
        Every failure is returned as a result with a user-facing message.

        Args:
            code: Code as typed; trimmed and upper-cased before lookup.

        Returns:
            The result and, when valid, the signed invitation token.
        """
        try:
            normalized = normalize_code(code)
            try:
                invitation = await self._get_by_code(normalized)
                if invitation is None:
                    logger.info("Invitation code %s not found", normalized)
                    return ValidationResult(valid=False, message=MSG_INVALID), None

                usage_count = await self._usage_count(invitation.invitation_code_id)
                academic_year = await self._get_academic_year(invitation.academic_year_id)
            except SQLAlchemyError as e:
                logger.error("Failed to look up invitation code %s: %s", normalized, e)
                return ValidationResult(valid=False, message=MSG_LOOKUP_FAILED), None

            if academic_year is None:
                logger.error(
                    "Academic year %s of invitation code %s not found",
                    invitation.academic_year_id,
                    normalized,
                )
                return ValidationResult(valid=False, message=MSG_LOOKUP_FAILED), None

            if is_date_passed(academic_year.expiry_date):
                logger.info("Invitation code %s expired on %s", normalized, academic_year.expiry_date)
                return ValidationResult(valid=False, message=MSG_EXPIRED), None

            if is_limit_reached(invitation.number_of_uses, usage_count):
                logger.info(
                    "Invitation code %s used %d of %d times",
                    normalized,
                    usage_count,
                    invitation.number_of_uses,
                )
                return ValidationResult(valid=False, message=MSG_LIMIT), None

            token = self.tokens.create_token(
                InvitationData(
                    id=invitation.invitation_code_id,
                    role=invitation.role,
                    district_id=invitation.district_id,
                    school_id=invitation.school_id,
                    academic_year_id=invitation.academic_year_id,
                    code=normalized,
                )
            )
            logger.info("Invitation code %s validated", normalized)
            return ValidationResult(valid=True, message=MSG_VALID), token
        except Exception:
            logger.exception("Unexpected error validating invitation code")
            return ValidationResult(valid=False, message=MSG_UNEXPECTED), None

    async def generate_unique_code(self) -> str:
        """Generate a code not used by any invitation.

        Raises:
            InvitationServiceError: If every attempt collided.
        """
        for _ in range(self.max_attempts):
            code = generate_code(self.code_length)
            if await self._get_by_code(code) is None:
                return code
        raise InvitationServiceError("Could not generate a unique invitation code")

    async def create_code(
        self,
        request: InvitationCodeCreateRequest,
        created_by: str | None = None,
    ) -> InvitationCodeResponse:
        """Create an invitation code.

        Raises:
            InvitationCodeFormatError: If the given code is malformed.
            InvitationCodeExistsError: If the code is taken.
            InvitationServiceError: If no academic year is given or set.
        """
        code = request.invitation_code or await self.generate_unique_code()
        await self._check_code_available(code)

        academic_year_id = request.academic_year_id or await self._current_academic_year_id()
        if academic_year_id is None:
            raise InvitationServiceError("Please select an academic year.")

        invitation = InvitationCode(
            invitation_code=code,
            role=request.role,
            subject_id=request.subject_id,
            district_id=request.district_id,
            school_id=request.school_id,
            academic_year_id=academic_year_id,
            number_of_uses=request.number_of_uses,
            code_type=request.code_type,
            created_by=created_by,
        )
        self.db.add(invitation)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise InvitationCodeExistsError(f"Invitation code {code} already exists") from e
        await self.db.refresh(invitation)

        logger.info("Created invitation code %s (%s)", code, invitation.invitation_code_id)
        return await self._to_response(invitation)

    async def list_codes(
        self,
        code_type: str | None = None,
        district_id: str | None = None,
    ) -> tuple[list[InvitationCodeResponse], int]:
        """List codes newest first with usage counts and status."""
        usage = (
            select(
                InvitationCodeUse.invitation_code_id,
                func.count(InvitationCodeUse.id).label("usage_count"),
            )
            .group_by(InvitationCodeUse.invitation_code_id)
            .subquery()
        )
        query = (
            select(
                InvitationCode,
                func.coalesce(usage.c.usage_count, 0),
                AcademicYear.expiry_date,
            )
            .outerjoin(usage, usage.c.invitation_code_id == InvitationCode.invitation_code_id)
            .outerjoin(
                AcademicYear,
                AcademicYear.academic_year_id == InvitationCode.academic_year_id,
            )
            .order_by(InvitationCode.created_at.desc())
        )
        if code_type:
            query = query.where(InvitationCode.code_type == code_type)
        if district_id:
            query = query.where(InvitationCode.district_id == district_id)

        result = await self.db.execute(query)
        items = [
            self._build_response(invitation, usage_count, expiry_date)
            for invitation, usage_count, expiry_date in result.all()
        ]
        return items, len(items)

    async def get_code(self, invitation_code_id: str) -> InvitationCodeResponse:
        invitation = await self._get_by_id(invitation_code_id)
        return await self._to_response(invitation)

    async def update_code(
        self,
        invitation_code_id: str,
        request: InvitationCodeUpdateRequest,
    ) -> InvitationCodeResponse:
        """Update an invitation code.

        Raises:
            InvitationCodeNotFoundError: If the code does not exist.
            InvitationCodeFormatError: If a new code is malformed.
            InvitationCodeExistsError: If a new code is taken.
        """
        invitation = await self._get_by_id(invitation_code_id)

        if request.invitation_code and request.invitation_code != invitation.invitation_code:
            await self._check_code_available(request.invitation_code)
            invitation.invitation_code = request.invitation_code

        for field in ("role", "subject_id", "district_id", "school_id", "academic_year_id"):
            value = getattr(request, field)
            if value is not None:
                setattr(invitation, field, value)

        if request.unlimited:
            invitation.number_of_uses = None
        elif request.number_of_uses is not None:
            invitation.number_of_uses = request.number_of_uses

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise InvitationCodeExistsError(
                f"Invitation code {request.invitation_code} already exists"
            ) from e
        await self.db.refresh(invitation)

        logger.info("Updated invitation code %s", invitation_code_id)
        return await self._to_response(invitation)

    async def delete_code(self, invitation_code_id: str) -> None:
        """Delete an invitation code that has never been used.

        Raises:
            InvitationCodeNotFoundError: If the code does not exist.
            InvitationCodeInUseError: If the code has recorded uses.
        """
        invitation = await self._get_by_id(invitation_code_id)
        if await self._usage_count(invitation_code_id) > 0:
            raise InvitationCodeInUseError(
                "This invitation code has already been used and cannot be deleted."
            )

        await self.db.delete(invitation)
        await self.db.commit()
        logger.info("Deleted invitation code %s", invitation_code_id)

    async def _check_code_available(self, code: str) -> None:
        if not is_valid_code_format(code):
            raise InvitationCodeFormatError(
                "Invitation code must be 6 uppercase letters or numbers"
            )
        if await self._get_by_code(code) is not None:
            raise InvitationCodeExistsError(f"Invitation code {code} already exists")

    async def _get_by_code(self, code: str) -> InvitationCode | None:
        result = await self.db.execute(
            select(InvitationCode).where(InvitationCode.invitation_code == code).limit(1)
        )
        return result.scalar_one_or_none()

    async def _get_by_id(self, invitation_code_id: str) -> InvitationCode:
        invitation = await self.db.get(InvitationCode, invitation_code_id)
        if invitation is None:
            raise InvitationCodeNotFoundError(f"Invitation code {invitation_code_id} not found")
        return invitation

    async def _usage_count(self, invitation_code_id: str) -> int:
        result = await self.db.execute(
            select(func.count(InvitationCodeUse.id)).where(
                InvitationCodeUse.invitation_code_id == invitation_code_id
            )
        )
        return result.scalar() or 0

    async def _get_academic_year(self, academic_year_id: str) -> AcademicYear | None:
        return await self.db.get(AcademicYear, academic_year_id)

    async def _current_academic_year_id(self) -> str | None:
        result = await self.db.execute(select(SiteSetting.academic_year_id).limit(1))
        return result.scalar_one_or_none()

    async def _to_response(self, invitation: InvitationCode) -> InvitationCodeResponse:
        usage_count = await self._usage_count(invitation.invitation_code_id)
        academic_year = await self._get_academic_year(invitation.academic_year_id)
        return self._build_response(
            invitation,
            usage_count,
            academic_year.expiry_date if academic_year else None,
        )

    @staticmethod
    def _build_response(invitation: InvitationCode, usage_count, expiry_date) -> InvitationCodeResponse:
        return InvitationCodeResponse(
            invitation_code_id=invitation.invitation_code_id,
            invitation_code=invitation.invitation_code,
            role=invitation.role,
            subject_id=invitation.subject_id,
            district_id=invitation.district_id,
            school_id=invitation.school_id,
            academic_year_id=invitation.academic_year_id,
            number_of_uses=invitation.number_of_uses,
            code_type=invitation.code_type,
            created_by=invitation.created_by,
            created_at=invitation.created_at,
            usage_count=usage_count,
            expiry_date=expiry_date,
            status=compute_status(invitation.number_of_uses, usage_count, expiry_date),
        )
