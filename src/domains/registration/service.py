# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registration service.

Turns a validated invitation into an account:

1. Read the invitation token set during code validation.
2. Check the email against the district's allowed domains.
3. Require a school for school and teacher invitations.
4. Create the login account through the auth provider.
5. Write the profile, school and district registrations and the code
   use in one transaction.

When step 5 fails the transaction is rolled back and the account from
step 4 is deleted. Recording the code use runs in a savepoint and its
failure is logged without failing the registration.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.invitation.tokens import InvitationTokenManager
from src.domains.registration.auth_provider import (
    AuthProvider,
    AuthProviderError,
    EmailAlreadyRegisteredError,
)
from src.domains.registration.email_domains import extract_email_domain, is_domain_allowed
from src.infrastructure.database.models import (
    District,
    DistrictRegistration,
    InvitationCodeUse,
    SchoolRegistration,
    UserInformation,
)
from src.models.invitation import InvitationData
from src.models.registration import RegisterRequest, RegistrationResult

logger = logging.getLogger(__name__)

SCHOOL_ROLES = frozenset({"school", "teacher"})

MSG_INVALID_INVITATION = "Invalid invitation data. Please try again with a valid invitation code."
MSG_SELECT_SCHOOL = "Please select your school."
MSG_EMAIL_TAKEN = (
    "An account with this email already exists. "
    "Please use a different email or try logging in."
)
MSG_PROFILE_FAILED = "Failed to create user information"
MSG_UNEXPECTED = "An unexpected error occurred during registration"


def domain_error_message(allowed_domains: list[str]) -> str:
    return f"Please use an email from one of these domains: {', '.join(allowed_domains)}"


class RegistrationService:
    """Service for invitation-based sign-up.

    Attributes:
        db: Async database session for the registration rows.
        auth_provider: Store that owns login accounts.
        tokens: Invitation token manager.
    """

    def __init__(
        self,
        db: AsyncSession,
        auth_provider: AuthProvider,
        tokens: InvitationTokenManager,
    ) -> None:
        self.db = db
        self.auth_provider = auth_provider
        self.tokens = tokens

    async def register(
        self,
        request: RegisterRequest,
        invitation_token: str | None,
    ) -> RegistrationResult:
        """Register a user from an invitation.

        Args:
            request: Sign-up form.
            invitation_token: Token from the invitation cookie.

        Returns:
            Success with the new user id, or a failure with the message to
            show on the form.
        """
        try:
            invitation = self.tokens.read_token(invitation_token)
            if invitation is None:
                return RegistrationResult(success=False, message=MSG_INVALID_INVITATION)

            rejection = await self._check_email_domain(invitation, request.email)
            if rejection:
                return RegistrationResult(success=False, message=rejection)

            if invitation.role in SCHOOL_ROLES and not request.school_id:
                return RegistrationResult(success=False, message=MSG_SELECT_SCHOOL)

            try:
                user_id = await self.auth_provider.create_user(request.email, request.password)
            except EmailAlreadyRegisteredError:
                logger.info("Registration rejected: %s already registered", request.email)
                return RegistrationResult(success=False, message=MSG_EMAIL_TAKEN)
            except AuthProviderError as e:
                logger.warning("Account creation failed: %s", e)
                return RegistrationResult(success=False, message=str(e))

            try:
                await self._write_registration(user_id, request, invitation)
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error("Failed to write registration of %s: %s", user_id, e)
                await self.auth_provider.delete_user(user_id)
                return RegistrationResult(success=False, message=MSG_PROFILE_FAILED)

            logger.info(
                "Registered user %s as %s with code %s", user_id, invitation.role, invitation.code
            )
            return RegistrationResult(success=True, user_id=user_id)
        except Exception:
            logger.exception("Unexpected error during registration")
            return RegistrationResult(success=False, message=MSG_UNEXPECTED)

    async def _check_email_domain(self, invitation: InvitationData, email: str) -> str | None:
        """Rejection message for an email outside the district's domains."""
        if not invitation.district_id:
            return None

        district = await self.db.get(District, invitation.district_id)
        if district is None:
            logger.warning(
                "District %s of invitation %s not found, skipping domain check",
                invitation.district_id,
                invitation.code,
            )
            return None

        allowed = district.allowed_domains
        if is_domain_allowed(extract_email_domain(email), allowed):
            return None
        logger.info("Registration rejected: %s not in %s", email, allowed)
        return domain_error_message(allowed)

    async def _write_registration(
        self,
        user_id: str,
        request: RegisterRequest,
        invitation: InvitationData,
    ) -> None:
        self.db.add(
            UserInformation(
                user_id=user_id,
                first_name=request.first_name,
                last_name=request.last_name,
                role=invitation.role or "student",
            )
        )

        school_id = request.school_id if invitation.role in SCHOOL_ROLES else invitation.school_id
        if school_id:
            self.db.add(SchoolRegistration(user_id=user_id, school_id=school_id))
        if invitation.district_id:
            self.db.add(DistrictRegistration(user_id=user_id, district_id=invitation.district_id))
        await self.db.flush()

        try:
            async with self.db.begin_nested():
                self.db.add(InvitationCodeUse(invitation_code_id=invitation.id, user_id=user_id))
        except SQLAlchemyError as e:
            logger.warning(
                "Could not record use of invitation code %s by %s: %s", invitation.code, user_id, e
            )

        await self.db.commit()
