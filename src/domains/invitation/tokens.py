# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Invitation token signing and verification.

The token carries the invitation's role and scope from code validation to
registration. It is signed with the JWT secret and only ever stored in an
HTTP-only cookie.
"""

import logging
from datetime import timedelta

from jose import ExpiredSignatureError, JWTError as JoseJWTError, jwt
from pydantic import ValidationError

from src.core.config.settings import InvitationSettings, JWTSettings
from src.domains.auth.jwt import InvalidTokenError, TokenExpiredError
from src.models.invitation import InvitationData
from src.utils.datetime import utc_now

logger = logging.getLogger(__name__)

TOKEN_TYPE = "invitation"


class InvitationTokenManager:
    """Creates and verifies invitation tokens.

    Attributes:
        _jwt: Signing key and algorithm.
        _settings: Token lifetime.
    """

    def __init__(self, jwt_settings: JWTSettings, settings: InvitationSettings) -> None:
        self._jwt = jwt_settings
        self._settings = settings

    @property
    def max_age(self) -> int:
        """Token lifetime in seconds, also used as the cookie max-age."""
        return self._settings.token_expire_minutes * 60

    def create_token(self, data: InvitationData) -> str:
        now = utc_now()
        payload = {
            **data.model_dump(),
            "type": TOKEN_TYPE,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=self._settings.token_expire_minutes)).timestamp()),
        }
        return jwt.encode(
            payload,
            self._jwt.secret_key.get_secret_value(),
            algorithm=self._jwt.algorithm,
        )

    def decode_token(self, token: str) -> InvitationData:
        """Verify a token and return its invitation data.

        Raises:
            TokenExpiredError: If the token is past its lifetime.
            InvalidTokenError: If the signature, type or claims are wrong.
        """
        try:
            payload = jwt.decode(
                token,
                self._jwt.secret_key.get_secret_value(),
                algorithms=[self._jwt.algorithm],
            )
        except ExpiredSignatureError:
            raise TokenExpiredError("Invitation token has expired")
        except JoseJWTError as e:
            logger.warning("Invitation token decode failed: %s", str(e))
            raise InvalidTokenError(f"Invalid invitation token: {str(e)}")

        if payload.get("type") != TOKEN_TYPE:
            raise InvalidTokenError("Not an invitation token")

        try:
            return InvitationData.model_validate(payload)
        except ValidationError as e:
            raise InvalidTokenError(f"Invalid invitation claims: {e.error_count()} errors")

    def read_token(self, token: str | None) -> InvitationData | None:
        """Decode a token, returning None when it is missing or unusable."""
        if not token:
            return None
        try:
            return self.decode_token(token)
        except (TokenExpiredError, InvalidTokenError):
            return None
