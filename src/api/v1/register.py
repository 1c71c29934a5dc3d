# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registration API endpoint.

- POST / - Create an account from the invitation stored in the cookie

Failures are returned as ``{"success": false, "message": ...}`` so the
sign-up form can show the message. On success the invitation cookie is
cleared.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_auth_provider, get_db, get_invitation_tokens
from src.api.v1.invitation_codes import COOKIE_NAME, clear_invitation_cookie
from src.domains.invitation import InvitationTokenManager
from src.domains.registration import AuthProvider, RegistrationService
from src.models.registration import RegisterRequest, RegistrationResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=RegistrationResult,
    summary="Register from invitation",
)
async def register(
    data: RegisterRequest,
    response: Response,
    invitation_token: Annotated[str | None, Cookie(alias=COOKIE_NAME)] = None,
    db: AsyncSession = Depends(get_db),
    auth_provider: AuthProvider = Depends(get_auth_provider),
    tokens: InvitationTokenManager = Depends(get_invitation_tokens),
) -> RegistrationResult:
    service = RegistrationService(db=db, auth_provider=auth_provider, tokens=tokens)

    result = await service.register(data, invitation_token)
    if result.success:
        clear_invitation_cookie(response)
    return result
