# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Invitation code API endpoints.

This module provides endpoints for invitation codes:
- GET / - List codes with usage and status
- POST / - Create a code
- POST /generate - Generate an unused code
- GET /{invitation_code_id} - Get a code
- PUT /{invitation_code_id} - Update a code
- DELETE /{invitation_code_id} - Delete an unused code
- POST /validate - Validate a code and set the invitation cookie
- GET /session - Read the invitation carried by the cookie
- DELETE /session - Clear the invitation cookie

Management requires a teacher or admin. Validation and the session
endpoints are public; validation is rate limited per IP.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, get_invitation_tokens, require_staff
from src.api.middleware.auth import CurrentUser
from src.api.middleware.rate_limit import get_ip_only, invitation_validation_limit, limiter
from src.core.config import get_settings
from src.domains.auth.jwt import InvalidTokenError, TokenExpiredError
from src.domains.invitation import (
    InvitationCodeExistsError,
    InvitationCodeFormatError,
    InvitationCodeInUseError,
    InvitationCodeNotFoundError,
    InvitationService,
    InvitationServiceError,
    InvitationTokenManager,
)
from src.models.invitation import (
    CodeType,
    GeneratedCodeResponse,
    InvitationCodeCreateRequest,
    InvitationCodeListResponse,
    InvitationCodeResponse,
    InvitationCodeUpdateRequest,
    InvitationSessionResponse,
    ValidateInvitationRequest,
    ValidationResult,
)

logger = logging.getLogger(__name__)

router = APIRouter()

MSG_NO_SESSION = "No invitation data found. Please verify your invitation code first."
MSG_BAD_SESSION = "Invalid or expired invitation data. Please try again."

COOKIE_NAME = get_settings().invitation.cookie_name


def _get_service(db: AsyncSession, tokens: InvitationTokenManager) -> InvitationService:
    settings = get_settings().invitation
    return InvitationService(
        db=db,
        tokens=tokens,
        code_length=settings.code_length,
        max_attempts=settings.max_generation_attempts,
    )


def set_invitation_cookie(response: Response, token: str, max_age: int) -> None:
    """Attach the invitation token as an HttpOnly strict cookie."""
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=get_settings().is_production,
        samesite="strict",
    )


def clear_invitation_cookie(response: Response) -> None:
    response.delete_cookie(
        key=COOKIE_NAME,
        path="/",
        httponly=True,
        secure=get_settings().is_production,
        samesite="strict",
    )


# =========================================================================
# Public endpoints
# =========================================================================


@router.post(
    "/validate",
    response_model=ValidationResult,
    summary="Validate invitation code",
    description="Validate a code typed by a prospective user. On success the "
    "invitation is stored in an HttpOnly cookie; the body never carries it.",
)
@limiter.limit(invitation_validation_limit, key_func=get_ip_only)
async def validate_code(
    request: Request,
    response: Response,
    data: ValidateInvitationRequest,
    db: AsyncSession = Depends(get_db),
    tokens: InvitationTokenManager = Depends(get_invitation_tokens),
) -> ValidationResult:
    service = _get_service(db, tokens)

    result, token = await service.validate_code(data.code)
    if result.valid and token:
        set_invitation_cookie(response, token, tokens.max_age)
    return result


@router.get(
    "/session",
    response_model=InvitationSessionResponse,
    summary="Read invitation session",
)
async def get_session_data(
    response: Response,
    invitation_token: Annotated[str | None, Cookie(alias=COOKIE_NAME)] = None,
    tokens: InvitationTokenManager = Depends(get_invitation_tokens),
) -> InvitationSessionResponse:
    """Return the invitation carried by the cookie.

    An invalid or expired cookie is cleared.
    """
    if not invitation_token:
        return InvitationSessionResponse(valid=False, message=MSG_NO_SESSION)

    try:
        data = tokens.decode_token(invitation_token)
    except (TokenExpiredError, InvalidTokenError) as e:
        logger.info("Rejected invitation session: %s", str(e))
        clear_invitation_cookie(response)
        return InvitationSessionResponse(valid=False, message=MSG_BAD_SESSION)

    return InvitationSessionResponse(valid=True, data=data)


@router.delete(
    "/session",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear invitation session",
)
async def clear_session(response: Response) -> None:
    clear_invitation_cookie(response)


# =========================================================================
# Management endpoints
# =========================================================================


@router.get(
    "",
    response_model=InvitationCodeListResponse,
    summary="List invitation codes",
)
async def list_codes(
    code_type: Annotated[CodeType | None, Query(description="Filter by code type")] = None,
    district_id: Annotated[str | None, Query(description="Filter by district")] = None,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
    tokens: InvitationTokenManager = Depends(get_invitation_tokens),
) -> InvitationCodeListResponse:
    service = _get_service(db, tokens)
    items, total = await service.list_codes(code_type=code_type, district_id=district_id)
    return InvitationCodeListResponse(items=items, total=total)


@router.post(
    "",
    response_model=InvitationCodeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create invitation code",
)
async def create_code(
    data: InvitationCodeCreateRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
    tokens: InvitationTokenManager = Depends(get_invitation_tokens),
) -> InvitationCodeResponse:
    """Create a code; one is generated when the request omits it.

    Raises:
        HTTPException: 400 on a malformed code or missing academic year,
            409 if the code already exists.
    """
    service = _get_service(db, tokens)

    try:
        return await service.create_code(data, created_by=current_user.id)
    except InvitationCodeExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except InvitationServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post(
    "/generate",
    response_model=GeneratedCodeResponse,
    summary="Generate an unused code",
)
async def generate_code(
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
    tokens: InvitationTokenManager = Depends(get_invitation_tokens),
) -> GeneratedCodeResponse:
    service = _get_service(db, tokens)

    try:
        code = await service.generate_unique_code()
    except InvitationServiceError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)
    return GeneratedCodeResponse(invitation_code=code)


@router.get(
    "/{invitation_code_id}",
    response_model=InvitationCodeResponse,
    summary="Get invitation code",
)
async def get_code(
    invitation_code_id: str,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
    tokens: InvitationTokenManager = Depends(get_invitation_tokens),
) -> InvitationCodeResponse:
    service = _get_service(db, tokens)

    try:
        return await service.get_code(invitation_code_id)
    except InvitationCodeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.put(
    "/{invitation_code_id}",
    response_model=InvitationCodeResponse,
    summary="Update invitation code",
)
async def update_code(
    invitation_code_id: str,
    data: InvitationCodeUpdateRequest,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
    tokens: InvitationTokenManager = Depends(get_invitation_tokens),
) -> InvitationCodeResponse:
    service = _get_service(db, tokens)

    try:
        return await service.update_code(invitation_code_id, data)
    except InvitationCodeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except InvitationCodeExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except InvitationCodeFormatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.delete(
    "/{invitation_code_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete invitation code",
)
async def delete_code(
    invitation_code_id: str,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db),
    tokens: InvitationTokenManager = Depends(get_invitation_tokens),
) -> None:
    service = _get_service(db, tokens)

    try:
        await service.delete_code(invitation_code_id)
    except InvitationCodeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except InvitationCodeInUseError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
