# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Invitation code models.

Codes are six upper-case letters or digits. Validation results never
carry the code's role or scope; those travel only inside the signed
invitation token.
"""

from datetime import date, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator

CODE_PATTERN = r"^[A-Z0-9]{6}$"

Role = Literal["admin", "district", "school", "teacher", "student"]
CodeType = Literal["admin", "teacher"]


class InvitationStatus(str, Enum):
    AVAILABLE = "Available"
    UNAVAILABLE = "Unavailable"
    EXPIRED = "Expired"


def normalize_code(code: str) -> str:
    """Trim whitespace and upper-case a code as typed by a user."""
    return code.strip().upper()


class InvitationCodeCreateRequest(BaseModel):
    """Create request; the code is generated when omitted.

    Attributes:
        invitation_code: Six-character code, normalized before checking.
        number_of_uses: Usage limit; None means unlimited.
        academic_year_id: Defaults to the site's current academic year.
    """

    invitation_code: str | None = None
    role: Role
    subject_id: str | None = None
    district_id: str | None = None
    school_id: str | None = None
    academic_year_id: str | None = None
    number_of_uses: int | None = Field(default=None, ge=1)
    code_type: CodeType = "admin"

    @field_validator("invitation_code")
    @classmethod
    def _normalize(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return normalize_code(value)


class InvitationCodeUpdateRequest(BaseModel):
    """Partial update. ``number_of_uses`` can be cleared to unlimited
    with ``unlimited=True``."""

    invitation_code: str | None = None
    role: Role | None = None
    subject_id: str | None = None
    district_id: str | None = None
    school_id: str | None = None
    academic_year_id: str | None = None
    number_of_uses: int | None = Field(default=None, ge=1)
    unlimited: bool = False

    @field_validator("invitation_code")
    @classmethod
    def _normalize(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return normalize_code(value)


class InvitationCodeResponse(BaseModel):
    """An invitation code with its usage and derived status."""

    invitation_code_id: str
    invitation_code: str
    role: str
    subject_id: str | None = None
    district_id: str | None = None
    school_id: str | None = None
    academic_year_id: str
    number_of_uses: int | None = None
    code_type: str
    created_by: str | None = None
    created_at: datetime | None = None
    usage_count: int = 0
    expiry_date: date | None = None
    status: InvitationStatus


class InvitationCodeListResponse(BaseModel):
    items: list[InvitationCodeResponse]
    total: int


class GeneratedCodeResponse(BaseModel):
    invitation_code: str


class ValidateInvitationRequest(BaseModel):
    code: str = Field(min_length=1, max_length=32)


class ValidationResult(BaseModel):
    """Outcome of validating a code. Failures are results, not errors."""

    valid: bool
    message: str


class InvitationData(BaseModel):
    """Claims carried by the invitation token."""

    id: str
    role: str
    district_id: str | None = None
    school_id: str | None = None
    academic_year_id: str | None = None
    code: str


class InvitationSessionResponse(BaseModel):
    valid: bool
    message: str | None = None
    data: InvitationData | None = None
