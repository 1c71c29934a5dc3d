# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registration request and result models."""

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Sign-up form. Role and scope come from the invitation token.

    Attributes:
        school_id: Required for school and teacher invitations.
    """

    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    school_id: str | None = None


class RegistrationResult(BaseModel):
    """Outcome of a registration. Rejections are results, not errors."""

    success: bool
    message: str | None = None
    user_id: str | None = None
