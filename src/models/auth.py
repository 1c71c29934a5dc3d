# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication request and response models."""

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(min_length=1)


class UserProfile(BaseModel):
    """The signed-in user as shown to clients."""

    id: str
    email: str
    role: str
    first_name: str | None = None
    last_name: str | None = None


class LoginResponse(BaseModel):
    """Tokens issued on login, with the user's profile."""

    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: UserProfile


class ProfileUpdateRequest(BaseModel):
    """Name change from the profile page. Omitted fields are kept."""

    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
