# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User administration request and response models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

UserRole = Literal["admin", "district", "school", "teacher", "student"]


class UserSummary(BaseModel):
    """One row of the users table, with the user's registrations."""

    user_id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str
    district_id: str | None = None
    school_ids: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


class UserListResponse(BaseModel):
    users: list[UserSummary]
    total: int
    page: int
    page_size: int
    total_pages: int


class UserCreateRequest(BaseModel):
    """An account added by an administrator.

    When only ``school_id`` is given the district is taken from the school.
    """

    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    role: UserRole
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    district_id: str | None = None
    school_id: str | None = None
