# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subscription models.

A subscription counts the seats a district bought for an academic year:
district admins, school admins, teachers and students.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.models.activity import PublishedFlag


class SubscriptionCreateRequest(BaseModel):
    district_id: str
    academic_year_id: str | None = None
    district: int = Field(default=0, ge=0)
    school: int = Field(default=0, ge=0)
    teachers: int = Field(default=0, ge=0)
    students: int = Field(default=0, ge=0)
    paid: PublishedFlag = "No"


class SubscriptionUpdateRequest(BaseModel):
    academic_year_id: str | None = None
    district: int | None = Field(default=None, ge=0)
    school: int | None = Field(default=None, ge=0)
    teachers: int | None = Field(default=None, ge=0)
    students: int | None = Field(default=None, ge=0)
    paid: PublishedFlag | None = None


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    district_id: str
    academic_year_id: str | None = None
    district: int
    school: int
    teachers: int
    students: int
    paid: str
