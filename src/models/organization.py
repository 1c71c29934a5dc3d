# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""District, school, academic year and site setting models."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class DistrictCreateRequest(BaseModel):
    """A district. ``domain`` is the staff email domain, and
    ``student_domain`` an optional second domain for students."""

    district_name: str = Field(min_length=1, max_length=255)
    domain: str = Field(min_length=1, max_length=255)
    student_domain: str | None = Field(default=None, max_length=255)


class DistrictUpdateRequest(BaseModel):
    district_name: str | None = Field(default=None, min_length=1, max_length=255)
    domain: str | None = Field(default=None, min_length=1, max_length=255)
    student_domain: str | None = Field(default=None, max_length=255)


class DistrictResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    district_id: str
    district_name: str
    domain: str
    student_domain: str | None = None


class DistrictDomainsResponse(BaseModel):
    district_id: str
    allowed_domains: list[str]


class SchoolCreateRequest(BaseModel):
    school_name: str = Field(min_length=1, max_length=255)
    district_id: str


class SchoolUpdateRequest(BaseModel):
    school_name: str | None = Field(default=None, min_length=1, max_length=255)
    district_id: str | None = None


class SchoolResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    school_id: str
    school_name: str
    district_id: str


class AcademicYearCreateRequest(BaseModel):
    year_range: str = Field(min_length=1, max_length=50, examples=["2025-2026"])
    expiry_date: date | None = None


class AcademicYearUpdateRequest(BaseModel):
    year_range: str | None = Field(default=None, min_length=1, max_length=50)
    expiry_date: date | None = None


class AcademicYearResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    academic_year_id: str
    year_range: str
    expiry_date: date | None = None
    is_current: bool = False
    is_expired: bool = False


class AcademicYearListResponse(BaseModel):
    items: list[AcademicYearResponse]
    total: int


class SiteSettingsResponse(BaseModel):
    academic_year_id: str | None = None
    academic_year: AcademicYearResponse | None = None


class SiteSettingsUpdateRequest(BaseModel):
    academic_year_id: str | None = None
