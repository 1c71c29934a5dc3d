# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curriculum hierarchy models: subjects, units, chapters and lessons."""

from pydantic import BaseModel, ConfigDict, Field


class SubjectCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    curriculum_title: str | None = None
    curriculum_description: str | None = None


class SubjectUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    curriculum_title: str | None = None
    curriculum_description: str | None = None


class SubjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    subject_id: str
    name: str
    curriculum_title: str | None = None
    curriculum_description: str | None = None
    slug: str = ""


class UnitCreateRequest(BaseModel):
    subject_id: str
    name: str = Field(min_length=1, max_length=255)
    unit_title: str | None = None


class UnitUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    unit_title: str | None = None


class UnitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    unit_id: str
    subject_id: str
    name: str
    unit_title: str | None = None


class ChapterCreateRequest(BaseModel):
    unit_id: str
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class ChapterUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None


class ChapterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    chapter_id: str
    unit_id: str
    name: str
    description: str | None = None


class LessonCreateRequest(BaseModel):
    chapter_id: str
    subject_id: str | None = None
    lesson_name: str = Field(min_length=1, max_length=255)


class LessonUpdateRequest(BaseModel):
    lesson_name: str | None = Field(default=None, min_length=1, max_length=255)


class LessonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lesson_id: str
    chapter_id: str
    subject_id: str | None = None
    lesson_name: str | None = None
    slug: str = ""
