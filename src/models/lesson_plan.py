# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lesson plan models.

Sections and directions are sent in display order; ``order`` values in
requests are ignored and recomputed from list position (1-based).
"""

from pydantic import BaseModel, Field

from src.models.activity import PublishedFlag


class DirectionPayload(BaseModel):
    """A timed instructional step within a section.

    Attributes:
        time: Duration in minutes.
        slide_image: Path of the slide in the media bucket.
    """

    lp_directions_id: str | None = None
    lp_focus_id: str | None = None
    activity_id: str | None = None
    time: int | None = Field(default=None, ge=0)
    directions: str | None = None
    slide_image: str | None = None
    alt: str | None = None
    support: str | None = None
    answers: str | None = None
    order: int | None = None
    published: PublishedFlag = "No"


class SectionPayload(BaseModel):
    lp_sections_id: str | None = None
    lp_section_names_id: str | None = None
    section_name: str | None = None
    order: int | None = None
    published: PublishedFlag = "No"
    directions: list[DirectionPayload] = Field(default_factory=list)


class LessonPlanContent(BaseModel):
    lesson_plan_id: str
    sections: list[SectionPayload] = Field(default_factory=list)


class SaveLessonPlanRequest(BaseModel):
    sections: list[SectionPayload] = Field(default_factory=list)


class LessonPlanCreateRequest(BaseModel):
    lesson_id: str
    subject_id: str | None = None


class LessonPlanResponse(BaseModel):
    lesson_plan_id: str
    lesson_id: str
    subject_id: str | None = None


class SectionNameResponse(BaseModel):
    lp_section_name_id: str
    section_name: str


class FocusResponse(BaseModel):
    lp_focus_id: str
    lp_focus: str
