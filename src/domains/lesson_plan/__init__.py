# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lesson plan domain package."""

from src.domains.lesson_plan.service import (
    LessonPlanExistsError,
    LessonPlanNotFoundError,
    LessonPlanSaveError,
    LessonPlanService,
    LessonPlanServiceError,
)

__all__ = [
    "LessonPlanService",
    "LessonPlanServiceError",
    "LessonPlanNotFoundError",
    "LessonPlanExistsError",
    "LessonPlanSaveError",
]
