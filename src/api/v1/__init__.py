# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    auth: Login, token refresh and current user.
    activities: Lesson activity editor (load, save, delete).
    lesson_plans: Lesson plan sections and directions.
    invitation_codes: Invitation code management, validation and session.
    register: Invitation-based sign-up.
    curriculum: Subjects, units, chapters and lessons.
    districts: District management.
    schools: School management.
    academic_years: Academic year management.
    site_settings: Current academic year of the site.
    subscriptions: District seat subscriptions.
    graphic_organizers: Table organizer builder.
    media: Image uploads and signed file URLs.
    users: Users admin.
"""

from fastapi import APIRouter

from src.api.v1 import (
    academic_years,
    activities,
    auth,
    curriculum,
    districts,
    graphic_organizers,
    invitation_codes,
    lesson_plans,
    media,
    register,
    schools,
    site_settings,
    subscriptions,
    users,
)

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(activities.router, tags=["Activities"])
router.include_router(lesson_plans.router, prefix="/lesson-plans", tags=["Lesson Plans"])
router.include_router(
    invitation_codes.router, prefix="/invitation-codes", tags=["Invitation Codes"]
)
router.include_router(register.router, prefix="/register", tags=["Registration"])
router.include_router(curriculum.router, prefix="/curriculum", tags=["Curriculum"])
router.include_router(districts.router, prefix="/districts", tags=["Districts"])
router.include_router(schools.router, prefix="/schools", tags=["Schools"])
router.include_router(academic_years.router, prefix="/academic-years", tags=["Academic Years"])
router.include_router(site_settings.router, prefix="/site-settings", tags=["Site Settings"])
router.include_router(subscriptions.router, prefix="/subscriptions", tags=["Subscriptions"])
router.include_router(
    graphic_organizers.router, prefix="/graphic-organizers", tags=["Graphic Organizers"]
)
router.include_router(media.router, prefix="/media", tags=["Media"])
router.include_router(users.router, prefix="/users", tags=["Users"])

__all__ = ["router"]
