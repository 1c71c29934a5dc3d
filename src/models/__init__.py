# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic request, response and domain schemas.

Modules:
    activity: Lesson activities, their kind-tagged children and details.
    lesson_plan: Lesson plan sections and directions.
    invitation: Invitation codes, validation results and token claims.
    registration: Sign-up requests and results.
    auth: Login and token responses.
    curriculum: Subjects, units, chapters and lessons.
    organization: Districts, schools, academic years and site settings.
    subscription: District seat subscriptions.
    graphic_organizer: Table organizer build requests.
    media: Uploads and signed URLs.
"""
