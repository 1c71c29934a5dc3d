# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for Curriculum Studio.

This package contains domain services that encapsulate business logic.
Each domain module provides services that orchestrate operations
across repositories and external services.

Domains:
    activity: Lesson activity editor (load, validate, save).
    lesson_plan: Lesson plan sections and directions.
    invitation: Invitation codes, validation and signed invitation tokens.
    registration: Invitation-based sign-up and email domain checks.
    auth: Passwords, JWT tokens and login.
    curriculum: Subjects, units, chapters and lessons.
    school: Districts and schools.
    academic_year: Academic years and the site's current year.
    subscription: District seat subscriptions.
    graphic_organizer: Table organizer builder.
    user: Users admin (list and add users).
"""
