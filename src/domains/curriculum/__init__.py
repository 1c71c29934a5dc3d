# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curriculum domain services.

This package provides the subject -> unit -> chapter -> lesson hierarchy
and the URL slugs used to address subjects and lessons.
"""

from src.domains.curriculum.service import (
    CurriculumNotFoundError,
    CurriculumService,
    CurriculumServiceError,
)
from src.domains.curriculum.slugs import slugify

__all__ = [
    "CurriculumService",
    "CurriculumServiceError",
    "CurriculumNotFoundError",
    "slugify",
]
