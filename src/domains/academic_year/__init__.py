# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic year domain package.

This package provides academic year management functionality including:
- Academic year CRUD operations
- The site's current academic year
"""

from src.domains.academic_year.service import (
    AcademicYearInUseError,
    AcademicYearNotFoundError,
    AcademicYearService,
    AcademicYearServiceError,
)

__all__ = [
    "AcademicYearService",
    "AcademicYearServiceError",
    "AcademicYearNotFoundError",
    "AcademicYearInUseError",
]
