# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""District and school domain package."""

from src.domains.school.service import (
    DistrictInUseError,
    DistrictNotFoundError,
    OrganizationService,
    OrganizationServiceError,
    SchoolNotFoundError,
)

__all__ = [
    "OrganizationService",
    "OrganizationServiceError",
    "DistrictNotFoundError",
    "DistrictInUseError",
    "SchoolNotFoundError",
]
