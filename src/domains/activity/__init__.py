# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity domain package.

This package provides lesson activity functionality including:
- Loading a lesson's activities across the nine kind tables
- Transactional saving with dense order renumbering
- Per-kind persistence strategies and content validation
"""

from src.domains.activity.kinds import KIND_HANDLERS, KindHandler, get_handler
from src.domains.activity.ordering import renumber
from src.domains.activity.service import (
    ActivityLoadError,
    ActivityNotFoundError,
    ActivitySaveError,
    ActivityService,
    ActivityServiceError,
    ActivityValidationError,
)
from src.domains.activity.validation import validate_detail, validate_details

__all__ = [
    "ActivityService",
    "ActivityServiceError",
    "ActivityNotFoundError",
    "ActivityLoadError",
    "ActivitySaveError",
    "ActivityValidationError",
    "KIND_HANDLERS",
    "KindHandler",
    "get_handler",
    "renumber",
    "validate_detail",
    "validate_details",
]
