# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User administration domain package."""

from src.domains.user.service import (
    UserAlreadyExistsError,
    UserReferenceNotFoundError,
    UserService,
    UserServiceError,
)

__all__ = [
    "UserService",
    "UserServiceError",
    "UserAlreadyExistsError",
    "UserReferenceNotFoundError",
]
