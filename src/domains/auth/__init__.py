# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain services.

Exports:
    PasswordHasher: Secure password hashing using bcrypt.
    JWTManager: JWT token creation and validation.
    AuthService: Login, refresh and profile lookup.
"""

from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.domains.auth.service import (
    AuthenticationError,
    AuthService,
    InvalidCredentialsError,
    TokenRefreshError,
)

__all__ = [
    "PasswordHasher",
    "JWTManager",
    "AuthService",
    "AuthenticationError",
    "InvalidCredentialsError",
    "TokenRefreshError",
]
