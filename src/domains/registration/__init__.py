# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registration domain package.

This package provides invitation-based sign-up including:
- Email domain allow-lists per district
- Account creation through a pluggable auth provider
- Registration rows written in one transaction with compensation
"""

from src.domains.registration.auth_provider import (
    AuthProvider,
    AuthProviderError,
    EmailAlreadyRegisteredError,
    LocalAuthProvider,
)
from src.domains.registration.email_domains import extract_email_domain, is_domain_allowed
from src.domains.registration.service import RegistrationService

__all__ = [
    "RegistrationService",
    "AuthProvider",
    "AuthProviderError",
    "EmailAlreadyRegisteredError",
    "LocalAuthProvider",
    "extract_email_domain",
    "is_domain_allowed",
]
