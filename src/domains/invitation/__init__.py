# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Invitation code domain package.

This package provides invitation code functionality including:
- Code CRUD, generation and status
- Code validation with usage-limit and expiry checks
- Invitation token issuance and verification
"""

from src.domains.invitation.codes import compute_status, generate_code
from src.domains.invitation.service import (
    InvitationCodeExistsError,
    InvitationCodeFormatError,
    InvitationCodeInUseError,
    InvitationCodeNotFoundError,
    InvitationService,
    InvitationServiceError,
)
from src.domains.invitation.tokens import InvitationTokenManager

__all__ = [
    "InvitationService",
    "InvitationServiceError",
    "InvitationCodeNotFoundError",
    "InvitationCodeExistsError",
    "InvitationCodeFormatError",
    "InvitationCodeInUseError",
    "InvitationTokenManager",
    "compute_status",
    "generate_code",
]
