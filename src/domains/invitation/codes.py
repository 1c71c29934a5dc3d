# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Invitation code generation and status rules."""

import re
import secrets
import string
from datetime import date

from src.models.invitation import CODE_PATTERN, InvitationStatus
from src.utils.datetime import is_date_passed

CODE_ALPHABET = string.ascii_uppercase + string.digits

_CODE_RE = re.compile(CODE_PATTERN)


def generate_code(length: int = 6) -> str:
    """Random code of upper-case letters and digits."""
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def is_valid_code_format(code: str) -> bool:
    return bool(_CODE_RE.match(code))


def is_limit_reached(number_of_uses: int | None, usage_count: int) -> bool:
    """A code without a limit never runs out."""
    return number_of_uses is not None and usage_count >= number_of_uses


def compute_status(
    number_of_uses: int | None,
    usage_count: int,
    expiry_date: date | None,
    today: date | None = None,
) -> InvitationStatus:
    """Status of a code.

    Expiry of the academic year wins over the usage limit, so an exhausted
    code whose year has ended reports Expired.

    Args:
        number_of_uses: Usage limit, None for unlimited.
        usage_count: Registrations made with the code.
        expiry_date: Expiry date of the code's academic year.
        today: Reference date. Defaults to today in UTC.
    """
    if is_date_passed(expiry_date, today):
        return InvitationStatus.EXPIRED
    if is_limit_reached(number_of_uses, usage_count):
        return InvitationStatus.UNAVAILABLE
    return InvitationStatus.AVAILABLE
