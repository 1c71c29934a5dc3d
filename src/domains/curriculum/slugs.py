# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""URL slugs for subjects and lessons."""

import re

_WHITESPACE_RE = re.compile(r"\s+")


def slugify(name: str | None) -> str:
    """Lower-case the name and replace each run of whitespace with ``-``.

    Example:
        >>> slugify("  World  History ")
        'world-history'
    """
    if not name:
        return ""
    return _WHITESPACE_RE.sub("-", name.strip().lower())
