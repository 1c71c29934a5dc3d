# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Email domain allow-list checks for district registration."""


def extract_email_domain(email: str) -> str:
    """Lower-cased part after the ``@``, or an empty string."""
    if not email or "@" not in email:
        return ""
    return email.split("@", 1)[1].strip().lower()


def is_domain_allowed(domain: str, allowed_domains: list[str]) -> bool:
    """Check a domain against an allow-list.

    An empty allow-list allows every domain. ``*.example.org`` matches
    ``example.org`` and any of its subdomains. Matching ignores case.

    Example:
        >>> is_domain_allowed("mail.example.org", ["*.example.org"])
        True
        >>> is_domain_allowed("example.com", ["example.org"])
        False
    """
    if not allowed_domains:
        return True
    domain = domain.lower()

    for allowed in allowed_domains:
        allowed = allowed.strip().lower()
        if allowed.startswith("*."):
            base = allowed[2:]
            if domain == base or domain.endswith("." + base):
                return True
        elif domain == allowed:
            return True
    return False
