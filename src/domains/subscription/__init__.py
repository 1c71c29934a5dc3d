# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subscription domain package."""

from src.domains.subscription.service import (
    SubscriptionNotFoundError,
    SubscriptionService,
    SubscriptionServiceError,
)

__all__ = [
    "SubscriptionService",
    "SubscriptionServiceError",
    "SubscriptionNotFoundError",
]
