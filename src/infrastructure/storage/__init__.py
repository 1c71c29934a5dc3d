# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Media storage."""

from src.infrastructure.storage.media import (
    PREFIXES,
    READING_IMAGES,
    SLIDES,
    InvalidUploadError,
    MediaNotFoundError,
    MediaStorage,
    MediaStorageError,
    StoredMedia,
)

__all__ = [
    "MediaStorage",
    "MediaStorageError",
    "InvalidUploadError",
    "MediaNotFoundError",
    "StoredMedia",
    "PREFIXES",
    "READING_IMAGES",
    "SLIDES",
]
