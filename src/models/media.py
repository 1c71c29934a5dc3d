# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Media upload models."""

from typing import Literal

from pydantic import BaseModel

MediaFolder = Literal["reading_images", "slides"]


class MediaUploadResponse(BaseModel):
    """A stored upload.

    Attributes:
        path: Bucket-relative path, stored in image and slide columns.
        url: Signed URL for displaying the file.
    """

    path: str
    url: str


class SignedUrlResponse(BaseModel):
    path: str
    url: str
