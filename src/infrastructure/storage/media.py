# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Media bucket for uploaded reading images and lesson plan slides.

Objects are stored on the local filesystem under ``{root}/{bucket}`` and
addressed by bucket-relative paths such as
``reading_images/1718000000000-1a2b3c4d.png``. Clients never see raw
paths: they receive signed URLs whose token names the object and expires
after ``signed_url_expire_seconds``.

Example:
    >>> storage = MediaStorage(get_settings().media, get_settings().jwt)
    >>> stored = await storage.upload(READING_IMAGES, "map.png", data, "image/png")
    >>> storage.resolve(stored.token)
    PosixPath('var/storage/media/reading_images/...png')
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path, PurePosixPath
from uuid import uuid4

from jose import ExpiredSignatureError, JWTError as JoseJWTError, jwt

from src.core.config.settings import JWTSettings, MediaSettings
from src.utils.datetime import timestamp_ms, utc_now

logger = logging.getLogger(__name__)

READING_IMAGES = "reading_images/"
SLIDES = "slides/"
PREFIXES = (READING_IMAGES, SLIDES)

TOKEN_TYPE = "media"


class MediaStorageError(Exception):
    """Base exception for media storage errors."""

    pass


class InvalidUploadError(MediaStorageError):
    """Raised when an upload has the wrong type or size."""

    pass


class MediaNotFoundError(MediaStorageError):
    """Raised when a signed URL is invalid, expired or names a missing file."""

    pass


@dataclass
class StoredMedia:
    """A stored object.

    Attributes:
        path: Bucket-relative object path.
        token: Signed token naming the object.
        url: Signed URL served by the media endpoint.
    """

    path: str
    token: str
    url: str


class MediaStorage:
    """Local filesystem media bucket with signed URLs.

    Attributes:
        _settings: Media configuration.
        _jwt: Signing key and algorithm for URL tokens.
    """

    def __init__(self, settings: MediaSettings, jwt_settings: JWTSettings) -> None:
        self._settings = settings
        self._jwt = jwt_settings

    @property
    def bucket_root(self) -> Path:
        return self._settings.root / self._settings.bucket

    def validate_upload(self, filename: str, size: int) -> str:
        """Check an upload and return its lower-case extension.

        Raises:
            InvalidUploadError: If the extension or size is not accepted.
        """
        extension = PurePosixPath(filename or "").suffix.lstrip(".").lower()
        if extension not in self._settings.allowed_extensions:
            raise InvalidUploadError("Please upload an image file (JPG, PNG, GIF, or WEBP)")
        if size > self._settings.max_upload_bytes:
            limit_mb = self._settings.max_upload_bytes // (1024 * 1024)
            raise InvalidUploadError(f"Image must be smaller than {limit_mb}MB")
        return extension

    async def upload(
        self,
        prefix: str,
        filename: str,
        data: bytes,
        content_type: str | None = None,
    ) -> StoredMedia:
        """Store an image under a prefix.

        Args:
            prefix: ``reading_images/`` or ``slides/``.
            filename: Original file name, used for its extension only.
            data: File content.
            content_type: Declared MIME type; must be an image when given.

        Returns:
            The stored object with its signed URL.

        Raises:
            InvalidUploadError: If the prefix, type or size is not accepted.
        """
        if prefix not in PREFIXES:
            raise InvalidUploadError(f"Unknown media folder: {prefix}")
        if content_type and not content_type.startswith("image/"):
            raise InvalidUploadError("Please upload an image file (JPG, PNG, GIF, or WEBP)")
        extension = self.validate_upload(filename, len(data))

        path = f"{prefix}{timestamp_ms()}-{uuid4().hex[:8]}.{extension}"
        target = self.bucket_root / path
        await asyncio.to_thread(self._write, target, data)

        logger.info("Stored %s (%d bytes)", path, len(data))
        return self.sign(path)

    def sign(self, path: str) -> StoredMedia:
        """Create a signed URL for an object path."""
        now = utc_now()
        expires = now + timedelta(seconds=self._settings.signed_url_expire_seconds)
        token = jwt.encode(
            {
                "type": TOKEN_TYPE,
                "path": path,
                "iat": int(now.timestamp()),
                "exp": int(expires.timestamp()),
            },
            self._jwt.secret_key.get_secret_value(),
            algorithm=self._jwt.algorithm,
        )
        url = f"{self._settings.public_base_url.rstrip('/')}/{token}"
        return StoredMedia(path=path, token=token, url=url)

    def resolve(self, token: str) -> Path:
        """Verify a signed token and return the file it names.

        Raises:
            MediaNotFoundError: If the token is invalid or expired, or the
                file does not exist inside the bucket.
        """
        try:
            payload = jwt.decode(
                token,
                self._jwt.secret_key.get_secret_value(),
                algorithms=[self._jwt.algorithm],
            )
        except ExpiredSignatureError:
            raise MediaNotFoundError("Media link has expired")
        except JoseJWTError as e:
            logger.warning("Media token decode failed: %s", str(e))
            raise MediaNotFoundError("Invalid media link")

        path = payload.get("path")
        if payload.get("type") != TOKEN_TYPE or not isinstance(path, str):
            raise MediaNotFoundError("Invalid media link")

        root = self.bucket_root.resolve()
        target = (root / path).resolve()
        if not target.is_relative_to(root) or not target.is_file():
            raise MediaNotFoundError(f"Media {path} not found")
        return target

    async def delete(self, path: str) -> None:
        root = self.bucket_root.resolve()
        target = (root / path).resolve()
        if not target.is_relative_to(root):
            raise MediaNotFoundError(f"Media {path} not found")
        await asyncio.to_thread(target.unlink, True)
        logger.info("Deleted %s", path)

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
