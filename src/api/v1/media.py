# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Media API endpoints.

This module provides endpoints for reading images and lesson plan slides:
- POST /upload - Upload an image into a folder
- GET /signed-url - Sign a stored path
- GET /files/{token} - Serve a file named by a signed token

File URLs are public but only reachable through a valid signed token.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.responses import FileResponse

from src.api.dependencies import get_media_storage, require_auth, require_staff
from src.api.middleware.auth import CurrentUser
from src.infrastructure.storage import InvalidUploadError, MediaNotFoundError, MediaStorage
from src.models.media import MediaFolder, MediaUploadResponse, SignedUrlResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/upload",
    response_model=MediaUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload image",
)
async def upload_media(
    folder: Annotated[MediaFolder, Query(description="Target folder")],
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(require_staff),
    storage: MediaStorage = Depends(get_media_storage),
) -> MediaUploadResponse:
    """Store an uploaded image.

    Raises:
        HTTPException: 400 if the file is not an accepted image or too large.
    """
    data = await file.read()

    try:
        stored = await storage.upload(
            f"{folder}/",
            file.filename or "",
            data,
            content_type=file.content_type,
        )
    except InvalidUploadError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("Uploaded %s by %s", stored.path, current_user.id)
    return MediaUploadResponse(path=stored.path, url=stored.url)


@router.get("/signed-url", response_model=SignedUrlResponse, summary="Sign stored path")
async def get_signed_url(
    path: Annotated[str, Query(min_length=1, description="Bucket-relative path")],
    current_user: CurrentUser = Depends(require_auth),
    storage: MediaStorage = Depends(get_media_storage),
) -> SignedUrlResponse:
    stored = storage.sign(path)
    return SignedUrlResponse(path=stored.path, url=stored.url)


@router.get("/files/{token}", summary="Serve file", response_class=FileResponse)
async def get_file(
    token: str,
    storage: MediaStorage = Depends(get_media_storage),
) -> FileResponse:
    try:
        target = storage.resolve(token)
    except MediaNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return FileResponse(target)
