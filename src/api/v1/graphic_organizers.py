# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Graphic organizer API endpoints.

- POST /table - Build table organizer content from a grid
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import require_staff
from src.api.middleware.auth import CurrentUser
from src.domains.graphic_organizer import TableBuilderError, build_table
from src.models.graphic_organizer import TableBuildRequest, TableBuildResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/table", response_model=TableBuildResponse, summary="Build table organizer")
async def build_table_content(
    data: TableBuildRequest,
    current_user: CurrentUser = Depends(require_staff),
) -> TableBuildResponse:
    """Run the table builder over a grid.

    Raises:
        HTTPException: 422 if dimensions or cell positions are invalid.
    """
    try:
        return build_table(data)
    except TableBuilderError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
