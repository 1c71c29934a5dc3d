# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subscription API endpoints.

- GET / - List subscriptions, optionally of one district or year
- POST / - Create a subscription
- GET /{subscription_id} - Get a subscription
- PUT /{subscription_id} - Update a subscription
- DELETE /{subscription_id} - Delete a subscription

All endpoints require admin access.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, require_admin
from src.api.middleware.auth import CurrentUser
from src.domains.subscription import SubscriptionNotFoundError, SubscriptionService
from src.models.subscription import (
    SubscriptionCreateRequest,
    SubscriptionResponse,
    SubscriptionUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_service(db: AsyncSession) -> SubscriptionService:
    return SubscriptionService(db=db)


@router.get("", response_model=list[SubscriptionResponse], summary="List subscriptions")
async def list_subscriptions(
    district_id: Annotated[str | None, Query(description="Filter by district")] = None,
    academic_year_id: Annotated[str | None, Query(description="Filter by year")] = None,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> list[SubscriptionResponse]:
    return await _get_service(db).list_subscriptions(
        district_id=district_id,
        academic_year_id=academic_year_id,
    )


@router.post(
    "",
    response_model=SubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create subscription",
)
async def create_subscription(
    data: SubscriptionCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> SubscriptionResponse:
    try:
        return await _get_service(db).create_subscription(data)
    except SubscriptionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "/{subscription_id}",
    response_model=SubscriptionResponse,
    summary="Get subscription",
)
async def get_subscription(
    subscription_id: str,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> SubscriptionResponse:
    try:
        return await _get_service(db).get_subscription(subscription_id)
    except SubscriptionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put(
    "/{subscription_id}",
    response_model=SubscriptionResponse,
    summary="Update subscription",
)
async def update_subscription(
    subscription_id: str,
    data: SubscriptionUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> SubscriptionResponse:
    try:
        return await _get_service(db).update_subscription(subscription_id, data)
    except SubscriptionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete(
    "/{subscription_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete subscription",
)
async def delete_subscription(
    subscription_id: str,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await _get_service(db).delete_subscription(subscription_id)
    except SubscriptionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
