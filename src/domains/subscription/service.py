# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Subscription service for district seat purchases."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models import District, Subscription
from src.models.subscription import (
    SubscriptionCreateRequest,
    SubscriptionResponse,
    SubscriptionUpdateRequest,
)

logger = logging.getLogger(__name__)


class SubscriptionServiceError(Exception):
    """Base exception for subscription service errors."""

    pass


class SubscriptionNotFoundError(SubscriptionServiceError):
    """Raised when a subscription or its district is not found."""

    pass


class SubscriptionService:
    """Service for subscriptions.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_subscriptions(
        self,
        district_id: str | None = None,
        academic_year_id: str | None = None,
    ) -> list[SubscriptionResponse]:
        query = select(Subscription).order_by(Subscription.created_at.desc())
        if district_id:
            query = query.where(Subscription.district_id == district_id)
        if academic_year_id:
            query = query.where(Subscription.academic_year_id == academic_year_id)
        result = await self.db.execute(query)
        return [SubscriptionResponse.model_validate(s) for s in result.scalars().all()]

    async def get_subscription(self, subscription_id: str) -> SubscriptionResponse:
        return SubscriptionResponse.model_validate(await self._get(subscription_id))

    async def create_subscription(self, request: SubscriptionCreateRequest) -> SubscriptionResponse:
        """Create a subscription.

        Raises:
            SubscriptionNotFoundError: If the district does not exist.
        """
        if await self.db.get(District, request.district_id) is None:
            raise SubscriptionNotFoundError(f"District {request.district_id} not found")

        subscription = Subscription(**request.model_dump())
        self.db.add(subscription)
        await self.db.commit()
        await self.db.refresh(subscription)

        logger.info(
            "Created subscription %s for district %s", subscription.id, subscription.district_id
        )
        return SubscriptionResponse.model_validate(subscription)

    async def update_subscription(
        self,
        subscription_id: str,
        request: SubscriptionUpdateRequest,
    ) -> SubscriptionResponse:
        subscription = await self._get(subscription_id)
        for key, value in request.model_dump(exclude_none=True).items():
            setattr(subscription, key, value)

        await self.db.commit()
        await self.db.refresh(subscription)
        logger.info("Updated subscription %s", subscription_id)
        return SubscriptionResponse.model_validate(subscription)

    async def delete_subscription(self, subscription_id: str) -> None:
        subscription = await self._get(subscription_id)
        await self.db.delete(subscription)
        await self.db.commit()
        logger.info("Deleted subscription %s", subscription_id)

    async def _get(self, subscription_id: str) -> Subscription:
        subscription = await self.db.get(Subscription, subscription_id)
        if subscription is None:
            raise SubscriptionNotFoundError(f"Subscription {subscription_id} not found")
        return subscription
