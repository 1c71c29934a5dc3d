# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Table gateway used by the activity loader and saver.

The activity kinds share one access pattern: rows are fetched by parent
id, existence-checked by primary key, inserted or updated, and deleted
by id sets. This module implements that pattern once over any ORM model
and exchanges rows as plain dicts keyed by model attribute names, so
renamed database columns never leak past the model definitions.

Statements are executed on the caller's session; nothing is committed
until ``commit()`` is called.
"""

from __future__ import annotations

import logging
from typing import Any, Collection

from sqlalchemy import delete, insert, inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models import Activity, Base

logger = logging.getLogger(__name__)

Row = dict[str, Any]


def row_to_dict(obj: Base) -> Row:
    """Convert an ORM instance to a dict keyed by attribute name."""
    mapper = inspect(type(obj))
    return {attr.key: getattr(obj, attr.key) for attr in mapper.column_attrs}


def _bind(model: type[Base], values: Row) -> dict[Any, Any]:
    return {getattr(model, key): value for key, value in values.items()}


class ActivityRepository:
    """Generic row operations over the activity tables.

    Attributes:
        db: Async database session owning the transaction.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_activities(self, lesson_id: str) -> list[Row]:
        """Activities of a lesson, ordered by ``order`` ascending."""
        result = await self.db.execute(
            select(Activity)
            .where(Activity.lesson_id == lesson_id)
            .order_by(Activity.order.asc().nulls_last())
        )
        return [row_to_dict(obj) for obj in result.scalars().all()]

    async def fetch_rows(
        self,
        model: type[Base],
        column: str,
        values: Collection[str],
    ) -> list[Row]:
        """Rows whose ``column`` is one of ``values``."""
        if not values:
            return []
        result = await self.db.execute(
            select(model).where(getattr(model, column).in_(list(values)))
        )
        return [row_to_dict(obj) for obj in result.scalars().all()]

    async def list_ids(
        self,
        model: type[Base],
        pk: str,
        column: str,
        value: str,
    ) -> list[str]:
        """Primary keys of rows whose ``column`` equals ``value``."""
        result = await self.db.execute(
            select(getattr(model, pk)).where(getattr(model, column) == value)
        )
        return [str(row_id) for row_id in result.scalars().all()]

    async def exists(self, model: type[Base], pk: str, value: str) -> bool:
        result = await self.db.execute(
            select(getattr(model, pk)).where(getattr(model, pk) == value).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def insert(self, model: type[Base], values: Row) -> None:
        await self.db.execute(insert(model).values(_bind(model, values)))

    async def update(self, model: type[Base], pk: str, value: str, values: Row) -> None:
        changes = {key: val for key, val in values.items() if key != pk}
        if not changes:
            return
        await self.db.execute(
            update(model)
            .where(getattr(model, pk) == value)
            .values(_bind(model, changes))
        )

    async def upsert(self, model: type[Base], pk: str, values: Row) -> bool:
        """Insert the row, or update it when its primary key exists.

        Returns:
            True if a new row was inserted.
        """
        if await self.exists(model, pk, values[pk]):
            await self.update(model, pk, values[pk], values)
            return False
        await self.insert(model, values)
        return True

    async def delete_in(self, model: type[Base], column: str, values: Collection[str]) -> None:
        if not values:
            return
        await self.db.execute(
            delete(model).where(getattr(model, column).in_(list(values)))
        )

    async def delete_where(self, model: type[Base], column: str, value: str) -> None:
        await self.db.execute(delete(model).where(getattr(model, column) == value))

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()
