# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Display-order helpers.

Every persisted ``order`` in the system is a dense rank derived from list
position at save time. Activities and lesson plan sections/directions
count from 1; activity children, answer choices and vocabulary words
count from 0.
"""

from typing import Sequence, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


def renumber(items: Sequence[ModelT], start: int = 0, field: str = "order") -> list[ModelT]:
    """Return copies of ``items`` with contiguous ranks in list order.

    Args:
        items: Models in display order.
        start: Rank of the first item.
        field: Name of the order field to set.

    Returns:
        New list of copied models; the inputs are left untouched.

    Example:
        >>> [a.order for a in renumber(activities, start=1)]
        [1, 2, 3]
    """
    return [
        item.model_copy(update={field: start + index})
        for index, item in enumerate(items)
    ]


def order_or_position(order: int | None, position: int) -> int:
    """Stored order, falling back to the row's position when unset."""
    return order if order is not None else position


def sort_key(order: int | None) -> tuple[int, int]:
    """Sort key that places rows without an order last."""
    return (1, 0) if order is None else (0, order)
