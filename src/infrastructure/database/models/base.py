# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Declarative base and shared column helpers for ORM models.

Primary keys are UUID strings generated client-side so that services can
reference a row before it is flushed. Yes/No flags are stored as short
strings, matching the existing data.
"""

from datetime import datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

PUBLISHED_YES = "Yes"
PUBLISHED_NO = "No"


def new_uuid() -> str:
    """Generate a new UUID4 string."""
    return str(uuid4())


class Base(DeclarativeBase):
    """Declarative base for all models."""

    type_annotation_map = {
        dict[str, Any]: JSONB,
        list[Any]: JSONB,
    }


class TimestampMixin:
    """Adds created_at and updated_at columns maintained by the database."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


def uuid_pk(name: str | None = None) -> Mapped[str]:
    """Build a UUID primary key column with a client-side default.

    Args:
        name: Database column name when it differs from the attribute.
    """
    args: tuple[Any, ...] = (name,) if name else ()
    return mapped_column(
        *args,
        UUID(as_uuid=False),
        primary_key=True,
        default=new_uuid,
    )


def published_column() -> Mapped[str]:
    """Build the Yes/No published flag column, defaulting to No."""
    return mapped_column(
        String(3),
        nullable=False,
        default=PUBLISHED_NO,
        server_default=PUBLISHED_NO,
    )
