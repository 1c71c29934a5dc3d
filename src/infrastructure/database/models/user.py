# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User, profile and registration models.

``users`` holds credentials. ``user_information`` holds the profile and
role; its name columns are camelCase in the database (``firstName``,
``lastName``) and snake_case here.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, TimestampMixin, uuid_pk

ROLES = ("admin", "district", "school", "teacher", "student")


class User(Base, TimestampMixin):
    """Login identity."""

    __tablename__ = "users"

    id: Mapped[str] = uuid_pk()
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class UserInformation(Base, TimestampMixin):
    __tablename__ = "user_information"

    id: Mapped[str] = uuid_pk()
    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    first_name: Mapped[str | None] = mapped_column("firstName", String(255))
    last_name: Mapped[str | None] = mapped_column("lastName", String(255))
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="student")


class SchoolRegistration(Base, TimestampMixin):
    __tablename__ = "school_registration"
    __table_args__ = (UniqueConstraint("user_id", "school_id"),)

    id: Mapped[str] = uuid_pk()
    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    school_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("schools.school_id", ondelete="CASCADE"),
        nullable=False,
    )


class DistrictRegistration(Base, TimestampMixin):
    __tablename__ = "district_registration"
    __table_args__ = (UniqueConstraint("user_id", "district_id"),)

    id: Mapped[str] = uuid_pk()
    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    district_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("districts.district_id", ondelete="CASCADE"),
        nullable=False,
    )
