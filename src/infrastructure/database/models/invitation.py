# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Invitation code models.

Usage of a code is never stored as a counter: it is the number of
invitation_code_uses rows pointing at the code.
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, TimestampMixin, uuid_pk

CODE_TYPES = ("admin", "teacher")


class InvitationCode(Base, TimestampMixin):
    __tablename__ = "invitation_codes"

    invitation_code_id: Mapped[str] = uuid_pk()
    invitation_code: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    subject_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("subjects.subject_id", ondelete="SET NULL"),
    )
    district_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("districts.district_id", ondelete="CASCADE"),
        index=True,
    )
    school_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("schools.school_id", ondelete="SET NULL"),
    )
    academic_year_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("academic_years.academic_year_id", ondelete="RESTRICT"),
        nullable=False,
    )
    number_of_uses: Mapped[int | None] = mapped_column(Integer)
    code_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="admin",
        server_default="admin",
    )
    created_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
    )


class InvitationCodeUse(Base, TimestampMixin):
    """One registration made with an invitation code."""

    __tablename__ = "invitation_code_uses"

    id: Mapped[str] = uuid_pk()
    invitation_code_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("invitation_codes.invitation_code_id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
