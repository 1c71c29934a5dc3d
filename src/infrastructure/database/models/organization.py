# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Organization models: districts, schools, academic years, site settings
and subscriptions."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import (
    PUBLISHED_NO,
    Base,
    TimestampMixin,
    uuid_pk,
)


class District(Base, TimestampMixin):
    """A school district with the email domains its users register with."""

    __tablename__ = "districts"

    district_id: Mapped[str] = uuid_pk()
    district_name: Mapped[str] = mapped_column(String(255), nullable=False)
    domain: Mapped[str] = mapped_column(String(255), nullable=False)
    student_domain: Mapped[str | None] = mapped_column(String(255))

    @property
    def allowed_domains(self) -> list[str]:
        """Non-empty configured domains, staff domain first."""
        return [d for d in (self.domain, self.student_domain) if d]


class School(Base, TimestampMixin):
    __tablename__ = "schools"

    school_id: Mapped[str] = uuid_pk()
    school_name: Mapped[str] = mapped_column(String(255), nullable=False)
    district_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("districts.district_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class AcademicYear(Base, TimestampMixin):
    """An academic year. Invitation codes stop working after expiry_date."""

    __tablename__ = "academic_years"

    academic_year_id: Mapped[str] = uuid_pk()
    year_range: Mapped[str] = mapped_column(String(50), nullable=False)
    expiry_date: Mapped[date | None] = mapped_column(Date)


class SiteSetting(Base):
    """Single-row table holding site-wide defaults."""

    __tablename__ = "site_settings"

    id: Mapped[str] = uuid_pk()
    academic_year_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("academic_years.academic_year_id", ondelete="SET NULL"),
    )


class Subscription(Base, TimestampMixin):
    """Seats purchased by a district for an academic year."""

    __tablename__ = "subscriptions"

    id: Mapped[str] = uuid_pk()
    district_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("districts.district_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    academic_year_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("academic_years.academic_year_id", ondelete="SET NULL"),
    )
    district: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    school: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    teachers: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    students: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    paid: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        default=PUBLISHED_NO,
        server_default=PUBLISHED_NO,
    )
