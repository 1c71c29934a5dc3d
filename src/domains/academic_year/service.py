# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic year service for managing academic year operations.

This module provides the AcademicYearService class for:
- Academic year CRUD operations
- Reading and setting the site's current academic year

The current year lives in the single-row ``site_settings`` table and is
the default academic year of new invitation codes.
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models import AcademicYear, InvitationCode, SiteSetting
from src.models.organization import (
    AcademicYearCreateRequest,
    AcademicYearResponse,
    AcademicYearUpdateRequest,
    SiteSettingsResponse,
)
from src.utils.datetime import is_date_passed

logger = logging.getLogger(__name__)


class AcademicYearServiceError(Exception):
    """Base exception for academic year service errors."""

    pass


class AcademicYearNotFoundError(AcademicYearServiceError):
    """Raised when academic year is not found."""

    pass


class AcademicYearInUseError(AcademicYearServiceError):
    """Raised when deleting a year that invitation codes refer to."""

    pass


class AcademicYearService:
    """Service for managing academic years.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize academic year service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def create_academic_year(
        self,
        request: AcademicYearCreateRequest,
    ) -> AcademicYearResponse:
        """Create a new academic year.

        Args:
            request: Academic year creation data.

        Returns:
            Created academic year response.
        """
        academic_year = AcademicYear(
            year_range=request.year_range,
            expiry_date=request.expiry_date,
        )

        self.db.add(academic_year)
        await self.db.commit()
        await self.db.refresh(academic_year)

        logger.info(
            "Created academic year: %s (%s)",
            academic_year.year_range,
            academic_year.academic_year_id,
        )

        return await self._to_response(academic_year)

    async def list_academic_years(self) -> tuple[list[AcademicYearResponse], int]:
        """List all academic years, latest expiry first.

        Returns:
            Tuple of (list of academic years, total count).
        """
        query = select(AcademicYear).order_by(
            AcademicYear.expiry_date.desc().nulls_last(),
            AcademicYear.year_range.desc(),
        )
        result = await self.db.execute(query)
        years = result.scalars().all()

        current_id = await self._current_year_id()
        items = [self._build_response(year, current_id) for year in years]

        return items, len(items)

    async def get_academic_year(self, year_id: str) -> AcademicYearResponse:
        """Get academic year by ID.

        Raises:
            AcademicYearNotFoundError: If year not found.
        """
        academic_year = await self._get_by_id(year_id)
        return await self._to_response(academic_year)

    async def update_academic_year(
        self,
        year_id: str,
        request: AcademicYearUpdateRequest,
    ) -> AcademicYearResponse:
        """Update an academic year.

        Raises:
            AcademicYearNotFoundError: If year not found.
        """
        academic_year = await self._get_by_id(year_id)

        changes = request.model_dump(exclude_unset=True)
        if changes.get("year_range") is not None:
            academic_year.year_range = changes["year_range"]
        if "expiry_date" in changes:
            academic_year.expiry_date = changes["expiry_date"]

        await self.db.commit()
        await self.db.refresh(academic_year)

        logger.info("Updated academic year: %s", year_id)

        return await self._to_response(academic_year)

    async def delete_academic_year(self, year_id: str) -> None:
        """Delete an academic year.

        Raises:
            AcademicYearNotFoundError: If year not found.
            AcademicYearInUseError: If invitation codes refer to the year.
        """
        academic_year = await self._get_by_id(year_id)

        code_count = await self._get_code_count(year_id)
        if code_count > 0:
            raise AcademicYearInUseError(
                f"Cannot delete academic year with {code_count} invitation codes"
            )

        await self.db.delete(academic_year)
        await self.db.commit()

        logger.info("Deleted academic year: %s", year_id)

    async def get_site_settings(self) -> SiteSettingsResponse:
        """Current academic year of the site, if one is set."""
        current_id = await self._current_year_id()
        if current_id is None:
            return SiteSettingsResponse()

        academic_year = await self.db.get(AcademicYear, current_id)
        return SiteSettingsResponse(
            academic_year_id=current_id,
            academic_year=self._build_response(academic_year, current_id) if academic_year else None,
        )

    async def set_current_year(self, year_id: str | None) -> SiteSettingsResponse:
        """Set or clear the site's current academic year.

        Raises:
            AcademicYearNotFoundError: If the year does not exist.
        """
        if year_id is not None:
            await self._get_by_id(year_id)

        result = await self.db.execute(select(SiteSetting).limit(1))
        settings = result.scalar_one_or_none()
        if settings is None:
            settings = SiteSetting()
            self.db.add(settings)
        settings.academic_year_id = year_id

        await self.db.commit()
        logger.info("Set current academic year: %s", year_id)

        return await self.get_site_settings()

    async def _get_by_id(self, year_id: str) -> AcademicYear:
        academic_year = await self.db.get(AcademicYear, year_id)
        if academic_year is None:
            raise AcademicYearNotFoundError(f"Academic year {year_id} not found")
        return academic_year

    async def _current_year_id(self) -> str | None:
        result = await self.db.execute(select(SiteSetting.academic_year_id).limit(1))
        return result.scalar_one_or_none()

    async def _get_code_count(self, year_id: str) -> int:
        result = await self.db.execute(
            select(func.count(InvitationCode.invitation_code_id)).where(
                InvitationCode.academic_year_id == year_id
            )
        )
        return result.scalar() or 0

    async def _to_response(self, academic_year: AcademicYear) -> AcademicYearResponse:
        return self._build_response(academic_year, await self._current_year_id())

    @staticmethod
    def _build_response(academic_year: AcademicYear, current_id: str | None) -> AcademicYearResponse:
        return AcademicYearResponse(
            academic_year_id=academic_year.academic_year_id,
            year_range=academic_year.year_range,
            expiry_date=academic_year.expiry_date,
            is_current=academic_year.academic_year_id == current_id,
            is_expired=is_date_passed(academic_year.expiry_date),
        )
