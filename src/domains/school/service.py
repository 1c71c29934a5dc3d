# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""District and school service.

This module provides the OrganizationService that handles:
- District CRUD operations and allowed email domains
- School CRUD operations within districts

Example:
    >>> service = OrganizationService(db_session)
    >>> schools = await service.list_schools(district_id="...")
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models import District, School
from src.models.organization import (
    DistrictCreateRequest,
    DistrictDomainsResponse,
    DistrictResponse,
    DistrictUpdateRequest,
    SchoolCreateRequest,
    SchoolResponse,
    SchoolUpdateRequest,
)

logger = logging.getLogger(__name__)


class OrganizationServiceError(Exception):
    """Base exception for district and school service errors."""

    pass


class DistrictNotFoundError(OrganizationServiceError):
    """Raised when a district is not found."""

    pass


class SchoolNotFoundError(OrganizationServiceError):
    """Raised when a school is not found."""

    pass


class DistrictInUseError(OrganizationServiceError):
    """Raised when deleting a district that still has schools."""

    pass


def _clean_domain(domain: str | None) -> str | None:
    if domain is None:
        return None
    domain = domain.strip().lower().lstrip("@")
    return domain or None


class OrganizationService:
    """Service for districts and schools.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_districts(self) -> list[DistrictResponse]:
        result = await self.db.execute(select(District).order_by(District.district_name))
        return [DistrictResponse.model_validate(d) for d in result.scalars().all()]

    async def get_district(self, district_id: str) -> DistrictResponse:
        return DistrictResponse.model_validate(await self._get_district(district_id))

    async def get_district_domains(self, district_id: str) -> DistrictDomainsResponse:
        district = await self._get_district(district_id)
        return DistrictDomainsResponse(
            district_id=district.district_id,
            allowed_domains=district.allowed_domains,
        )

    async def create_district(self, request: DistrictCreateRequest) -> DistrictResponse:
        """Create a district; domains are stored lower-case without ``@``."""
        district = District(
            district_name=request.district_name.strip(),
            domain=_clean_domain(request.domain),
            student_domain=_clean_domain(request.student_domain),
        )
        self.db.add(district)
        await self.db.commit()
        await self.db.refresh(district)

        logger.info("Created district %s (%s)", district.district_name, district.district_id)
        return DistrictResponse.model_validate(district)

    async def update_district(
        self,
        district_id: str,
        request: DistrictUpdateRequest,
    ) -> DistrictResponse:
        district = await self._get_district(district_id)
        changes = request.model_dump(exclude_unset=True)

        if changes.get("district_name"):
            district.district_name = changes["district_name"].strip()
        if changes.get("domain"):
            district.domain = _clean_domain(changes["domain"])
        if "student_domain" in changes:
            district.student_domain = _clean_domain(changes["student_domain"])

        await self.db.commit()
        await self.db.refresh(district)
        logger.info("Updated district %s", district_id)
        return DistrictResponse.model_validate(district)

    async def delete_district(self, district_id: str) -> None:
        """Delete a district without schools.

        Raises:
            DistrictNotFoundError: If the district does not exist.
            DistrictInUseError: If the district still has schools.
        """
        district = await self._get_district(district_id)

        result = await self.db.execute(
            select(func.count(School.school_id)).where(School.district_id == district_id)
        )
        school_count = result.scalar() or 0
        if school_count > 0:
            raise DistrictInUseError(f"Cannot delete district with {school_count} schools")

        await self.db.delete(district)
        await self.db.commit()
        logger.info("Deleted district %s", district_id)

    async def list_schools(self, district_id: str | None = None) -> list[SchoolResponse]:
        query = select(School).order_by(School.school_name)
        if district_id:
            query = query.where(School.district_id == district_id)
        result = await self.db.execute(query)
        return [SchoolResponse.model_validate(s) for s in result.scalars().all()]

    async def get_school(self, school_id: str) -> SchoolResponse:
        return SchoolResponse.model_validate(await self._get_school(school_id))

    async def create_school(self, request: SchoolCreateRequest) -> SchoolResponse:
        await self._get_district(request.district_id)
        school = School(school_name=request.school_name.strip(), district_id=request.district_id)
        self.db.add(school)
        await self.db.commit()
        await self.db.refresh(school)

        logger.info("Created school %s in district %s", school.school_id, school.district_id)
        return SchoolResponse.model_validate(school)

    async def update_school(self, school_id: str, request: SchoolUpdateRequest) -> SchoolResponse:
        school = await self._get_school(school_id)
        if request.district_id is not None:
            await self._get_district(request.district_id)
            school.district_id = request.district_id
        if request.school_name is not None:
            school.school_name = request.school_name.strip()

        await self.db.commit()
        await self.db.refresh(school)
        logger.info("Updated school %s", school_id)
        return SchoolResponse.model_validate(school)

    async def delete_school(self, school_id: str) -> None:
        school = await self._get_school(school_id)
        await self.db.delete(school)
        await self.db.commit()
        logger.info("Deleted school %s", school_id)

    async def _get_district(self, district_id: str) -> District:
        district = await self.db.get(District, district_id)
        if district is None:
            raise DistrictNotFoundError(f"District {district_id} not found")
        return district

    async def _get_school(self, school_id: str) -> School:
        school = await self.db.get(School, school_id)
        if school is None:
            raise SchoolNotFoundError(f"School {school_id} not found")
        return school
