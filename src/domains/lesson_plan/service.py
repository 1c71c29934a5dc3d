# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lesson plan service.

This module provides the LessonPlanService class for:
- Creating and listing lesson plans
- Loading a plan's ordered sections with their ordered directions
- Saving the section editor state in one transaction
- Listing section name and focus lookups
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.activity.ordering import renumber
from src.infrastructure.database.models import (
    Direction,
    Focus,
    Lesson,
    LessonPlan,
    Section,
    SectionName,
    new_uuid,
)
from src.models.lesson_plan import (
    DirectionPayload,
    FocusResponse,
    LessonPlanContent,
    LessonPlanCreateRequest,
    LessonPlanResponse,
    SectionNameResponse,
    SectionPayload,
)

logger = logging.getLogger(__name__)

PlanRowT = TypeVar("PlanRowT", Section, Direction)

DIRECTION_FIELDS = (
    "lp_focus_id",
    "activity_id",
    "time",
    "directions",
    "slide_image",
    "alt",
    "support",
    "answers",
    "published",
)


class LessonPlanServiceError(Exception):
    """Base exception for lesson plan service errors."""

    pass


class LessonPlanNotFoundError(LessonPlanServiceError):
    """Raised when a lesson plan or its lesson does not exist."""

    pass


class LessonPlanExistsError(LessonPlanServiceError):
    """Raised when a lesson already has a plan."""

    pass


class LessonPlanSaveError(LessonPlanServiceError):
    """Raised when saving sections failed and was rolled back."""

    pass


class LessonPlanService:
    """Service for lesson plans.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_plan(self, request: LessonPlanCreateRequest) -> LessonPlanResponse:
        """Create the plan of a lesson.

        Raises:
            LessonPlanNotFoundError: If the lesson does not exist.
            LessonPlanExistsError: If the lesson already has a plan.
        """
        lesson = await self.db.get(Lesson, request.lesson_id)
        if lesson is None:
            raise LessonPlanNotFoundError(f"Lesson {request.lesson_id} not found")
        if await self.get_plan_for_lesson(request.lesson_id) is not None:
            raise LessonPlanExistsError("This lesson already has a lesson plan")

        plan = LessonPlan(
            lesson_id=request.lesson_id,
            subject_id=request.subject_id or lesson.subject_id,
        )
        self.db.add(plan)
        await self.db.commit()
        await self.db.refresh(plan)

        logger.info("Created lesson plan %s for lesson %s", plan.lesson_plan_id, plan.lesson_id)
        return self._to_response(plan)

    async def list_plans(self, subject_id: str | None = None) -> list[LessonPlanResponse]:
        query = select(LessonPlan).order_by(LessonPlan.created_at.desc())
        if subject_id:
            query = query.where(LessonPlan.subject_id == subject_id)
        result = await self.db.execute(query)
        return [self._to_response(plan) for plan in result.scalars().all()]

    async def get_plan_for_lesson(self, lesson_id: str) -> LessonPlanResponse | None:
        result = await self.db.execute(
            select(LessonPlan).where(LessonPlan.lesson_id == lesson_id)
        )
        plan = result.scalar_one_or_none()
        return self._to_response(plan) if plan else None

    async def delete_plan(self, lesson_plan_id: str) -> None:
        plan = await self._get_plan(lesson_plan_id)
        await self.db.execute(delete(Direction).where(Direction.lesson_plan_id == lesson_plan_id))
        await self.db.execute(delete(Section).where(Section.lesson_plan_id == lesson_plan_id))
        await self.db.delete(plan)
        await self.db.commit()
        logger.info("Deleted lesson plan %s", lesson_plan_id)

    async def load_plan(self, lesson_plan_id: str) -> LessonPlanContent:
        """Sections in order, each with its directions in order.

        Raises:
            LessonPlanNotFoundError: If the plan does not exist.
        """
        await self._get_plan(lesson_plan_id)

        result = await self.db.execute(
            select(Section, SectionName.section_name)
            .outerjoin(
                SectionName,
                SectionName.lp_section_name_id == Section.lp_section_names_id,
            )
            .where(Section.lesson_plan_id == lesson_plan_id)
            .order_by(Section.order.asc())
        )
        sections = result.all()

        directions: dict[str, list[DirectionPayload]] = defaultdict(list)
        result = await self.db.execute(
            select(Direction)
            .where(Direction.lesson_plan_id == lesson_plan_id)
            .order_by(Direction.order.asc())
        )
        for direction in result.scalars().all():
            directions[direction.lp_sections_id].append(self._direction_payload(direction))

        return LessonPlanContent(
            lesson_plan_id=lesson_plan_id,
            sections=[
                SectionPayload(
                    lp_sections_id=section.lp_sections_id,
                    lp_section_names_id=section.lp_section_names_id,
                    section_name=section_name,
                    order=section.order,
                    published=section.published,
                    directions=directions.get(section.lp_sections_id, []),
                )
                for section, section_name in sections
            ],
        )

    async def save_plan(
        self,
        lesson_plan_id: str,
        sections: list[SectionPayload],
    ) -> LessonPlanContent:
        """Persist the section editor state of a plan.

        Sections and each section's directions are renumbered from 1 in
        list order. Directions missing from a kept section and sections
        missing from the list are deleted.

        Raises:
            LessonPlanNotFoundError: If the plan does not exist.
            LessonPlanSaveError: If a statement failed. Nothing is saved.
        """
        await self._get_plan(lesson_plan_id)

        saved: list[SectionPayload] = []
        try:
            existing_sections = await self._existing(Section, "lp_sections_id", lesson_plan_id)
            existing_directions = await self._existing(
                Direction, "lp_directions_id", lesson_plan_id
            )

            for payload in renumber(sections, start=1):
                payload = payload.model_copy(
                    update={"lp_sections_id": payload.lp_sections_id or new_uuid()}
                )
                section = existing_sections.pop(payload.lp_sections_id, None)
                if section is None:
                    section = Section(
                        lp_sections_id=payload.lp_sections_id,
                        lesson_plan_id=lesson_plan_id,
                    )
                    self.db.add(section)
                section.lp_section_names_id = payload.lp_section_names_id
                section.order = payload.order
                section.published = payload.published

                directions: list[DirectionPayload] = []
                for item in renumber(payload.directions, start=1):
                    item = item.model_copy(
                        update={"lp_directions_id": item.lp_directions_id or new_uuid()}
                    )
                    direction = existing_directions.pop(item.lp_directions_id, None)
                    if direction is None:
                        direction = Direction(
                            lp_directions_id=item.lp_directions_id,
                            lesson_plan_id=lesson_plan_id,
                        )
                        self.db.add(direction)
                    direction.lp_sections_id = payload.lp_sections_id
                    direction.order = item.order
                    for field in DIRECTION_FIELDS:
                        setattr(direction, field, getattr(item, field))
                    directions.append(item)

                saved.append(payload.model_copy(update={"directions": directions}))

            await self.db.flush()
            for direction in existing_directions.values():
                await self.db.delete(direction)
            await self.db.flush()
            for section in existing_sections.values():
                await self.db.delete(section)

            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to save lesson plan %s: %s", lesson_plan_id, e)
            raise LessonPlanSaveError(f"Failed to save lesson plan: {e}") from e

        logger.info(
            "Saved %d sections for lesson plan %s (%d removed)",
            len(saved),
            lesson_plan_id,
            len(existing_sections),
        )
        return LessonPlanContent(lesson_plan_id=lesson_plan_id, sections=saved)

    async def list_section_names(self) -> list[SectionNameResponse]:
        result = await self.db.execute(select(SectionName).order_by(SectionName.section_name))
        return [
            SectionNameResponse(
                lp_section_name_id=row.lp_section_name_id,
                section_name=row.section_name,
            )
            for row in result.scalars().all()
        ]

    async def list_focuses(self) -> list[FocusResponse]:
        result = await self.db.execute(select(Focus).order_by(Focus.lp_focus))
        return [
            FocusResponse(lp_focus_id=row.lp_focus_id, lp_focus=row.lp_focus)
            for row in result.scalars().all()
        ]

    async def _get_plan(self, lesson_plan_id: str) -> LessonPlan:
        plan = await self.db.get(LessonPlan, lesson_plan_id)
        if plan is None:
            raise LessonPlanNotFoundError(f"Lesson plan {lesson_plan_id} not found")
        return plan

    async def _existing(
        self,
        model: type[PlanRowT],
        pk: str,
        lesson_plan_id: str,
    ) -> dict[str, PlanRowT]:
        """Rows of a plan keyed by primary key."""
        result = await self.db.execute(select(model).where(model.lesson_plan_id == lesson_plan_id))
        return {getattr(row, pk): row for row in result.scalars().all()}

    @staticmethod
    def _direction_payload(direction: Direction) -> DirectionPayload:
        return DirectionPayload(
            lp_directions_id=direction.lp_directions_id,
            order=direction.order,
            **{field: getattr(direction, field) for field in DIRECTION_FIELDS},
        )

    @staticmethod
    def _to_response(plan: LessonPlan) -> LessonPlanResponse:
        return LessonPlanResponse(
            lesson_plan_id=plan.lesson_plan_id,
            lesson_id=plan.lesson_id,
            subject_id=plan.subject_id,
        )
