# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity service for loading and saving lesson activities.

This module provides the ActivityService class for:
- Loading a lesson's activities with their kind-tagged children
- Saving the editor state of a lesson in one transaction
- Deleting a single activity with all of its content rows

Per-kind persistence is delegated to ``KIND_HANDLERS``.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.activity.kinds import KIND_HANDLERS, get_handler
from src.domains.activity.ordering import renumber, sort_key
from src.domains.activity.repository import ActivityRepository
from src.domains.activity.validation import validate_details
from src.infrastructure.database.models import Activity
from src.models.activity import (
    ActivityKind,
    ActivityRecord,
    ActivityTypeRef,
    DetailBase,
    LessonActivities,
    SaveLessonActivitiesRequest,
)

logger = logging.getLogger(__name__)


class ActivityServiceError(Exception):
    """Base exception for activity service errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ActivityNotFoundError(ActivityServiceError):
    """Raised when an activity does not exist."""

    pass


class ActivityLoadError(ActivityServiceError):
    """Raised when any table of a lesson could not be read."""

    pass


class ActivitySaveError(ActivityServiceError):
    """Raised when a lesson save failed and was rolled back."""

    pass


class ActivityValidationError(ActivityServiceError):
    """Raised when activity content is incomplete.

    Attributes:
        errors: Messages keyed by activity type id.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__("Activity content is incomplete", details=errors)
        self.errors = errors


class ActivityService:
    """Service for lesson activity content.

    Attributes:
        db: Async database session.
        repository: Table gateway bound to the session.
    """

    def __init__(
        self,
        db: AsyncSession,
        repository: ActivityRepository | None = None,
    ) -> None:
        self.db = db
        self.repository = repository or ActivityRepository(db)

    async def load_lesson(self, lesson_id: str) -> LessonActivities:
        """Load every activity of a lesson with its children and details.

        Args:
            lesson_id: Lesson identifier.

        Returns:
            Activities in order, children per activity sorted by order and
            details keyed by child id.

        Raises:
            ActivityLoadError: If any table could not be read. No partial
                result is returned.
        """
        try:
            rows = await self.repository.list_activities(lesson_id)
            activities = [self._to_record(row) for row in rows]
            by_id = {activity.activity_id: activity for activity in activities}

            activity_types: dict[str, list[ActivityTypeRef]] = {
                activity.activity_id: [] for activity in activities
            }
            details: dict[str, DetailBase] = {}
            if by_id:
                for handler in KIND_HANDLERS.values():
                    for ref, detail in await handler.load(self.repository, by_id):
                        activity_types.setdefault(ref.activity_id, []).append(ref)
                        details[ref.id] = detail
        except SQLAlchemyError as e:
            logger.error("Failed to load activities of lesson %s: %s", lesson_id, e)
            raise ActivityLoadError(f"Failed to load activities: {e}") from e

        for refs in activity_types.values():
            refs.sort(key=lambda ref: sort_key(ref.order))

        logger.debug(
            "Loaded %d activities with %d children for lesson %s",
            len(activities),
            len(details),
            lesson_id,
        )
        return LessonActivities(
            lesson_id=lesson_id,
            activities=activities,
            activity_types=activity_types,
            details=details,
        )

    async def save_lesson(
        self,
        lesson_id: str,
        request: SaveLessonActivitiesRequest,
    ) -> LessonActivities:
        """Persist the editor state of a lesson.

        Activities are renumbered from 1 and their children from 0 in list
        order. Rows no longer present in the request are deleted. All
        statements run in one transaction.

        Args:
            lesson_id: Lesson identifier.
            request: Activities, children per activity and details per child.

        Returns:
            The saved state with orders renumbered, ids assigned and
            children keyed by their detail primary key.

        Raises:
            ActivityValidationError: If any detail is incomplete. Nothing
                is written.
            ActivitySaveError: If a statement failed. The transaction is
                rolled back.
        """
        errors = validate_details(request.activity_types, request.details)
        if errors:
            logger.info(
                "Rejected save of lesson %s: %d incomplete activities", lesson_id, len(errors)
            )
            raise ActivityValidationError(errors)

        activities = [
            activity.model_copy(update={"lesson_id": lesson_id})
            for activity in renumber(request.activities, start=1)
        ]
        activity_types: dict[str, list[ActivityTypeRef]] = {}
        details: dict[str, DetailBase] = {}

        try:
            for activity in activities:
                inserted = await self.repository.upsert(
                    Activity, "activity_id", activity.model_dump()
                )
                if inserted:
                    logger.debug("Inserted activity %s", activity.activity_id)

                refs, saved = await self._save_children(
                    activity,
                    request.activity_types.get(activity.activity_id, []),
                    request.details,
                )
                activity_types[activity.activity_id] = refs
                details.update(saved)

            kept = {activity.activity_id for activity in activities}
            persisted = await self.repository.list_ids(
                Activity, "activity_id", "lesson_id", lesson_id
            )
            orphans = [activity_id for activity_id in persisted if activity_id not in kept]
            for activity_id in orphans:
                await self._delete_activity_rows(activity_id)

            await self.repository.commit()
        except SQLAlchemyError as e:
            await self.repository.rollback()
            logger.error("Failed to save activities of lesson %s: %s", lesson_id, e)
            raise ActivitySaveError(f"Failed to save activities: {e}") from e
        except Exception:
            await self.repository.rollback()
            raise

        logger.info(
            "Saved %d activities for lesson %s (%d removed)",
            len(activities),
            lesson_id,
            len(orphans),
        )
        return LessonActivities(
            lesson_id=lesson_id,
            activities=activities,
            activity_types=activity_types,
            details=details,
        )

    async def delete_activity(self, activity_id: str) -> None:
        """Delete one activity and every row of its content.

        Raises:
            ActivityNotFoundError: If the activity does not exist.
            ActivitySaveError: If a statement failed.
        """
        try:
            if not await self.repository.exists(Activity, "activity_id", activity_id):
                raise ActivityNotFoundError(f"Activity {activity_id} not found")
            await self._delete_activity_rows(activity_id)
            await self.repository.commit()
        except SQLAlchemyError as e:
            await self.repository.rollback()
            logger.error("Failed to delete activity %s: %s", activity_id, e)
            raise ActivitySaveError(f"Failed to delete activity: {e}") from e

        logger.info("Deleted activity %s", activity_id)

    async def _save_children(
        self,
        activity: ActivityRecord,
        refs: list[ActivityTypeRef],
        details: dict[str, DetailBase],
    ) -> tuple[list[ActivityTypeRef], dict[str, DetailBase]]:
        saved_refs: list[ActivityTypeRef] = []
        saved_details: dict[str, DetailBase] = {}
        keep: dict[ActivityKind, set[str]] = defaultdict(set)

        present: list[ActivityTypeRef] = []
        for ref in refs:
            if ref.id not in details:
                logger.warning(
                    "Skipping %s %s of activity %s: no detail",
                    ref.type.value,
                    ref.id,
                    activity.activity_id,
                )
                continue
            present.append(ref)

        for ref in renumber(present, start=0):
            ref = ref.model_copy(update={"activity_id": activity.activity_id})
            detail = details[ref.id]
            saved = await get_handler(ref.type).save(self.repository, ref, detail)
            ref = ref.model_copy(update={"id": saved.id})
            keep[ref.type].add(saved.id)
            saved_refs.append(ref)
            saved_details[saved.id] = saved

        for kind, handler in KIND_HANDLERS.items():
            await handler.prune(self.repository, activity.activity_id, keep[kind])

        return saved_refs, saved_details

    async def _delete_activity_rows(self, activity_id: str) -> None:
        for handler in KIND_HANDLERS.values():
            await handler.purge(self.repository, activity_id)
        await self.repository.delete_where(Activity, "activity_id", activity_id)
        logger.debug("Deleted activity %s with its content", activity_id)

    @staticmethod
    def _to_record(row: dict) -> ActivityRecord:
        return ActivityRecord(
            activity_id=str(row["activity_id"]),
            lesson_id=str(row["lesson_id"]) if row.get("lesson_id") else None,
            order=row.get("order"),
            name=row.get("name"),
            published=row.get("published") or "No",
        )
