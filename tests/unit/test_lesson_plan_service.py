# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for LessonPlanService."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from src.domains.lesson_plan.service import (
    LessonPlanExistsError,
    LessonPlanNotFoundError,
    LessonPlanSaveError,
    LessonPlanService,
)
from src.infrastructure.database.models import Direction, LessonPlan, Section
from src.models.lesson_plan import (
    DirectionPayload,
    LessonPlanCreateRequest,
    SectionPayload,
)

PLAN_ID = "plan-1"


def _scalars(rows: list) -> MagicMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


@pytest.fixture
def service(mock_db: AsyncMock) -> LessonPlanService:
    return LessonPlanService(mock_db)


class TestSavePlan:
    """Tests for LessonPlanService.save_plan."""

    @pytest.fixture
    def existing(self, mock_db: AsyncMock) -> dict[str, SimpleNamespace]:
        rows = {
            "s1": SimpleNamespace(lp_sections_id="s1", order=4),
            "s2": SimpleNamespace(lp_sections_id="s2", order=1),
            "d1": SimpleNamespace(lp_directions_id="d1", order=3),
            "d2": SimpleNamespace(lp_directions_id="d2", order=1),
        }
        mock_db.get.return_value = LessonPlan(lesson_plan_id=PLAN_ID, lesson_id="lesson-1")
        mock_db.execute.side_effect = [
            _scalars([rows["s1"], rows["s2"]]),
            _scalars([rows["d1"], rows["d2"]]),
        ]
        return rows

    @pytest.mark.asyncio
    async def test_renumbers_and_removes_missing_rows(
        self,
        service: LessonPlanService,
        mock_db: AsyncMock,
        existing: dict[str, SimpleNamespace],
    ) -> None:
        sections = [
            SectionPayload(
                lp_section_names_id="warm-up",
                directions=[
                    DirectionPayload(directions="Read aloud", time=5),
                    DirectionPayload(lp_directions_id="d1", directions="Discuss"),
                ],
            ),
            SectionPayload(lp_sections_id="s1", order=9),
        ]

        content = await service.save_plan(PLAN_ID, sections)

        assert [s.order for s in content.sections] == [1, 2]
        assert content.sections[1].lp_sections_id == "s1"
        assert content.sections[0].lp_sections_id
        assert [d.order for d in content.sections[0].directions] == [1, 2]

        assert existing["s1"].order == 2
        assert existing["d1"].order == 2
        assert existing["d1"].lp_sections_id == content.sections[0].lp_sections_id
        assert existing["d1"].directions == "Discuss"

        added = [call.args[0] for call in mock_db.add.call_args_list]
        assert [type(row) for row in added] == [Section, Direction]
        assert added[1].time == 5

        deleted = [call.args[0] for call in mock_db.delete.await_args_list]
        assert deleted == [existing["d2"], existing["s2"]]
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reads_existing_rows_of_the_plan(
        self,
        service: LessonPlanService,
        mock_db: AsyncMock,
        existing: dict[str, SimpleNamespace],
    ) -> None:
        await service.save_plan(PLAN_ID, [SectionPayload(lp_sections_id="s2")])

        sections_query, directions_query = [
            call.args[0] for call in mock_db.execute.await_args_list[:2]
        ]
        assert sections_query.get_final_froms() == [Section.__table__]
        assert directions_query.get_final_froms() == [Direction.__table__]
        for query in (sections_query, directions_query):
            assert list(query.compile().params.values()) == [PLAN_ID]

        deleted = [call.args[0] for call in mock_db.delete.await_args_list]
        assert deleted == [existing["d1"], existing["d2"], existing["s1"]]

    @pytest.mark.asyncio
    async def test_failure_rolls_back(
        self,
        service: LessonPlanService,
        mock_db: AsyncMock,
        existing: dict[str, SimpleNamespace],
    ) -> None:
        mock_db.commit.side_effect = SQLAlchemyError("disk full")

        with pytest.raises(LessonPlanSaveError):
            await service.save_plan(PLAN_ID, [SectionPayload(lp_sections_id="s1")])
        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_plan(self, service: LessonPlanService, mock_db: AsyncMock) -> None:
        mock_db.get.return_value = None

        with pytest.raises(LessonPlanNotFoundError):
            await service.save_plan("missing", [])


class TestCreatePlan:
    @pytest.mark.asyncio
    async def test_creates_plan_with_lesson_subject(
        self, service: LessonPlanService, mock_db: AsyncMock
    ) -> None:
        mock_db.get.return_value = SimpleNamespace(subject_id="subject-1")
        mock_db.execute.return_value.scalar_one_or_none = MagicMock(return_value=None)

        async def _refresh(plan: LessonPlan) -> None:
            plan.lesson_plan_id = PLAN_ID

        mock_db.refresh.side_effect = _refresh

        response = await service.create_plan(LessonPlanCreateRequest(lesson_id="lesson-1"))

        assert response.lesson_plan_id == PLAN_ID
        assert response.subject_id == "subject-1"

    @pytest.mark.asyncio
    async def test_lesson_must_exist(self, service: LessonPlanService, mock_db: AsyncMock) -> None:
        mock_db.get.return_value = None

        with pytest.raises(LessonPlanNotFoundError):
            await service.create_plan(LessonPlanCreateRequest(lesson_id="missing"))

    @pytest.mark.asyncio
    async def test_one_plan_per_lesson(self, service: LessonPlanService, mock_db: AsyncMock) -> None:
        mock_db.get.return_value = SimpleNamespace(subject_id="subject-1")
        mock_db.execute.return_value.scalar_one_or_none = MagicMock(
            return_value=LessonPlan(lesson_plan_id=PLAN_ID, lesson_id="lesson-1")
        )

        with pytest.raises(LessonPlanExistsError):
            await service.create_plan(LessonPlanCreateRequest(lesson_id="lesson-1"))
