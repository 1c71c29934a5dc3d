# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for activity persistence against a real database.

These run ActivityRepository and ActivityService on SQLAlchemy sessions
over the ORM schema, so primary keys, renamed columns and ``IN`` queries
are exercised as they are in production.
"""

from typing import Any
from uuid import UUID

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domains.activity.repository import ActivityRepository, row_to_dict
from src.domains.activity.service import ActivityService
from src.infrastructure.database.models import (
    Activity,
    GraphicOrganizer,
    InTextSource,
    Question,
    QuestionChoice,
    QuestionPartB,
    Reading,
    Vocabulary,
    new_uuid,
)
from src.models.activity import LessonActivities, SaveLessonActivitiesRequest

pytestmark = pytest.mark.integration


@pytest.fixture
def lesson_id() -> str:
    return new_uuid()


@pytest.fixture
def ids() -> dict[str, str]:
    """Fresh UUIDs for the activities and children of one lesson."""
    names = ("a1", "a2", "r1", "q1", "its1", "go1", "q2", "v1")
    return {name: new_uuid() for name in names}


def _lesson_request(ids: dict[str, str]) -> SaveLessonActivitiesRequest:
    a1, a2 = ids["a1"], ids["a2"]
    return SaveLessonActivitiesRequest.model_validate(
        {
            "activities": [
                {"activity_id": a1, "name": "The Nile"},
                {"activity_id": a2, "name": "Check for understanding"},
            ],
            "activity_types": {
                a1: [
                    {"id": ids["r1"], "activity_id": a1, "type": "reading"},
                    {"id": ids["q1"], "activity_id": a1, "type": "question"},
                    {"id": ids["its1"], "activity_id": a1, "type": "in_text_source"},
                    {"id": ids["go1"], "activity_id": a1, "type": "graphic_organizer"},
                ],
                a2: [
                    {"id": ids["q2"], "activity_id": a2, "type": "question"},
                    {"id": ids["v1"], "activity_id": a2, "type": "vocabulary"},
                ],
            },
            "details": {
                ids["r1"]: {
                    "type": "reading",
                    "reading_title": "The Nile",
                    "reading_text": "The Nile floods every summer.",
                },
                ids["q1"]: {
                    "type": "question",
                    "question_text": "Which river floods each summer?",
                    "question_type": "Multiple Choice",
                    "answer_options": [
                        {"text": "Nile", "is_correct": True},
                        {"text": "Thames", "is_correct": False},
                    ],
                },
                ids["its1"]: {
                    "type": "in_text_source",
                    "source_title_ad": "Herodotus",
                    "source_text": "Egypt is the gift of the river.",
                },
                ids["go1"]: {
                    "type": "graphic_organizer",
                    "template_type": "table",
                    "content": {"rows": 1, "columns": 2, "cells": [["Cause", "Effect"]]},
                },
                ids["q2"]: {
                    "type": "question",
                    "question_text": "Why did farmers welcome the flood?",
                    "question_type": "Part A Part B Question",
                    "part_b": "Cite a detail from the reading.",
                },
                ids["v1"]: {
                    "type": "vocabulary",
                    "items": [
                        {"word": "delta", "definition": "Land at a river mouth"},
                        {"word": "silt", "definition": "Fine sand carried by water"},
                    ],
                },
            },
        }
    )


async def _save(
    session_factory: async_sessionmaker[AsyncSession],
    lesson_id: str,
    request: SaveLessonActivitiesRequest,
) -> LessonActivities:
    async with session_factory() as session:
        return await ActivityService(session).save_lesson(lesson_id, request)


async def _load(
    session_factory: async_sessionmaker[AsyncSession], lesson_id: str
) -> LessonActivities:
    async with session_factory() as session:
        return await ActivityService(session).load_lesson(lesson_id)


async def _count(session: AsyncSession, model: Any) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


class TestActivityRepository:
    """Tests for the table gateway itself."""

    @pytest.mark.asyncio
    async def test_upsert_inserts_then_updates(self, db_session: AsyncSession) -> None:
        repository = ActivityRepository(db_session)
        row = {
            "reading_id": new_uuid(),
            "activity_id": new_uuid(),
            "order": 0,
            "published": "No",
            "reading_title": "Draft",
            "reading_text": "First version",
        }

        assert await repository.upsert(Reading, "reading_id", row) is True
        assert await repository.upsert(
            Reading, "reading_id", {**row, "reading_text": "Second version"}
        ) is False
        await repository.commit()

        (stored,) = await repository.fetch_rows(Reading, "activity_id", [row["activity_id"]])
        assert stored["reading_text"] == "Second version"
        assert await _count(db_session, Reading) == 1

    @pytest.mark.asyncio
    async def test_rows_use_attribute_names(self, db_session: AsyncSession) -> None:
        reading = Reading(
            reading_id=new_uuid(),
            activity_id=new_uuid(),
            reading_text="Stored in the reaing_text column",
        )
        db_session.add(reading)
        await db_session.commit()

        row = row_to_dict(reading)

        assert row["reading_text"] == "Stored in the reaing_text column"
        assert "reaing_text" not in row

    @pytest.mark.asyncio
    async def test_fetch_and_delete_by_id_sets(self, db_session: AsyncSession) -> None:
        repository = ActivityRepository(db_session)
        first, second, other = new_uuid(), new_uuid(), new_uuid()
        for activity_id, word in ((first, "delta"), (second, "silt"), (other, "levee")):
            await repository.insert(
                Vocabulary,
                {"vocabulary_id": new_uuid(), "activity_id": activity_id, "word": word},
            )

        rows = await repository.fetch_rows(Vocabulary, "activity_id", [first, second])
        assert sorted(row["word"] for row in rows) == ["delta", "silt"]
        assert await repository.fetch_rows(Vocabulary, "activity_id", []) == []

        await repository.delete_in(Vocabulary, "activity_id", [first, second])
        await repository.commit()

        assert await repository.list_ids(Vocabulary, "vocabulary_id", "activity_id", other)
        assert await _count(db_session, Vocabulary) == 1


class TestLessonPersistence:
    """Save and load through ActivityService on a real schema."""

    @pytest.mark.asyncio
    async def test_save_then_load_round_trips(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        lesson_id: str,
        ids: dict[str, str],
    ) -> None:
        saved = await _save(session_factory, lesson_id, _lesson_request(ids))

        loaded = await _load(session_factory, lesson_id)

        assert [a.activity_id for a in loaded.activities] == [ids["a1"], ids["a2"]]
        assert [a.order for a in loaded.activities] == [1, 2]
        assert loaded.activity_types[ids["a1"]] == saved.activity_types[ids["a1"]]
        assert [ref.order for ref in loaded.activity_types[ids["a1"]]] == [0, 1, 2, 3]

        question = loaded.details[ids["q1"]]
        assert [(o.text, o.is_correct) for o in question.answer_options] == [
            ("Nile", True),
            ("Thames", False),
        ]
        assert loaded.details[ids["r1"]].reading_text == "The Nile floods every summer."
        assert loaded.details[ids["go1"]].content == {
            "rows": 1,
            "columns": 2,
            "cells": [["Cause", "Effect"]],
        }
        assert loaded.details[ids["q2"]].part_b == "Cite a detail from the reading."

        question_ref, vocab_ref = loaded.activity_types[ids["a2"]]
        assert question_ref.id == ids["q2"]
        words = loaded.details[vocab_ref.id].items
        assert [(w.word, w.vocab_order) for w in words] == [("delta", 0), ("silt", 1)]

    @pytest.mark.asyncio
    async def test_in_text_source_uses_actvity_id_column(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        db_session: AsyncSession,
        lesson_id: str,
        ids: dict[str, str],
    ) -> None:
        await _save(session_factory, lesson_id, _lesson_request(ids))

        result = await db_session.execute(text("SELECT actvity_id FROM in_text_source"))
        assert result.scalars().all() == [UUID(ids["a1"]).hex]

        loaded = await _load(session_factory, lesson_id)
        source = loaded.details[ids["its1"]]
        assert source.activity_id == ids["a1"]
        assert source.source_text == "Egypt is the gift of the river."

    @pytest.mark.asyncio
    async def test_deleting_activity_removes_its_content(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        db_session: AsyncSession,
        lesson_id: str,
        ids: dict[str, str],
    ) -> None:
        await _save(session_factory, lesson_id, _lesson_request(ids))

        async with session_factory() as session:
            await ActivityService(session).delete_activity(ids["a1"])

        for model in (Reading, QuestionChoice, InTextSource, GraphicOrganizer):
            assert await _count(db_session, model) == 0, model.__tablename__
        assert await _count(db_session, Activity) == 1
        assert await _count(db_session, Question) == 1
        assert await _count(db_session, QuestionPartB) == 1
        assert await _count(db_session, Vocabulary) == 2

    @pytest.mark.asyncio
    async def test_activity_left_out_of_a_save_is_removed(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        db_session: AsyncSession,
        lesson_id: str,
        ids: dict[str, str],
    ) -> None:
        await _save(session_factory, lesson_id, _lesson_request(ids))

        request = _lesson_request(ids)
        request.activities = [a for a in request.activities if a.activity_id == ids["a1"]]
        await _save(session_factory, lesson_id, request)

        assert await _count(db_session, Activity) == 1
        assert await _count(db_session, Vocabulary) == 0
        assert await _count(db_session, QuestionPartB) == 0
        assert await _count(db_session, Question) == 1

    @pytest.mark.asyncio
    async def test_vocabulary_moved_to_an_earlier_activity(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        db_session: AsyncSession,
        lesson_id: str,
    ) -> None:
        first, second = new_uuid(), new_uuid()
        await _save(
            session_factory,
            lesson_id,
            SaveLessonActivitiesRequest.model_validate(
                {
                    "activities": [{"activity_id": first}, {"activity_id": second}],
                    "activity_types": {
                        second: [{"id": "words", "activity_id": second, "type": "vocabulary"}]
                    },
                    "details": {
                        "words": {
                            "type": "vocabulary",
                            "items": [{"word": "delta", "definition": "Land at a river mouth"}],
                        }
                    },
                }
            ),
        )
        loaded = await _load(session_factory, lesson_id)
        (vocab_ref,) = loaded.activity_types[second]

        await _save(
            session_factory,
            lesson_id,
            SaveLessonActivitiesRequest(
                activities=loaded.activities,
                activity_types={first: [vocab_ref], second: []},
                details=loaded.details,
            ),
        )

        reloaded = await _load(session_factory, lesson_id)
        assert reloaded.activity_types[second] == []
        (moved,) = reloaded.activity_types[first]
        assert [item.word for item in reloaded.details[moved.id].items] == ["delta"]
        assert await _count(db_session, Vocabulary) == 1
