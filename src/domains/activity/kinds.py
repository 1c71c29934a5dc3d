# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity kind registry.

Each activity kind is stored in its own table. ``KIND_HANDLERS`` maps a
kind to the handler that loads, saves and deletes its rows, so the
loader and saver never branch on the kind themselves.

Handlers:
- TableKindHandler: one row per child, columns copied to and from the
  detail model. Covers readings, sources, graphic organizers and images.
- QuestionKindHandler: adds the Part B row and the answer choices.
- VocabularyKindHandler: all words of an activity collapse into one
  synthetic child and are rewritten as a block on save.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Mapping

from src.domains.activity.ordering import order_or_position, renumber, sort_key
from src.infrastructure.database.models import (
    GraphicOrganizer,
    Image,
    InTextSource,
    Question,
    QuestionChoice,
    QuestionPartB,
    Reading,
    ReadingAddon,
    Source,
    SubReading,
    Vocabulary,
    new_uuid,
)
from src.infrastructure.database.models.base import Base
from src.models.activity import (
    ActivityKind,
    ActivityRecord,
    ActivityTypeRef,
    AnswerOption,
    DetailBase,
    GraphicOrganizerDetail,
    ImageDetail,
    InTextSourceDetail,
    QuestionDetail,
    ReadingAddonDetail,
    ReadingDetail,
    SourceDetail,
    SubReadingDetail,
    VocabularyDetail,
    VocabularyItem,
)

if TYPE_CHECKING:
    from src.domains.activity.repository import ActivityRepository, Row

logger = logging.getLogger(__name__)

PARENT_KEY = "activity_id"

LoadedChild = tuple[ActivityTypeRef, DetailBase]


class KindHandler:
    """Persistence strategy for one activity kind."""

    kind: ActivityKind

    async def load(
        self,
        repository: "ActivityRepository",
        activities: Mapping[str, ActivityRecord],
    ) -> list[LoadedChild]:
        raise NotImplementedError

    async def save(
        self,
        repository: "ActivityRepository",
        ref: ActivityTypeRef,
        detail: DetailBase,
    ) -> DetailBase:
        """Persist one child and return its detail with ids and order resolved."""
        raise NotImplementedError

    async def prune(
        self,
        repository: "ActivityRepository",
        activity_id: str,
        keep_ids: set[str],
    ) -> None:
        """Delete this kind's rows of an activity that are not in ``keep_ids``."""
        raise NotImplementedError

    async def purge(self, repository: "ActivityRepository", activity_id: str) -> None:
        """Delete all of this kind's rows of an activity."""
        await self.prune(repository, activity_id, set())


class TableKindHandler(KindHandler):
    """Kind stored as one row per child.

    Args:
        kind: Activity kind tag.
        model: ORM model of the kind's table.
        pk: Primary key attribute of the model.
        detail_cls: Detail model of the kind.
        fields: Content attributes shared by model and detail.
    """

    def __init__(
        self,
        kind: ActivityKind,
        model: type[Base],
        pk: str,
        detail_cls: type[DetailBase],
        fields: tuple[str, ...],
    ) -> None:
        self.kind = kind
        self.model = model
        self.pk = pk
        self.detail_cls = detail_cls
        self.fields = fields

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.value!r}, table={self.model.__tablename__!r})"

    def to_detail(self, row: "Row", order: int) -> DetailBase:
        return self.detail_cls(
            id=str(row[self.pk]),
            activity_id=str(row[PARENT_KEY]),
            order=order,
            published=row.get("published") or "No",
            **{name: row.get(name) for name in self.fields},
        )

    def to_row(self, ref: ActivityTypeRef, detail: DetailBase) -> "Row":
        values: Row = {
            self.pk: detail.id,
            PARENT_KEY: ref.activity_id,
            "order": ref.order,
            "published": detail.published,
        }
        for name in self.fields:
            values[name] = getattr(detail, name)
        return values

    async def load(
        self,
        repository: "ActivityRepository",
        activities: Mapping[str, ActivityRecord],
    ) -> list[LoadedChild]:
        rows = await repository.fetch_rows(self.model, PARENT_KEY, list(activities))
        children: list[LoadedChild] = []
        for position, row in enumerate(rows):
            order = order_or_position(row.get("order"), position)
            detail = self.to_detail(row, order)
            ref = ActivityTypeRef(
                id=detail.id,
                activity_id=detail.activity_id,
                type=self.kind,
                order=order,
            )
            children.append((ref, detail))
        return children

    async def save(
        self,
        repository: "ActivityRepository",
        ref: ActivityTypeRef,
        detail: DetailBase,
    ) -> DetailBase:
        detail = detail.model_copy(
            update={
                "id": detail.id or ref.id or new_uuid(),
                "activity_id": ref.activity_id,
                "order": ref.order,
            }
        )
        inserted = await repository.upsert(self.model, self.pk, self.to_row(ref, detail))
        logger.debug(
            "%s %s %s for activity %s",
            "Inserted" if inserted else "Updated",
            self.kind.value,
            detail.id,
            ref.activity_id,
        )
        return detail

    async def prune(
        self,
        repository: "ActivityRepository",
        activity_id: str,
        keep_ids: set[str],
    ) -> None:
        existing = await repository.list_ids(self.model, self.pk, PARENT_KEY, activity_id)
        stale = [row_id for row_id in existing if row_id not in keep_ids]
        if stale:
            await self.delete_rows(repository, stale)
            logger.info(
                "Deleted %d %s rows from activity %s", len(stale), self.kind.value, activity_id
            )

    async def delete_rows(self, repository: "ActivityRepository", ids: list[str]) -> None:
        await repository.delete_in(self.model, self.pk, ids)


class QuestionKindHandler(TableKindHandler):
    """Questions plus their Part B prompt and answer choices.

    Part B is only kept for Part A / Part B questions and choices only for
    multiple choice and multiple select questions.
    """

    def __init__(self) -> None:
        super().__init__(
            ActivityKind.QUESTION,
            Question,
            "question_id",
            QuestionDetail,
            ("question", "question_text", "question_title", "question_type"),
        )

    def to_detail(self, row: "Row", order: int) -> DetailBase:
        detail = super().to_detail(row, order)
        return detail.model_copy(
            update={
                "question_text": row.get("question_text") or row.get("question"),
                "question_type": row.get("question_type") or "Open Ended",
            }
        )

    async def load(
        self,
        repository: "ActivityRepository",
        activities: Mapping[str, ActivityRecord],
    ) -> list[LoadedChild]:
        children = await super().load(repository, activities)
        part_b_ids = [d.id for _, d in children if d.has_part_b]
        choice_ids = [d.id for _, d in children if d.has_choices]

        part_b = {
            str(row["part_a_id"]): row.get("question_text")
            for row in await repository.fetch_rows(QuestionPartB, "part_a_id", part_b_ids)
        }
        choices: dict[str, list[AnswerOption]] = defaultdict(list)
        for row in await repository.fetch_rows(QuestionChoice, "question_id", choice_ids):
            choices[str(row["question_id"])].append(
                AnswerOption(
                    id=str(row["question_choices_id"]),
                    text=row.get("choice_text") or "",
                    is_correct=bool(row.get("is_correct")),
                    order=row.get("order"),
                )
            )

        loaded: list[LoadedChild] = []
        for ref, detail in children:
            update: dict = {}
            if detail.has_part_b:
                update["part_b"] = part_b.get(detail.id)
            if detail.has_choices:
                update["answer_options"] = sorted(
                    choices.get(detail.id, []), key=lambda option: sort_key(option.order)
                )
            loaded.append((ref, detail.model_copy(update=update) if update else detail))
        return loaded

    async def save(
        self,
        repository: "ActivityRepository",
        ref: ActivityTypeRef,
        detail: DetailBase,
    ) -> DetailBase:
        question: QuestionDetail = await super().save(repository, ref, detail)

        if question.has_part_b:
            await repository.upsert(
                QuestionPartB,
                "part_a_id",
                {"part_a_id": question.id, "question_text": question.part_b},
            )
        else:
            await repository.delete_in(QuestionPartB, "part_a_id", [question.id])

        await repository.delete_where(QuestionChoice, "question_id", question.id)
        await repository.delete_in(
            QuestionChoice,
            "question_choices_id",
            [option.id for option in question.answer_options if option.id],
        )
        options: list[AnswerOption] = []
        if question.has_choices:
            for option in renumber(question.answer_options, start=0):
                option = option.model_copy(update={"id": option.id or new_uuid()})
                await repository.insert(
                    QuestionChoice,
                    {
                        "question_choices_id": option.id,
                        "question_id": question.id,
                        "choice_text": option.text,
                        "is_correct": option.is_correct,
                        "order": option.order,
                    },
                )
                options.append(option)

        return question.model_copy(
            update={
                "answer_options": options,
                "part_b": question.part_b if question.has_part_b else None,
            }
        )

    async def delete_rows(self, repository: "ActivityRepository", ids: list[str]) -> None:
        await repository.delete_in(QuestionChoice, "question_id", ids)
        await repository.delete_in(QuestionPartB, "part_a_id", ids)
        await super().delete_rows(repository, ids)


class VocabularyKindHandler(KindHandler):
    """Vocabulary words, one row each, exposed as one child per activity.

    The child id is generated on every load and is not stored. Saving
    deletes every word of the activity, and any row holding one of the
    incoming word ids, then inserts the current list, so word order is
    always the list order. An activity has at most one vocabulary child.
    """

    kind = ActivityKind.VOCABULARY

    def __repr__(self) -> str:
        return f"{type(self).__name__}('vocabulary', table='vocabulary')"

    async def load(
        self,
        repository: "ActivityRepository",
        activities: Mapping[str, ActivityRecord],
    ) -> list[LoadedChild]:
        rows = await repository.fetch_rows(Vocabulary, PARENT_KEY, list(activities))
        grouped: dict[str, list[Row]] = defaultdict(list)
        for row in rows:
            grouped[str(row[PARENT_KEY])].append(row)

        children: list[LoadedChild] = []
        for activity_id, words in grouped.items():
            words.sort(key=lambda row: sort_key(row.get("vocab_order")))
            order = order_or_position(words[0].get("order"), 0)
            activity = activities.get(activity_id)
            detail = VocabularyDetail(
                id=new_uuid(),
                activity_id=activity_id,
                order=order,
                published=activity.published if activity else "No",
                items=[
                    VocabularyItem(
                        id=str(row["vocabulary_id"]),
                        word=row.get("word") or "",
                        definition=row.get("definition") or "",
                        vocab_order=row.get("vocab_order"),
                    )
                    for row in words
                ],
            )
            ref = ActivityTypeRef(
                id=detail.id,
                activity_id=activity_id,
                type=self.kind,
                order=order,
            )
            children.append((ref, detail))
        return children

    async def save(
        self,
        repository: "ActivityRepository",
        ref: ActivityTypeRef,
        detail: DetailBase,
    ) -> DetailBase:
        vocabulary: VocabularyDetail = detail
        await repository.delete_where(Vocabulary, PARENT_KEY, ref.activity_id)
        # Words keep their ids when the block moves to another activity.
        await repository.delete_in(
            Vocabulary, "vocabulary_id", [item.id for item in vocabulary.items if item.id]
        )

        items: list[VocabularyItem] = []
        for item in renumber(vocabulary.items, start=0, field="vocab_order"):
            item = item.model_copy(update={"id": item.id or new_uuid()})
            await repository.insert(
                Vocabulary,
                {
                    "vocabulary_id": item.id,
                    PARENT_KEY: ref.activity_id,
                    "word": item.word,
                    "definition": item.definition,
                    "order": ref.order,
                    "vocab_order": item.vocab_order,
                    "published": vocabulary.published,
                },
            )
            items.append(item)

        logger.debug("Rewrote %d vocabulary words for activity %s", len(items), ref.activity_id)
        return vocabulary.model_copy(
            update={
                "id": ref.id,
                "activity_id": ref.activity_id,
                "order": ref.order,
                "items": items,
            }
        )

    async def prune(
        self,
        repository: "ActivityRepository",
        activity_id: str,
        keep_ids: set[str],
    ) -> None:
        if not keep_ids:
            await repository.delete_where(Vocabulary, PARENT_KEY, activity_id)


KIND_HANDLERS: dict[ActivityKind, KindHandler] = {
    ActivityKind.READING: TableKindHandler(
        ActivityKind.READING,
        Reading,
        "reading_id",
        ReadingDetail,
        ("reading_title", "reading_text"),
    ),
    ActivityKind.READING_ADDON: TableKindHandler(
        ActivityKind.READING_ADDON,
        ReadingAddon,
        "reading_id",
        ReadingAddonDetail,
        ("reading_text",),
    ),
    ActivityKind.SUB_READING: TableKindHandler(
        ActivityKind.SUB_READING,
        SubReading,
        "reading_id",
        SubReadingDetail,
        ("reading_title", "reading_text"),
    ),
    ActivityKind.SOURCE: TableKindHandler(
        ActivityKind.SOURCE,
        Source,
        "source_id",
        SourceDetail,
        (
            "source_title_ce",
            "source_title_ad",
            "source_text",
            "source_image",
            "source_image_description",
        ),
    ),
    ActivityKind.IN_TEXT_SOURCE: TableKindHandler(
        ActivityKind.IN_TEXT_SOURCE,
        InTextSource,
        "in_text_source_id",
        InTextSourceDetail,
        ("source_title_ad", "source_title_ce", "source_intro", "source_text"),
    ),
    ActivityKind.QUESTION: QuestionKindHandler(),
    ActivityKind.GRAPHIC_ORGANIZER: TableKindHandler(
        ActivityKind.GRAPHIC_ORGANIZER,
        GraphicOrganizer,
        "go_id",
        GraphicOrganizerDetail,
        ("template_type", "content"),
    ),
    ActivityKind.VOCABULARY: VocabularyKindHandler(),
    ActivityKind.IMAGE: TableKindHandler(
        ActivityKind.IMAGE,
        Image,
        "image_id",
        ImageDetail,
        ("img_url", "img_title", "description_title", "description", "alt", "position"),
    ),
}


def get_handler(kind: ActivityKind) -> KindHandler:
    return KIND_HANDLERS[kind]
