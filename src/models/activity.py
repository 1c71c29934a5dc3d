# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lesson activity models.

A lesson's content is exchanged as three parallel structures:

- ``activities``: ordered activity slots of the lesson
- ``activity_types``: for every activity id, its ordered kind-tagged children
- ``details``: for every child id, the full content record of that child

Details form a tagged union over the nine activity kinds, discriminated
by ``type``.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

PublishedFlag = Literal["Yes", "No"]


class ActivityKind(str, Enum):
    """Kinds of activity content, one table each."""

    READING = "reading"
    READING_ADDON = "reading_addon"
    SUB_READING = "sub_reading"
    SOURCE = "source"
    IN_TEXT_SOURCE = "in_text_source"
    QUESTION = "question"
    GRAPHIC_ORGANIZER = "graphic_organizer"
    VOCABULARY = "vocabulary"
    IMAGE = "image"


class QuestionType(str, Enum):
    OPEN_ENDED = "Open Ended"
    MULTIPLE_CHOICE = "Multiple Choice"
    MULTIPLE_SELECT = "Multiple Select"
    PART_A_PART_B = "Part A Part B Question"


CHOICE_QUESTION_TYPES = frozenset(
    {QuestionType.MULTIPLE_CHOICE.value, QuestionType.MULTIPLE_SELECT.value}
)


class ActivityRecord(BaseModel):
    """An activity slot within a lesson (order is 1-based)."""

    activity_id: str = Field(default_factory=lambda: str(uuid4()))
    lesson_id: str | None = None
    order: int | None = None
    name: str | None = None
    published: PublishedFlag = "No"


class ActivityTypeRef(BaseModel):
    """A kind-tagged child of an activity (order is 0-based).

    ``id`` is the primary key of the row in the kind's table, except for
    vocabulary where it identifies the whole word list of the activity.
    """

    id: str
    activity_id: str
    type: ActivityKind
    order: int | None = None


class DetailBase(BaseModel):
    """Fields common to every activity detail."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    activity_id: str | None = None
    order: int | None = None
    published: PublishedFlag = "No"


class ReadingDetail(DetailBase):
    type: Literal[ActivityKind.READING] = ActivityKind.READING
    reading_title: str | None = None
    reading_text: str | None = None


class ReadingAddonDetail(DetailBase):
    type: Literal[ActivityKind.READING_ADDON] = ActivityKind.READING_ADDON
    reading_text: str | None = None


class SubReadingDetail(DetailBase):
    type: Literal[ActivityKind.SUB_READING] = ActivityKind.SUB_READING
    reading_title: str | None = None
    reading_text: str | None = None


class SourceDetail(DetailBase):
    type: Literal[ActivityKind.SOURCE] = ActivityKind.SOURCE
    source_title_ce: str | None = None
    source_title_ad: str | None = None
    source_text: str | None = None
    source_image: str | None = None
    source_image_description: str | None = None


class InTextSourceDetail(DetailBase):
    type: Literal[ActivityKind.IN_TEXT_SOURCE] = ActivityKind.IN_TEXT_SOURCE
    source_title_ad: str | None = None
    source_title_ce: str | None = None
    source_intro: str | None = None
    source_text: str | None = None


class AnswerOption(BaseModel):
    """One answer choice of a multiple choice / multiple select question."""

    id: str | None = None
    text: str = ""
    is_correct: bool = False
    order: int | None = None


class QuestionDetail(DetailBase):
    type: Literal[ActivityKind.QUESTION] = ActivityKind.QUESTION
    question: str | None = None
    question_text: str | None = None
    question_title: str | None = None
    question_type: str = QuestionType.OPEN_ENDED.value
    answer_options: list[AnswerOption] = Field(default_factory=list)
    part_b: str | None = None

    @property
    def has_choices(self) -> bool:
        return self.question_type in CHOICE_QUESTION_TYPES

    @property
    def has_part_b(self) -> bool:
        return self.question_type == QuestionType.PART_A_PART_B.value


class GraphicOrganizerDetail(DetailBase):
    type: Literal[ActivityKind.GRAPHIC_ORGANIZER] = ActivityKind.GRAPHIC_ORGANIZER
    template_type: str | None = None
    content: dict[str, Any] | None = None


class VocabularyItem(BaseModel):
    id: str | None = None
    word: str = ""
    definition: str = ""
    vocab_order: int | None = None


class VocabularyDetail(DetailBase):
    """The whole word list of one activity."""

    type: Literal[ActivityKind.VOCABULARY] = ActivityKind.VOCABULARY
    items: list[VocabularyItem] = Field(default_factory=list)


class ImageDetail(DetailBase):
    type: Literal[ActivityKind.IMAGE] = ActivityKind.IMAGE
    img_url: str | None = None
    img_title: str | None = None
    description_title: str | None = None
    description: str | None = None
    alt: str | None = None
    position: str = "center"


ActivityDetail = Annotated[
    Union[
        ReadingDetail,
        ReadingAddonDetail,
        SubReadingDetail,
        SourceDetail,
        InTextSourceDetail,
        QuestionDetail,
        GraphicOrganizerDetail,
        VocabularyDetail,
        ImageDetail,
    ],
    Field(discriminator="type"),
]


class LessonActivities(BaseModel):
    """Complete activity content of one lesson."""

    lesson_id: str
    activities: list[ActivityRecord] = Field(default_factory=list)
    activity_types: dict[str, list[ActivityTypeRef]] = Field(default_factory=dict)
    details: dict[str, ActivityDetail] = Field(default_factory=dict)


class SaveLessonActivitiesRequest(BaseModel):
    """Body of a lesson save: the editor's in-memory state, in display order."""

    activities: list[ActivityRecord] = Field(default_factory=list)
    activity_types: dict[str, list[ActivityTypeRef]] = Field(default_factory=dict)
    details: dict[str, ActivityDetail] = Field(default_factory=dict)


class DetailValidationErrorResponse(BaseModel):
    """Validation messages keyed by activity type id."""

    detail: str = "Activity content is incomplete"
    errors: dict[str, list[str]]
