# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for activity content validation and ordering helpers."""

import pytest

from src.domains.activity.kinds import KIND_HANDLERS, get_handler
from src.domains.activity.ordering import order_or_position, renumber, sort_key
from src.domains.activity.validation import (
    DUPLICATE_VOCABULARY_MESSAGE,
    validate_detail,
    validate_details,
)
from src.models.activity import (
    ActivityKind,
    ActivityTypeRef,
    AnswerOption,
    ImageDetail,
    QuestionDetail,
    ReadingDetail,
    SourceDetail,
    VocabularyDetail,
    VocabularyItem,
)


def _options(*flags: bool) -> list[AnswerOption]:
    return [AnswerOption(text=f"Option {i}", is_correct=flag) for i, flag in enumerate(flags)]


class TestOrdering:
    def test_renumber_uses_list_position(self) -> None:
        options = [AnswerOption(text="b", order=9), AnswerOption(text="a", order=2)]

        result = renumber(options, start=0)

        assert [(o.text, o.order) for o in result] == [("b", 0), ("a", 1)]
        assert options[0].order == 9

    def test_renumber_custom_field_and_start(self) -> None:
        items = [VocabularyItem(word="x"), VocabularyItem(word="y")]

        result = renumber(items, start=1, field="vocab_order")

        assert [item.vocab_order for item in result] == [1, 2]

    def test_order_or_position(self) -> None:
        assert order_or_position(None, 3) == 3
        assert order_or_position(0, 3) == 0

    def test_sort_key_places_missing_last(self) -> None:
        assert sorted([None, 2, 0], key=sort_key) == [0, 2, None]


class TestQuestionValidation:
    def test_open_ended_passes(self) -> None:
        assert validate_detail(ActivityKind.QUESTION, QuestionDetail(question_type="Open Ended")) == []

    def test_missing_type(self) -> None:
        detail = QuestionDetail(question_type=" ")

        assert validate_detail(ActivityKind.QUESTION, detail) == ["Please select a question type."]

    def test_multiple_choice_needs_two_options_and_a_correct_one(self) -> None:
        detail = QuestionDetail(question_type="Multiple Choice", answer_options=_options(False))

        errors = validate_detail(ActivityKind.QUESTION, detail)

        assert errors == [
            "Multiple Choice questions must have at least 2 answer options.",
            "Please select at least one correct answer for the Multiple Choice question.",
        ]

    def test_blank_option_text(self) -> None:
        options = _options(True, False)
        options[1] = options[1].model_copy(update={"text": "  "})
        detail = QuestionDetail(question_type="Multiple Choice", answer_options=options)

        assert validate_detail(ActivityKind.QUESTION, detail) == ["All answer options must have text."]

    def test_multiple_select_needs_two_correct(self) -> None:
        detail = QuestionDetail(question_type="Multiple Select", answer_options=_options(True, False, False))

        assert validate_detail(ActivityKind.QUESTION, detail) == [
            "Multiple Select questions must have at least 2 correct answers."
        ]

    def test_multiple_select_with_two_correct_passes(self) -> None:
        detail = QuestionDetail(question_type="Multiple Select", answer_options=_options(True, True, False))

        assert validate_detail(ActivityKind.QUESTION, detail) == []

    def test_part_b_required(self) -> None:
        detail = QuestionDetail(question_type="Part A Part B Question", part_b="")

        assert validate_detail(ActivityKind.QUESTION, detail) == ["Please enter the Part B question."]


class TestOtherKinds:
    def test_image_requires_url(self) -> None:
        assert validate_detail(ActivityKind.IMAGE, ImageDetail()) == [
            "Please upload an image before saving."
        ]
        assert validate_detail(ActivityKind.IMAGE, ImageDetail(img_url="slides/a.png")) == []

    def test_vocabulary_requires_complete_words(self) -> None:
        assert validate_detail(ActivityKind.VOCABULARY, VocabularyDetail()) == [
            "Please add at least one vocabulary word."
        ]
        incomplete = VocabularyDetail(items=[VocabularyItem(word="delta", definition="")])
        assert validate_detail(ActivityKind.VOCABULARY, incomplete) == [
            "Every vocabulary item needs a word and a definition."
        ]

    def test_reading_requires_text(self) -> None:
        assert validate_detail(ActivityKind.READING, ReadingDetail(reading_title="Only a title")) == [
            "Please enter the reading text."
        ]

    def test_kinds_without_rules_pass(self) -> None:
        assert validate_detail(ActivityKind.SOURCE, SourceDetail()) == []


class TestValidateDetails:
    def test_collects_failures_by_child_id(self) -> None:
        children = {
            "a1": [
                ActivityTypeRef(id="r1", activity_id="a1", type=ActivityKind.READING),
                ActivityTypeRef(id="i1", activity_id="a1", type=ActivityKind.IMAGE),
                ActivityTypeRef(id="gone", activity_id="a1", type=ActivityKind.SOURCE),
            ]
        }
        details = {
            "r1": ReadingDetail(reading_text="Text"),
            "i1": ImageDetail(),
        }

        assert validate_details(children, details) == {
            "i1": ["Please upload an image before saving."]
        }

    def test_detail_of_another_kind_is_rejected(self) -> None:
        children = {"a1": [ActivityTypeRef(id="x", activity_id="a1", type=ActivityKind.QUESTION)]}
        details = {"x": ReadingDetail(reading_text="Text")}

        errors = validate_details(children, details)

        assert errors == {"x": ["Content of type reading cannot be saved as question."]}

    def test_second_vocabulary_list_is_rejected(self) -> None:
        words = [VocabularyItem(word="delta", definition="Land at a river mouth")]
        children = {
            "a1": [
                ActivityTypeRef(id="v1", activity_id="a1", type=ActivityKind.VOCABULARY),
                ActivityTypeRef(id="v2", activity_id="a1", type=ActivityKind.VOCABULARY),
            ],
            "a2": [ActivityTypeRef(id="v3", activity_id="a2", type=ActivityKind.VOCABULARY)],
        }
        details = {key: VocabularyDetail(items=words) for key in ("v1", "v2", "v3")}

        errors = validate_details(children, details)

        assert errors == {"v2": [DUPLICATE_VOCABULARY_MESSAGE]}


class TestKindRegistry:
    def test_every_kind_has_a_handler(self) -> None:
        assert set(KIND_HANDLERS) == set(ActivityKind)

    @pytest.mark.parametrize(
        ("kind", "table"),
        [
            (ActivityKind.READING, "readings"),
            (ActivityKind.READING_ADDON, "readings_addon"),
            (ActivityKind.IN_TEXT_SOURCE, "in_text_source"),
            (ActivityKind.GRAPHIC_ORGANIZER, "graphic_organizers"),
            (ActivityKind.IMAGE, "images"),
        ],
    )
    def test_table_handlers_map_to_tables(self, kind: ActivityKind, table: str) -> None:
        assert get_handler(kind).model.__tablename__ == table
