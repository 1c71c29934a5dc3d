# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Content checks run on activity details before they are saved.

Each check returns the list of messages for one detail; an empty list
means the detail can be saved. Messages are shown to editors verbatim.
"""

from typing import Callable

from src.models.activity import (
    ActivityKind,
    DetailBase,
    GraphicOrganizerDetail,
    ImageDetail,
    QuestionDetail,
    QuestionType,
    ReadingDetail,
    SubReadingDetail,
    VocabularyDetail,
)


DUPLICATE_VOCABULARY_MESSAGE = (
    "An activity can only have one vocabulary list. Add the words to the existing list."
)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_question(detail: QuestionDetail) -> list[str]:
    errors: list[str] = []
    if _blank(detail.question_type):
        return ["Please select a question type."]

    if detail.has_choices:
        options = detail.answer_options
        if len(options) < 2:
            errors.append(f"{detail.question_type} questions must have at least 2 answer options.")
        if any(_blank(option.text) for option in options):
            errors.append("All answer options must have text.")

        correct = sum(1 for option in options if option.is_correct)
        if correct == 0:
            errors.append(
                f"Please select at least one correct answer for the {detail.question_type} question."
            )
        elif detail.question_type == QuestionType.MULTIPLE_SELECT.value and correct < 2:
            errors.append("Multiple Select questions must have at least 2 correct answers.")

    if detail.has_part_b and _blank(detail.part_b):
        errors.append("Please enter the Part B question.")
    return errors


def validate_image(detail: ImageDetail) -> list[str]:
    if _blank(detail.img_url):
        return ["Please upload an image before saving."]
    return []


def validate_vocabulary(detail: VocabularyDetail) -> list[str]:
    if not detail.items:
        return ["Please add at least one vocabulary word."]
    if any(_blank(item.word) or _blank(item.definition) for item in detail.items):
        return ["Every vocabulary item needs a word and a definition."]
    return []


def validate_reading(detail: ReadingDetail | SubReadingDetail) -> list[str]:
    if _blank(detail.reading_text):
        return ["Please enter the reading text."]
    return []


def validate_graphic_organizer(detail: GraphicOrganizerDetail) -> list[str]:
    if _blank(detail.template_type):
        return ["Please choose a graphic organizer template."]
    return []


VALIDATORS: dict[ActivityKind, Callable[..., list[str]]] = {
    ActivityKind.QUESTION: validate_question,
    ActivityKind.IMAGE: validate_image,
    ActivityKind.VOCABULARY: validate_vocabulary,
    ActivityKind.READING: validate_reading,
    ActivityKind.SUB_READING: validate_reading,
    ActivityKind.GRAPHIC_ORGANIZER: validate_graphic_organizer,
}


def validate_detail(kind: ActivityKind, detail: DetailBase) -> list[str]:
    """Messages for one detail; kinds without required fields always pass."""
    validator = VALIDATORS.get(kind)
    if validator is None:
        return []
    return validator(detail)


def validate_details(
    children: dict[str, list],
    details: dict[str, DetailBase],
) -> dict[str, list[str]]:
    """Validate every detail referenced by the activity children.

    A second vocabulary child of the same activity is rejected, since
    the words of an activity are stored as one list.

    Args:
        children: Activity id to its ``ActivityTypeRef`` list.
        details: Child id to detail.

    Returns:
        Messages keyed by child id; only failing children are present.
    """
    errors: dict[str, list[str]] = {}
    for refs in children.values():
        has_vocabulary = False
        for ref in refs:
            detail = details.get(ref.id)
            if detail is None:
                continue
            if ref.type == ActivityKind.VOCABULARY:
                if has_vocabulary:
                    errors[ref.id] = [DUPLICATE_VOCABULARY_MESSAGE]
                    continue
                has_vocabulary = True
            if detail.type != ref.type:
                errors[ref.id] = [f"Content of type {detail.type.value} cannot be saved as {ref.type.value}."]
                continue
            messages = validate_detail(ref.type, detail)
            if messages:
                errors[ref.id] = messages
    return errors
