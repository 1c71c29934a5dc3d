# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models.

Importing this package registers every table on ``Base.metadata``.
"""

from src.infrastructure.database.models.activity import (
    Activity,
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
)
from src.infrastructure.database.models.base import (
    PUBLISHED_NO,
    PUBLISHED_YES,
    Base,
    TimestampMixin,
    new_uuid,
)
from src.infrastructure.database.models.curriculum import Chapter, Lesson, Subject, Unit
from src.infrastructure.database.models.invitation import InvitationCode, InvitationCodeUse
from src.infrastructure.database.models.lesson_plan import (
    Direction,
    Focus,
    LessonPlan,
    Section,
    SectionName,
)
from src.infrastructure.database.models.organization import (
    AcademicYear,
    District,
    School,
    SiteSetting,
    Subscription,
)
from src.infrastructure.database.models.user import (
    DistrictRegistration,
    SchoolRegistration,
    User,
    UserInformation,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "new_uuid",
    "PUBLISHED_YES",
    "PUBLISHED_NO",
    # Curriculum
    "Subject",
    "Unit",
    "Chapter",
    "Lesson",
    # Activities
    "Activity",
    "Reading",
    "ReadingAddon",
    "SubReading",
    "Source",
    "InTextSource",
    "Question",
    "QuestionPartB",
    "QuestionChoice",
    "GraphicOrganizer",
    "Vocabulary",
    "Image",
    # Lesson plans
    "LessonPlan",
    "SectionName",
    "Focus",
    "Section",
    "Direction",
    # Organization
    "District",
    "School",
    "AcademicYear",
    "SiteSetting",
    "Subscription",
    # Invitations
    "InvitationCode",
    "InvitationCodeUse",
    # Users
    "User",
    "UserInformation",
    "SchoolRegistration",
    "DistrictRegistration",
]
