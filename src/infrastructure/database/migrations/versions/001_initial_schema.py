# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial schema.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2025-03-10
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_pk(name: str) -> sa.Column:
    return sa.Column(
        name,
        postgresql.UUID(as_uuid=False),
        server_default=sa.text("gen_random_uuid()"),
        primary_key=True,
    )


def _uuid_fk(name: str, target: str, ondelete: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        postgresql.UUID(as_uuid=False),
        sa.ForeignKey(target, ondelete=ondelete),
        nullable=nullable,
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def _published() -> sa.Column:
    return sa.Column("published", sa.String(3), nullable=False, server_default="No")


def _activity_child(table: str, pk: str, fk: str, *columns: sa.Column) -> None:
    op.create_table(
        table,
        _uuid_pk(pk),
        _uuid_fk(fk, "activities.activity_id", "CASCADE"),
        *columns,
        sa.Column("order", sa.Integer, nullable=True),
        _published(),
    )
    op.create_index(f"ix_{table}_{fk}", table, [fk])


def upgrade() -> None:
    """Create all tables."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # =========================================================================
    # USERS
    # =========================================================================

    op.create_table(
        "users",
        _uuid_pk("id"),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    # =========================================================================
    # CURRICULUM
    # =========================================================================

    op.create_table(
        "subjects",
        _uuid_pk("subject_id"),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("curriculum_title", sa.String(255), nullable=True),
        sa.Column("curriculum_description", sa.Text, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "units",
        _uuid_pk("unit_id"),
        _uuid_fk("subject_id", "subjects.subject_id", "CASCADE"),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("unit_title", sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_units_subject_id", "units", ["subject_id"])

    op.create_table(
        "chapters",
        _uuid_pk("chapter_id"),
        _uuid_fk("unit_id", "units.unit_id", "CASCADE"),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_chapters_unit_id", "chapters", ["unit_id"])

    op.create_table(
        "lessons",
        _uuid_pk("lesson_id"),
        _uuid_fk("chapter_id", "chapters.chapter_id", "CASCADE"),
        _uuid_fk("subject_id", "subjects.subject_id", "SET NULL", nullable=True),
        sa.Column("lesson_name", sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_lessons_chapter_id", "lessons", ["chapter_id"])

    # =========================================================================
    # ACTIVITIES
    # =========================================================================

    op.create_table(
        "activities",
        _uuid_pk("activity_id"),
        _uuid_fk("lesson_id", "lessons.lesson_id", "CASCADE"),
        sa.Column("order", sa.Integer, nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        _published(),
        *_timestamps(),
    )
    op.create_index("ix_activities_lesson_id", "activities", ["lesson_id"])

    _activity_child(
        "readings",
        "reading_id",
        "activity_id",
        sa.Column("reading_title", sa.String(500), nullable=True),
        sa.Column("reaing_text", sa.Text, nullable=True),
    )
    _activity_child(
        "readings_addon",
        "reading_id",
        "activity_id",
        sa.Column("reaing_text", sa.Text, nullable=True),
    )
    _activity_child(
        "sub_readings",
        "reading_id",
        "activity_id",
        sa.Column("reading_title", sa.String(500), nullable=True),
        sa.Column("reaing_text", sa.Text, nullable=True),
    )
    _activity_child(
        "sources",
        "source_id",
        "activity_id",
        sa.Column("source_title_ce", sa.String(500), nullable=True),
        sa.Column("source_title_ad", sa.String(500), nullable=True),
        sa.Column("source_text", sa.Text, nullable=True),
        sa.Column("source_image", sa.Text, nullable=True),
        sa.Column("source_image_description", sa.Text, nullable=True),
    )
    _activity_child(
        "in_text_source",
        "in_text_source_id",
        "actvity_id",
        sa.Column("source_title_ad", sa.String(500), nullable=True),
        sa.Column("source_title_ce", sa.String(500), nullable=True),
        sa.Column("source_intro", sa.Text, nullable=True),
        sa.Column("source_text", sa.Text, nullable=True),
    )
    _activity_child(
        "questions",
        "question_id",
        "activity_id",
        sa.Column("question", sa.Text, nullable=True),
        sa.Column("question_text", sa.Text, nullable=True),
        sa.Column("question_title", sa.String(500), nullable=True),
        sa.Column("question_type", sa.String(50), nullable=False, server_default="Open Ended"),
    )
    _activity_child(
        "graphic_organizers",
        "go_id",
        "activity_id",
        sa.Column("template_type", sa.String(100), nullable=True),
        sa.Column("content", postgresql.JSONB, nullable=True),
    )
    _activity_child(
        "vocabulary",
        "vocabulary_id",
        "activity_id",
        sa.Column("word", sa.String(255), nullable=False, server_default=""),
        sa.Column("definition", sa.Text, nullable=False, server_default=""),
        sa.Column("vocab_order", sa.Integer, nullable=True),
    )
    _activity_child(
        "images",
        "image_id",
        "activity_id",
        sa.Column("img_url", sa.Text, nullable=True),
        sa.Column("img_title", sa.String(500), nullable=True),
        sa.Column("description_title", sa.String(500), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("alt", sa.Text, nullable=True),
        sa.Column("position", sa.String(20), nullable=False, server_default="center"),
    )

    op.create_table(
        "questions_partb",
        sa.Column(
            "part_a_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("questions.question_id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("question_text", sa.Text, nullable=True),
    )

    op.create_table(
        "question_choices",
        _uuid_pk("question_choices_id"),
        _uuid_fk("question_id", "questions.question_id", "CASCADE"),
        sa.Column("choice_text", sa.Text, nullable=False, server_default=""),
        sa.Column("is_correct", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("order", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_question_choices_question_id", "question_choices", ["question_id"])

    # =========================================================================
    # LESSON PLANS
    # =========================================================================

    op.create_table(
        "lesson_plans",
        _uuid_pk("lesson_plan_id"),
        sa.Column(
            "lesson_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("lessons.lesson_id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        _uuid_fk("subject_id", "subjects.subject_id", "SET NULL", nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "lp_section_names",
        _uuid_pk("lp_section_name_id"),
        sa.Column("section_name", sa.String(255), nullable=False, unique=True),
    )

    op.create_table(
        "lp_focus",
        _uuid_pk("lp_focus_id"),
        sa.Column("lp_focus", sa.String(255), nullable=False, unique=True),
    )

    op.create_table(
        "lp_sections",
        _uuid_pk("lp_sections_id"),
        _uuid_fk("lessone_plan_id", "lesson_plans.lesson_plan_id", "CASCADE"),
        _uuid_fk(
            "lp_section_names_id",
            "lp_section_names.lp_section_name_id",
            "SET NULL",
            nullable=True,
        ),
        sa.Column("order", sa.Integer, nullable=False, server_default="1"),
        _published(),
    )
    op.create_index("ix_lp_sections_lessone_plan_id", "lp_sections", ["lessone_plan_id"])

    op.create_table(
        "lp_directions",
        _uuid_pk("lp_directions_id"),
        _uuid_fk("lesson_plan_id", "lesson_plans.lesson_plan_id", "CASCADE"),
        _uuid_fk("lp_sections_id", "lp_sections.lp_sections_id", "CASCADE"),
        _uuid_fk("lp_focus_id", "lp_focus.lp_focus_id", "SET NULL", nullable=True),
        _uuid_fk("activity_id", "activities.activity_id", "SET NULL", nullable=True),
        sa.Column("time", sa.Integer, nullable=True),
        sa.Column("directions", sa.Text, nullable=True),
        sa.Column("slide_image", sa.Text, nullable=True),
        sa.Column("alt", sa.Text, nullable=True),
        sa.Column("support", sa.Text, nullable=True),
        sa.Column("answers", sa.Text, nullable=True),
        sa.Column("order", sa.Integer, nullable=False, server_default="1"),
        _published(),
    )
    op.create_index("ix_lp_directions_lesson_plan_id", "lp_directions", ["lesson_plan_id"])
    op.create_index("ix_lp_directions_lp_sections_id", "lp_directions", ["lp_sections_id"])

    # =========================================================================
    # ORGANIZATION
    # =========================================================================

    op.create_table(
        "districts",
        _uuid_pk("district_id"),
        sa.Column("district_name", sa.String(255), nullable=False),
        sa.Column("domain", sa.String(255), nullable=False),
        sa.Column("student_domain", sa.String(255), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "schools",
        _uuid_pk("school_id"),
        sa.Column("school_name", sa.String(255), nullable=False),
        _uuid_fk("district_id", "districts.district_id", "CASCADE"),
        *_timestamps(),
    )
    op.create_index("ix_schools_district_id", "schools", ["district_id"])

    op.create_table(
        "academic_years",
        _uuid_pk("academic_year_id"),
        sa.Column("year_range", sa.String(50), nullable=False),
        sa.Column("expiry_date", sa.Date, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "site_settings",
        _uuid_pk("id"),
        _uuid_fk(
            "academic_year_id",
            "academic_years.academic_year_id",
            "SET NULL",
            nullable=True,
        ),
    )

    op.create_table(
        "subscriptions",
        _uuid_pk("id"),
        _uuid_fk("district_id", "districts.district_id", "CASCADE"),
        _uuid_fk(
            "academic_year_id",
            "academic_years.academic_year_id",
            "SET NULL",
            nullable=True,
        ),
        sa.Column("district", sa.Integer, nullable=False, server_default="0"),
        sa.Column("school", sa.Integer, nullable=False, server_default="0"),
        sa.Column("teachers", sa.Integer, nullable=False, server_default="0"),
        sa.Column("students", sa.Integer, nullable=False, server_default="0"),
        sa.Column("paid", sa.String(3), nullable=False, server_default="No"),
        *_timestamps(),
    )
    op.create_index("ix_subscriptions_district_id", "subscriptions", ["district_id"])

    # =========================================================================
    # PROFILES AND REGISTRATIONS
    # =========================================================================

    op.create_table(
        "user_information",
        _uuid_pk("id"),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("firstName", sa.String(255), nullable=True),
        sa.Column("lastName", sa.String(255), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="student"),
        *_timestamps(),
    )

    op.create_table(
        "school_registration",
        _uuid_pk("id"),
        _uuid_fk("user_id", "users.id", "CASCADE"),
        _uuid_fk("school_id", "schools.school_id", "CASCADE"),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "school_id"),
    )
    op.create_index("ix_school_registration_user_id", "school_registration", ["user_id"])

    op.create_table(
        "district_registration",
        _uuid_pk("id"),
        _uuid_fk("user_id", "users.id", "CASCADE"),
        _uuid_fk("district_id", "districts.district_id", "CASCADE"),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "district_id"),
    )
    op.create_index("ix_district_registration_user_id", "district_registration", ["user_id"])

    # =========================================================================
    # INVITATION CODES
    # =========================================================================

    op.create_table(
        "invitation_codes",
        _uuid_pk("invitation_code_id"),
        sa.Column("invitation_code", sa.String(16), nullable=False, unique=True),
        sa.Column("role", sa.String(20), nullable=False),
        _uuid_fk("subject_id", "subjects.subject_id", "SET NULL", nullable=True),
        _uuid_fk("district_id", "districts.district_id", "CASCADE", nullable=True),
        _uuid_fk("school_id", "schools.school_id", "SET NULL", nullable=True),
        _uuid_fk("academic_year_id", "academic_years.academic_year_id", "RESTRICT"),
        sa.Column("number_of_uses", sa.Integer, nullable=True),
        sa.Column("code_type", sa.String(20), nullable=False, server_default="admin"),
        _uuid_fk("created_by", "users.id", "SET NULL", nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_invitation_codes_district_id", "invitation_codes", ["district_id"])

    op.create_table(
        "invitation_code_uses",
        _uuid_pk("id"),
        _uuid_fk(
            "invitation_code_id",
            "invitation_codes.invitation_code_id",
            "RESTRICT",
        ),
        _uuid_fk("user_id", "users.id", "CASCADE"),
        *_timestamps(),
    )
    op.create_index(
        "ix_invitation_code_uses_invitation_code_id",
        "invitation_code_uses",
        ["invitation_code_id"],
    )


def downgrade() -> None:
    """Drop all tables."""
    # Reverse order to satisfy foreign keys
    for table in (
        "invitation_code_uses",
        "invitation_codes",
        "district_registration",
        "school_registration",
        "user_information",
        "subscriptions",
        "site_settings",
        "academic_years",
        "schools",
        "districts",
        "lp_directions",
        "lp_sections",
        "lp_focus",
        "lp_section_names",
        "lesson_plans",
        "question_choices",
        "questions_partb",
        "images",
        "vocabulary",
        "graphic_organizers",
        "questions",
        "in_text_source",
        "sources",
        "sub_readings",
        "readings_addon",
        "readings",
        "activities",
        "lessons",
        "chapters",
        "units",
        "subjects",
        "users",
    ):
        op.drop_table(table)
