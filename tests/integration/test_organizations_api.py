# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for district, school and curriculum endpoints."""

from typing import Callable
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from src.domains.curriculum import CurriculumNotFoundError
from src.domains.school import DistrictInUseError, DistrictNotFoundError
from src.models.curriculum import LessonResponse
from src.models.organization import DistrictDomainsResponse, SchoolResponse


@pytest.fixture
def organizations():
    service = MagicMock()
    service.list_schools = AsyncMock()
    service.get_district_domains = AsyncMock()
    service.create_district = AsyncMock()
    service.delete_district = AsyncMock()
    with (
        patch("src.api.v1.schools._get_service", return_value=service),
        patch("src.api.v1.districts._get_service", return_value=service),
    ):
        yield service


@pytest.fixture
def curriculum():
    service = MagicMock()
    service.get_lesson_by_slug = AsyncMock()
    service.create_subject = AsyncMock()
    with patch("src.api.v1.curriculum._get_service", return_value=service):
        yield service


class TestSignUpLookups:
    """The sign-up form reads these before an account exists."""

    def test_school_list_is_public(self, client: TestClient, organizations: MagicMock) -> None:
        organizations.list_schools.return_value = [
            SchoolResponse(school_id="s1", school_name="Elementary", district_id="d1")
        ]

        response = client.get("/api/v1/schools", params={"district_id": "d1"})

        assert response.status_code == 200
        assert response.json()[0]["school_name"] == "Elementary"
        organizations.list_schools.assert_awaited_once_with(district_id="d1")

    def test_district_domains_are_public(
        self, client: TestClient, organizations: MagicMock
    ) -> None:
        organizations.get_district_domains.return_value = DistrictDomainsResponse(
            district_id="d1", allowed_domains=["springfield.k12.us"]
        )

        response = client.get("/api/v1/districts/d1/domains")

        assert response.json()["allowed_domains"] == ["springfield.k12.us"]

    def test_unknown_district_domains(
        self, client: TestClient, organizations: MagicMock
    ) -> None:
        organizations.get_district_domains.side_effect = DistrictNotFoundError(
            "District d9 not found"
        )

        assert client.get("/api/v1/districts/d9/domains").status_code == 404


class TestDistrictAdmin:
    def test_create_requires_admin(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        organizations: MagicMock,
    ) -> None:
        response = client.post(
            "/api/v1/districts",
            json={"district_name": "Springfield", "domain": "springfield.k12.us"},
            headers=auth_headers("teacher"),
        )

        assert response.status_code == 403
        organizations.create_district.assert_not_awaited()

    def test_delete_with_schools_conflicts(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        organizations: MagicMock,
    ) -> None:
        organizations.delete_district.side_effect = DistrictInUseError(
            "Cannot delete district with 2 schools"
        )

        response = client.delete("/api/v1/districts/d1", headers=auth_headers("admin"))

        assert response.status_code == 409


class TestCurriculum:
    def test_reads_require_sign_in(self, client: TestClient, curriculum: MagicMock) -> None:
        response = client.get("/api/v1/curriculum/subjects/by-slug/history/lessons/rome")

        assert response.status_code == 401

    def test_lesson_by_slugs(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        curriculum: MagicMock,
    ) -> None:
        curriculum.get_lesson_by_slug.return_value = LessonResponse(
            lesson_id="l1", chapter_id="c1", lesson_name="The Nile Floods", slug="the-nile-floods"
        )

        response = client.get(
            "/api/v1/curriculum/subjects/by-slug/world-history/lessons/the-nile-floods",
            headers=auth_headers("student"),
        )

        assert response.status_code == 200
        assert response.json()["slug"] == "the-nile-floods"
        curriculum.get_lesson_by_slug.assert_awaited_once_with("world-history", "the-nile-floods")

    def test_missing_lesson(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        curriculum: MagicMock,
    ) -> None:
        curriculum.get_lesson_by_slug.side_effect = CurriculumNotFoundError("Lesson x not found")

        response = client.get(
            "/api/v1/curriculum/subjects/by-slug/world-history/lessons/x",
            headers=auth_headers(),
        )

        assert response.status_code == 404

    def test_students_cannot_edit(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        curriculum: MagicMock,
    ) -> None:
        response = client.post(
            "/api/v1/curriculum/subjects",
            json={"name": "Art"},
            headers=auth_headers("student"),
        )

        assert response.status_code == 403
