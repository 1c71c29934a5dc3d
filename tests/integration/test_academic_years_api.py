# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for academic year and site settings endpoints."""

from datetime import date
from typing import Callable
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from src.domains.academic_year import AcademicYearInUseError, AcademicYearNotFoundError
from src.models.organization import AcademicYearResponse, SiteSettingsResponse

YEAR = AcademicYearResponse(
    academic_year_id="year-1",
    year_range="2025-2026",
    expiry_date=date(2026, 6, 30),
    is_current=True,
)


@pytest.fixture
def mock_service() -> MagicMock:
    service = MagicMock()
    for name in (
        "create_academic_year",
        "list_academic_years",
        "get_academic_year",
        "update_academic_year",
        "delete_academic_year",
        "set_current_year",
        "get_site_settings",
    ):
        setattr(service, name, AsyncMock())
    return service


@pytest.fixture
def patched(mock_service: MagicMock):
    with patch("src.api.v1.academic_years._get_service", return_value=mock_service):
        yield mock_service


class TestAcademicYears:
    def test_list_for_any_user(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        patched: MagicMock,
    ) -> None:
        patched.list_academic_years.return_value = ([YEAR], 1)

        response = client.get("/api/v1/academic-years", headers=auth_headers("student"))

        assert response.status_code == 200
        assert response.json()["total"] == 1
        assert response.json()["items"][0]["year_range"] == "2025-2026"

    def test_create_requires_admin(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        patched: MagicMock,
    ) -> None:
        response = client.post(
            "/api/v1/academic-years",
            json={"year_range": "2026-2027"},
            headers=auth_headers("teacher"),
        )

        assert response.status_code == 403
        patched.create_academic_year.assert_not_awaited()

    def test_create(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        patched: MagicMock,
    ) -> None:
        patched.create_academic_year.return_value = YEAR

        response = client.post(
            "/api/v1/academic-years",
            json={"year_range": "2025-2026", "expiry_date": "2026-06-30"},
            headers=auth_headers("admin"),
        )

        assert response.status_code == 201
        request = patched.create_academic_year.await_args.kwargs["request"]
        assert request.expiry_date == date(2026, 6, 30)

    def test_get_missing(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        patched: MagicMock,
    ) -> None:
        patched.get_academic_year.side_effect = AcademicYearNotFoundError("missing")

        response = client.get("/api/v1/academic-years/nope", headers=auth_headers())

        assert response.status_code == 404

    def test_delete_in_use_conflicts(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        patched: MagicMock,
    ) -> None:
        patched.delete_academic_year.side_effect = AcademicYearInUseError(
            "Academic year is used by 3 invitation codes"
        )

        response = client.delete("/api/v1/academic-years/year-1", headers=auth_headers("admin"))

        assert response.status_code == 409
        assert "3 invitation codes" in response.json()["detail"]

    def test_set_current(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        patched: MagicMock,
    ) -> None:
        patched.set_current_year.return_value = SiteSettingsResponse(
            academic_year_id="year-1", academic_year=YEAR
        )

        response = client.post(
            "/api/v1/academic-years/year-1/set-current", headers=auth_headers("admin")
        )

        assert response.status_code == 200
        assert response.json()["academic_year"]["is_current"] is True
        patched.set_current_year.assert_awaited_once_with("year-1")


class TestSiteSettings:
    @pytest.fixture
    def site_service(self, mock_service: MagicMock):
        with patch("src.api.v1.site_settings.AcademicYearService", return_value=mock_service):
            yield mock_service

    def test_get(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        site_service: MagicMock,
    ) -> None:
        site_service.get_site_settings.return_value = SiteSettingsResponse()

        response = client.get("/api/v1/site-settings", headers=auth_headers("teacher"))

        assert response.status_code == 200
        assert response.json() == {"academic_year_id": None, "academic_year": None}

    def test_update_requires_admin(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        site_service: MagicMock,
    ) -> None:
        response = client.put(
            "/api/v1/site-settings",
            json={"academic_year_id": "year-1"},
            headers=auth_headers("teacher"),
        )

        assert response.status_code == 403

    def test_update_unknown_year(
        self,
        client: TestClient,
        auth_headers: Callable[..., dict[str, str]],
        site_service: MagicMock,
    ) -> None:
        site_service.set_current_year.side_effect = AcademicYearNotFoundError("missing")

        response = client.put(
            "/api/v1/site-settings",
            json={"academic_year_id": "nope"},
            headers=auth_headers("admin"),
        )

        assert response.status_code == 404
