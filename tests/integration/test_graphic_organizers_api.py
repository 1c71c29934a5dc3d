# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the table organizer endpoint."""

from typing import Callable

from fastapi.testclient import TestClient

URL = "/api/v1/graphic-organizers/table"


def test_requires_staff(client: TestClient, auth_headers: Callable[..., dict[str, str]]) -> None:
    body = {"rows": 1, "columns": 1}

    assert client.post(URL, json=body).status_code == 401
    assert client.post(URL, json=body, headers=auth_headers("student")).status_code == 403


def test_builds_table(client: TestClient, auth_headers: Callable[..., dict[str, str]]) -> None:
    response = client.post(
        URL,
        json={
            "rows": 2,
            "columns": 2,
            "cells": [["Cause", "Effect"], ["Rain", "Floods"]],
            "header_cells": [{"row": 0, "col": 0}, {"row": 0, "col": 1}],
            "answer_cells": [{"row": 1, "col": 1}],
        },
        headers=auth_headers("teacher"),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["template_type"] == "table"
    assert body["content"]


def test_out_of_range_dimensions(
    client: TestClient, auth_headers: Callable[..., dict[str, str]]
) -> None:
    response = client.post(
        URL, json={"rows": 0, "columns": 3}, headers=auth_headers("admin")
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "Rows must be between 1 and 50"


def test_cell_outside_table(
    client: TestClient, auth_headers: Callable[..., dict[str, str]]
) -> None:
    response = client.post(
        URL,
        json={"rows": 2, "columns": 2, "answer_cells": [{"row": 5, "col": 0}]},
        headers=auth_headers("admin"),
    )

    assert response.status_code == 422
    assert "outside the table" in response.json()["detail"]
