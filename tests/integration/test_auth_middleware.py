# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the authentication middleware and role dependencies.

Tests the middleware components in isolation from database.
"""

from uuid import uuid4

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from src.api.dependencies import require_admin, require_auth, require_staff
from src.api.middleware.auth import AuthMiddleware, CurrentUser, get_current_user
from src.api.middleware.context import RequestContextMiddleware
from src.core.config.settings import JWTSettings
from src.domains.auth.jwt import JWTManager


@pytest.fixture
def jwt_manager(jwt_settings: JWTSettings) -> JWTManager:
    """Create JWT manager with test settings."""
    return JWTManager(jwt_settings)


@pytest.fixture
def app(jwt_manager: JWTManager) -> FastAPI:
    """App with the auth middleware and one endpoint per access level."""
    app = FastAPI()
    app.add_middleware(AuthMiddleware, jwt_manager=jwt_manager)
    app.add_middleware(RequestContextMiddleware)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.get("/api/v1/whoami")
    async def whoami(request: Request) -> dict:
        user = get_current_user(request)
        return {"user_id": user.id if user else None, "role": user.role if user else None}

    @app.get("/api/v1/private")
    async def private(user: CurrentUser = Depends(require_auth)) -> dict:
        return {"user_id": user.id}

    @app.get("/api/v1/staff")
    async def staff(user: CurrentUser = Depends(require_staff)) -> dict:
        return {"role": user.role}

    @app.get("/api/v1/admin")
    async def admin(user: CurrentUser = Depends(require_admin)) -> dict:
        return {"role": user.role}

    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)


def _bearer(jwt_manager: JWTManager, role: str, user_id: str | None = None) -> dict[str, str]:
    token = jwt_manager.create_access_token(user_id or str(uuid4()), role, f"{role}@example.org")
    return {"Authorization": f"Bearer {token}"}


class TestAuthMiddleware:
    """Tests for AuthMiddleware."""

    def test_public_path_bypasses_auth(self, client: TestClient) -> None:
        response = client.get("/health", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 200

    def test_valid_token_sets_user(self, client: TestClient, jwt_manager: JWTManager) -> None:
        user_id = str(uuid4())

        response = client.get("/api/v1/whoami", headers=_bearer(jwt_manager, "teacher", user_id))

        assert response.status_code == 200
        assert response.json() == {"user_id": user_id, "role": "teacher"}

    def test_no_token_sets_user_none(self, client: TestClient) -> None:
        response = client.get("/api/v1/whoami")

        assert response.status_code == 200
        assert response.json()["user_id"] is None

    @pytest.mark.parametrize(
        "header",
        ["Bearer invalid-token", "Basic dXNlcjpwYXNz", "Bearer"],
    )
    def test_unusable_header_sets_user_none(self, client: TestClient, header: str) -> None:
        response = client.get("/api/v1/whoami", headers={"Authorization": header})

        assert response.json()["user_id"] is None

    def test_refresh_token_is_not_accepted(
        self, client: TestClient, jwt_manager: JWTManager
    ) -> None:
        tokens = jwt_manager.create_token_pair(str(uuid4()), "admin", "admin@example.org")

        response = client.get(
            "/api/v1/whoami",
            headers={"Authorization": f"Bearer {tokens.refresh_token}"},
        )

        assert response.json()["user_id"] is None

    def test_request_id_is_echoed(self, client: TestClient) -> None:
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_is_generated(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.headers["X-Request-ID"]


class TestRoleDependencies:
    """Tests for require_auth, require_staff and require_admin."""

    def test_anonymous_gets_401(self, client: TestClient) -> None:
        response = client.get("/api/v1/private")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.parametrize(
        ("role", "staff_status", "admin_status"),
        [
            ("admin", 200, 200),
            ("teacher", 200, 403),
            ("student", 403, 403),
            ("district", 403, 403),
        ],
    )
    def test_role_matrix(
        self,
        client: TestClient,
        jwt_manager: JWTManager,
        role: str,
        staff_status: int,
        admin_status: int,
    ) -> None:
        headers = _bearer(jwt_manager, role)

        assert client.get("/api/v1/private", headers=headers).status_code == 200
        assert client.get("/api/v1/staff", headers=headers).status_code == staff_status
        assert client.get("/api/v1/admin", headers=headers).status_code == admin_status

    def test_forbidden_messages(self, client: TestClient, jwt_manager: JWTManager) -> None:
        headers = _bearer(jwt_manager, "student")

        assert client.get("/api/v1/staff", headers=headers).json()["detail"] == (
            "Teacher or admin access required"
        )
        assert client.get("/api/v1/admin", headers=headers).json()["detail"] == (
            "Admin access required"
        )
