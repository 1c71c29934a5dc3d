# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fixtures for API integration tests.

The v1 router runs behind the real authentication middleware. The
database session and invitation token manager are replaced through
dependency overrides; services are patched per test.
"""

from typing import Callable
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from slowapi.errors import RateLimitExceeded

from src.api.dependencies import get_auth_provider, get_db, get_invitation_tokens
from src.api.middleware.auth import AuthMiddleware
from src.api.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from src.api.v1 import router as v1_router
from src.core.config.settings import InvitationSettings, JWTSettings
from src.domains.auth.jwt import JWTManager
from src.domains.invitation import InvitationTokenManager


@pytest.fixture
def jwt_manager(jwt_settings: JWTSettings) -> JWTManager:
    return JWTManager(jwt_settings)


@pytest.fixture
def invitation_tokens(
    jwt_settings: JWTSettings, invitation_settings: InvitationSettings
) -> InvitationTokenManager:
    return InvitationTokenManager(jwt_settings, invitation_settings)


@pytest.fixture
def app(
    jwt_manager: JWTManager,
    invitation_tokens: InvitationTokenManager,
    mock_db: AsyncMock,
) -> FastAPI:
    """Create test FastAPI app."""
    app = FastAPI(redirect_slashes=False)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(AuthMiddleware, jwt_manager=jwt_manager)
    app.include_router(v1_router)

    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_invitation_tokens] = lambda: invitation_tokens
    app.dependency_overrides[get_auth_provider] = lambda: AsyncMock()

    limiter.reset()
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def auth_headers(jwt_manager: JWTManager) -> Callable[..., dict[str, str]]:
    """Build an Authorization header for a user with the given role."""

    def _headers(role: str = "teacher", user_id: str | None = None) -> dict[str, str]:
        token = jwt_manager.create_access_token(
            user_id or str(uuid4()), role, f"{role}@example.org"
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
