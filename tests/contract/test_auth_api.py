"""Contract tests for the login endpoint."""

from __future__ import annotations

from datetime import datetime
from datetime import timedelta
from datetime import timezone
import logging

import pytest
from fastapi.testclient import TestClient

from manager_api.core.config import AuthSettings
from manager_api.core.config import get_auth_settings
from manager_api.core.errors import UNAUTHORIZED_MESSAGE

LOGIN_URL = "/api/v1/auth/login"


def _register(client: TestClient, headers: dict[str, str], *, email: str = "ada@example.com") -> dict:
    response = client.post(
        "/api/v1/users/create",
        json={"name": "Ada Lovelace", "email": email, "password": "engine1"},
        headers=headers,
    )
    assert response.status_code == 200
    return response.json()["data"]


def _login(*, email: str, password: str = "engine1") -> dict:
    return {"login": "ada", "email": email, "password": password}


def test_login_issues_token_with_configured_expiry(client: TestClient, auth_headers: dict[str, str]) -> None:
    user = _register(client, auth_headers)
    hours = get_auth_settings().jwt_hours_to_expire

    before = datetime.now(timezone.utc)
    response = client.post(LOGIN_URL, json=_login(email="ADA@Example.com"))
    after = datetime.now(timezone.utc)

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["message"] == "User authenticated successfully!"
    assert payload["errors"] is None
    data = payload["data"]
    assert set(data) == {"user", "token", "tokenExpiry"}
    assert data["user"] == user
    assert isinstance(data["token"], str) and data["token"]

    expiry = datetime.fromisoformat(data["tokenExpiry"].replace("Z", "+00:00"))
    assert before + timedelta(hours=hours) - timedelta(seconds=1) <= expiry
    assert expiry <= after + timedelta(hours=hours) + timedelta(seconds=1)


def test_issued_token_authorizes_user_routes(client: TestClient, auth_headers: dict[str, str]) -> None:
    _register(client, auth_headers)
    token = client.post(LOGIN_URL, json=_login(email="ada@example.com")).json()["data"]["token"]

    response = client.get("/api/v1/users/get-all", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["success"] is True


def test_login_logs_redacted_settings(
    client: TestClient, auth_headers: dict[str, str], caplog: pytest.LogCaptureFixture
) -> None:
    _register(client, auth_headers)
    secret = get_auth_settings().jwt_secret

    with caplog.at_level(logging.INFO, logger="manager_api.api.auth"):
        response = client.post(LOGIN_URL, json=_login(email="ada@example.com"))

    assert response.status_code == 200
    assert "<redacted>" in caplog.text
    assert secret not in caplog.text


def test_login_with_unknown_email_is_unauthorized(client: TestClient) -> None:
    response = client.post(LOGIN_URL, json=_login(email="ghost@example.com"))

    assert response.status_code == 401
    assert response.json() == {
        "message": UNAUTHORIZED_MESSAGE,
        "success": False,
        "data": None,
        "errors": None,
    }


def test_login_ignores_password_by_default(client: TestClient, auth_headers: dict[str, str]) -> None:
    _register(client, auth_headers)

    response = client.post(LOGIN_URL, json=_login(email="ada@example.com", password="wrong-password"))

    assert response.status_code == 200


def test_login_checks_password_when_enabled(app, client: TestClient, auth_headers: dict[str, str]) -> None:
    _register(client, auth_headers)
    base = get_auth_settings()
    app.dependency_overrides[get_auth_settings] = lambda: AuthSettings(
        jwt_secret=base.jwt_secret,
        jwt_algorithm=base.jwt_algorithm,
        jwt_issuer=base.jwt_issuer,
        jwt_hours_to_expire=base.jwt_hours_to_expire,
        verify_password=True,
    )

    rejected = client.post(LOGIN_URL, json=_login(email="ada@example.com", password="wrong-password"))
    accepted = client.post(LOGIN_URL, json=_login(email="ada@example.com", password="engine1"))

    assert rejected.status_code == 401
    assert rejected.json()["message"] == UNAUTHORIZED_MESSAGE
    assert accepted.status_code == 200


def test_login_requires_every_field(client: TestClient) -> None:
    response = client.post(LOGIN_URL, json={"login": "", "email": "ada@example.com"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["data"] is None
    assert any(error.startswith("login: ") for error in payload["errors"])
    assert any(error.startswith("password: ") for error in payload["errors"])
