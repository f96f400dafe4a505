"""
Unit tests for access-code authentication.
"""

import pytest
from httpx import AsyncClient

from project_generator.core.config import settings
from project_generator.core.exceptions import InvalidRequestError
from project_generator.core.security import (
    create_signature,
    is_valid_auth_token,
    issue_auth_token,
    sanitize_path,
    verify_access_code,
)


class TestAccessCode:
    def test_matching_code(self) -> None:
        assert verify_access_code("vibe2024", expected_code="vibe2024")

    def test_whitespace_is_ignored(self) -> None:
        assert verify_access_code("  vibe2024\n", expected_code=" vibe2024 ")

    def test_wrong_code(self) -> None:
        assert not verify_access_code("letmein", expected_code="vibe2024")

    def test_empty_expected_code_never_matches(self) -> None:
        assert not verify_access_code("", expected_code="")


class TestAuthToken:
    def test_issued_token_is_valid(self) -> None:
        assert is_valid_auth_token(issue_auth_token())

    def test_plain_marker_value_is_rejected(self) -> None:
        assert not is_valid_auth_token("authenticated")

    def test_missing_token(self) -> None:
        assert not is_valid_auth_token(None)
        assert not is_valid_auth_token("")

    def test_forged_signature(self) -> None:
        timestamp = issue_auth_token().split(".", 1)[0]
        assert not is_valid_auth_token(f"{timestamp}.deadbeef")

    def test_non_ascii_signature(self) -> None:
        timestamp = issue_auth_token().split(".", 1)[0]
        assert not is_valid_auth_token(f"{timestamp}.é")

    def test_expired_token(self) -> None:
        old = 1_000_000
        signature, _ = create_signature("authenticated", old)
        assert not is_valid_auth_token(f"{old}.{signature}")


class TestSanitizePath:
    def test_child_path(self, tmp_path) -> None:
        assert sanitize_path("demo", str(tmp_path)) == str(tmp_path / "demo")

    @pytest.mark.parametrize("path", ["../outside", "..", "", "a/../../b"])
    def test_escaping_paths_rejected(self, tmp_path, path: str) -> None:
        with pytest.raises(InvalidRequestError):
            sanitize_path(path, str(tmp_path))


@pytest.mark.asyncio
async def test_login_missing_code(async_client: AsyncClient) -> None:
    response = await async_client.post("/api/v1/auth/login", json={})
    assert response.status_code == 400

    data = response.json()
    assert data["success"] is False
    assert data["error"] == "Missing access code"


@pytest.mark.asyncio
async def test_login_invalid_code(async_client: AsyncClient) -> None:
    response = await async_client.post("/api/v1/auth/login", json={"code": "wrong-code"})
    assert response.status_code == 401

    data = response.json()
    assert data["error"] == "Invalid access code"
    assert data["code"] == "INVALID_ACCESS_CODE"


@pytest.mark.asyncio
async def test_login_sets_cookie(async_client: AsyncClient) -> None:
    response = await async_client.post(
        "/api/v1/auth/login", json={"code": f" {settings.auth.access_code} "}
    )
    assert response.status_code == 200
    assert response.json()["data"]["message"] == "Authentication successful"

    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"{settings.auth.cookie_name}=")
    assert "HttpOnly" in cookie
    assert "SameSite=strict" in cookie
    assert f"Max-Age={settings.auth.cookie_max_age}" in cookie


@pytest.mark.asyncio
async def test_verify(async_client: AsyncClient) -> None:
    response = await async_client.get("/api/v1/auth/verify")
    assert response.json() == {"authenticated": False}

    async_client.cookies.set(settings.auth.cookie_name, issue_auth_token())
    response = await async_client.get("/api/v1/auth/verify")
    assert response.json() == {"authenticated": True}


@pytest.mark.asyncio
async def test_logout(auth_client: AsyncClient) -> None:
    response = await auth_client.post("/api/v1/auth/logout")
    assert response.status_code == 200
    assert response.json()["data"]["message"] == "Logged out successfully"
    assert f"{settings.auth.cookie_name}=" in response.headers["set-cookie"]


@pytest.mark.asyncio
async def test_protected_route_requires_cookie(async_client: AsyncClient) -> None:
    response = await async_client.post(
        "/api/v1/analyze",
        json={"name": "X", "description": "Y", "type": "api"},
    )
    assert response.status_code == 401

    data = response.json()
    assert data == {
        "success": False,
        "error": "Unauthorized. Please login first.",
        "code": "AUTH_REQUIRED",
    }


@pytest.mark.asyncio
async def test_forged_cookie_rejected(async_client: AsyncClient) -> None:
    async_client.cookies.set(settings.auth.cookie_name, "authenticated")
    response = await async_client.get("/api/v1/templates")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_non_ascii_cookie_rejected(async_client: AsyncClient) -> None:
    timestamp = issue_auth_token().split(".", 1)[0]
    cookie = f"{settings.auth.cookie_name}={timestamp}.é".encode("utf-8")

    response = await async_client.get("/api/v1/templates", headers={"Cookie": cookie})
    assert response.status_code == 401
    assert response.json()["code"] == "AUTH_REQUIRED"

    response = await async_client.get("/api/v1/auth/verify", headers={"Cookie": cookie})
    assert response.status_code == 200
    assert response.json()["authenticated"] is False
