import pytest

from core.security import create_access_token, create_refresh_token


@pytest.mark.anyio
async def test_login_with_form_data(async_client):
    """Test OAuth2 compatible login endpoint"""
    resp = await async_client.post(
        "/api/v1/auth/login",
        data={"username": "admin@itops.io", "password": "adminpass"},
        headers={"Content-Type": "application/x-www-form-urlencoded"}
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert "access_token" in data
    assert "refresh_token" in data
    assert data["token_type"] == "bearer"


@pytest.mark.anyio
async def test_login_with_json(async_client):
    resp = await async_client.post(
        "/api/v1/auth/login/json",
        json={"email": "admin@itops.io", "password": "adminpass"}
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert "access_token" in data
    assert "refresh_token" in data


@pytest.mark.anyio
async def test_login_invalid_credentials(async_client):
    resp = await async_client.post(
        "/api/v1/auth/login",
        data={"username": "admin@itops.io", "password": "wrongpassword"},
        headers={"Content-Type": "application/x-www-form-urlencoded"}
    )
    assert resp.status_code == 401
    assert "Incorrect email or password" in resp.json()["detail"]


@pytest.mark.anyio
async def test_login_nonexistent_user(async_client):
    resp = await async_client.post(
        "/api/v1/auth/login",
        data={"username": "nobody@itops.io", "password": "password"},
        headers={"Content-Type": "application/x-www-form-urlencoded"}
    )
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_login_disabled_user(async_client):
    resp = await async_client.post(
        "/api/v1/auth/login/json",
        json={"email": "former@itops.io", "password": "formerpass"}
    )
    assert resp.status_code == 401
    assert "disabled" in resp.json()["detail"]


@pytest.mark.anyio
async def test_refresh_token(async_client):
    """Test token refresh endpoint"""
    # First login to get tokens
    resp = await async_client.post(
        "/api/v1/auth/login/json",
        json={"email": "admin@itops.io", "password": "adminpass"}
    )
    assert resp.status_code == 200
    tokens = resp.json()

    # Use refresh token to get new tokens
    resp = await async_client.post(
        "/api/v1/auth/refresh",
        json={"refresh_token": tokens["refresh_token"]}
    )
    assert resp.status_code == 200, resp.text
    new_tokens = resp.json()
    assert "access_token" in new_tokens
    assert "refresh_token" in new_tokens


@pytest.mark.anyio
async def test_refresh_token_invalid(async_client):
    resp = await async_client.post(
        "/api/v1/auth/refresh",
        json={"refresh_token": "invalid.token.here"}
    )
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_refresh_rejects_access_token(async_client):
    resp = await async_client.post(
        "/api/v1/auth/refresh",
        json={"refresh_token": create_access_token({"sub": "1"})}
    )
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_refresh_token_cannot_authenticate_requests(async_client):
    headers = {"Authorization": f"Bearer {create_refresh_token({'sub': '1'})}"}
    resp = await async_client.get("/api/v1/auth/me", headers=headers)
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_get_current_user(async_client, auth_headers):
    resp = await async_client.get("/api/v1/auth/me", headers=auth_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["email"] == "admin@itops.io"
    assert data["full_name"] == "Test Admin"
    assert data["is_active"] is True
    assert "id" in data


@pytest.mark.anyio
async def test_get_current_user_unauthorized(async_client):
    resp = await async_client.get("/api/v1/auth/me")
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_disabled_user_token_rejected(async_client):
    headers = {"Authorization": f"Bearer {create_access_token({'sub': '2'})}"}
    resp = await async_client.get("/api/v1/auth/me", headers=headers)
    assert resp.status_code == 401
    assert "disabled" in resp.json()["detail"]


@pytest.mark.anyio
async def test_business_endpoints_require_auth(async_client):
    for path in ("/api/v1/equipment", "/api/v1/tickets", "/api/v1/checklist", "/api/v1/tasks/johan"):
        resp = await async_client.get(path)
        assert resp.status_code == 401, path


@pytest.mark.anyio
async def test_change_password(async_client, auth_headers):
    resp = await async_client.post(
        "/api/v1/auth/me/password",
        json={
            "current_password": "adminpass",
            "new_password": "newadminpass123"
        },
        headers=auth_headers
    )
    assert resp.status_code == 200, resp.text

    # Verify old password no longer works
    resp = await async_client.post(
        "/api/v1/auth/login/json",
        json={"email": "admin@itops.io", "password": "adminpass"}
    )
    assert resp.status_code == 401

    # Verify new password works
    resp = await async_client.post(
        "/api/v1/auth/login/json",
        json={"email": "admin@itops.io", "password": "newadminpass123"}
    )
    assert resp.status_code == 200


@pytest.mark.anyio
async def test_change_password_wrong_current(async_client, auth_headers):
    resp = await async_client.post(
        "/api/v1/auth/me/password",
        json={
            "current_password": "wrongpassword",
            "new_password": "newpassword123"
        },
        headers=auth_headers
    )
    assert resp.status_code == 400
    assert "Current password is incorrect" in resp.json()["detail"]


@pytest.mark.anyio
async def test_health(async_client):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}
