"""
User endpoint tests: sign-up, log-in, token checks and the notification
inbox.
"""
import pytest
from httpx import AsyncClient

from conftest import TEST_PASSWORD, create_post, join_and_login
from sns.security import create_access_token


# ---------------------------------------------------------------------------
# Join
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_join(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/v1/users/join", json={"username": "alice", "password": TEST_PASSWORD}
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["username"] == "alice"
    assert data["role"] == "USER"
    assert "id" in data
    assert "password" not in data


@pytest.mark.asyncio
async def test_join_duplicated_username_returns_409(async_client: AsyncClient):
    payload = {"username": "dup_user", "password": TEST_PASSWORD}
    assert (await async_client.post("/api/v1/users/join", json=payload)).status_code == 201

    resp = await async_client.post("/api/v1/users/join", json=payload)
    assert resp.status_code == 409
    assert resp.json()["code"] == "DUPLICATED_USER_NAME"


@pytest.mark.asyncio
async def test_join_missing_password_returns_422(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/users/join", json={"username": "nopass"})
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_login_returns_token(async_client: AsyncClient):
    await async_client.post(
        "/api/v1/users/join", json={"username": "bob", "password": TEST_PASSWORD}
    )
    resp = await async_client.post(
        "/api/v1/users/login", json={"username": "bob", "password": TEST_PASSWORD}
    )
    assert resp.status_code == 200
    assert resp.json()["token"]


@pytest.mark.asyncio
async def test_login_unknown_user_returns_404(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/v1/users/login", json={"username": "ghost", "password": TEST_PASSWORD}
    )
    assert resp.status_code == 404
    assert resp.json()["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_login_wrong_password_returns_401(async_client: AsyncClient):
    await async_client.post(
        "/api/v1/users/join", json={"username": "carol", "password": TEST_PASSWORD}
    )
    resp = await async_client.post(
        "/api/v1/users/login", json={"username": "carol", "password": "wrong"}
    )
    assert resp.status_code == 401
    assert resp.json()["code"] == "INVALID_PASSWORD"


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_missing_token_returns_401(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/users/notifications")
    assert resp.status_code == 401
    assert resp.json()["code"] == "INVALID_TOKEN"
    assert resp.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_garbage_token_returns_401(async_client: AsyncClient):
    resp = await async_client.get(
        "/api/v1/users/notifications", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_expired_token_returns_401(async_client: AsyncClient):
    await join_and_login(async_client, "dave")
    token = create_access_token("dave", expire_seconds=-10)
    resp = await async_client.get(
        "/api/v1/users/notifications", headers={"Authorization": f"Bearer {token}"}
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_token_signed_with_other_key_returns_401(async_client: AsyncClient):
    await join_and_login(async_client, "erin")
    token = create_access_token("erin", secret_key="another-signing-key-of-sufficient-length")
    resp = await async_client.get(
        "/api/v1/users/notifications", headers={"Authorization": f"Bearer {token}"}
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_token_for_deleted_user_returns_404(async_client: AsyncClient):
    """A valid token naming a user that does not exist is a USER_NOT_FOUND."""
    token = create_access_token("nobody")
    resp = await async_client.get(
        "/api/v1/users/notifications", headers={"Authorization": f"Bearer {token}"}
    )
    assert resp.status_code == 404
    assert resp.json()["code"] == "USER_NOT_FOUND"


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_notifications_empty(async_client: AsyncClient):
    headers = await join_and_login(async_client, "quiet")
    resp = await async_client.get("/api/v1/users/notifications", headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["items"] == []
    assert data["total"] == 0


@pytest.mark.asyncio
async def test_notifications_for_like_and_comment(async_client: AsyncClient):
    owner = await join_and_login(async_client, "owner")
    fan = await join_and_login(async_client, "fan")
    post_id = await create_post(async_client, owner)

    await async_client.post(f"/api/v1/posts/{post_id}/likes", headers=fan)
    await async_client.post(f"/api/v1/posts/{post_id}/comments", json={"body": "nice!"}, headers=fan)

    resp = await async_client.get(
        "/api/v1/users/notifications?sort=id&direction=desc", headers=owner
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    comment_note, like_note = data["items"]
    assert comment_note["type"] == "NEW_COMMENT_ON_POST"
    assert comment_note["text"] == "new comment!"
    assert like_note["type"] == "NEW_LIKE_ON_POST"
    assert like_note["text"] == "new like!"
    assert all(n["post_id"] == post_id for n in data["items"])

    # The actor gets nothing.
    resp = await async_client.get("/api/v1/users/notifications", headers=fan)
    assert resp.json()["total"] == 0
