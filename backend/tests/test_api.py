from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from blog_api.api.deps import get_post_coordinator, get_session_tokens, get_user_store
from blog_api.main import app
from blog_api.models.user import User
from blog_api.services.session_tokens import SessionTokens
from blog_api.services.user_store import UserStore

SECRET = "api-test-secret-that-is-long-enough"


@pytest.fixture
def tokens():
    return SessionTokens(SECRET)


@pytest.fixture
def client(coordinator, tokens, tmp_path):
    users = UserStore(tmp_path, rounds=4)
    app.dependency_overrides[get_post_coordinator] = lambda: coordinator
    app.dependency_overrides[get_user_store] = lambda: users
    app.dependency_overrides[get_session_tokens] = lambda: tokens
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(tokens):
    user = User(
        id="1",
        email="alice@example.com",
        password="x",
        name="Alice",
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )
    return {"Authorization": f"Bearer {tokens.issue(user)}"}


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "ok", "cache": False}
    assert client.get("/").json()["docs"] == "/docs"


def test_list_empty(client):
    r = client.get("/api/posts")
    assert r.status_code == 200
    assert r.json() == []


def test_get_missing_post_is_404(client):
    r = client.get("/api/posts/nope")
    assert r.status_code == 404
    assert r.json() == {"detail": "Post not found"}


def test_writes_require_auth(client, store):
    assert client.post("/api/posts", json={"title": "A", "content": "B"}).status_code == 401
    assert client.put("/api/posts/1", json={"title": "A"}).status_code == 401
    assert client.delete("/api/posts/1").status_code == 401
    bad = {"Authorization": "Bearer garbage"}
    assert client.post("/api/posts", json={"title": "A", "content": "B"}, headers=bad).status_code == 401
    assert store.writes == []
    assert store.deletes == []


def test_create_requires_title_and_content(client, auth_headers):
    r = client.post("/api/posts", json={"title": "A"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Title and content are required"


def test_create_get_update_delete(client, auth_headers, store):
    r = client.post("/api/posts", json={"title": "A", "content": "B"}, headers=auth_headers)
    assert r.status_code == 201
    created = r.json()
    assert set(created) == {"id", "title", "content", "author", "createdAt", "updatedAt", "published"}
    assert created["author"] == "Alice"
    assert created["published"] is False
    assert store.writes[-1]["message"] == "Create post: A (by Alice <alice@example.com>)"

    assert client.get(f"/api/posts/{created['id']}").json() == created
    assert [p["id"] for p in client.get("/api/posts").json()] == [created["id"]]

    r = client.put(f"/api/posts/{created['id']}", json={"published": True}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["published"] is True
    assert r.json()["title"] == "A"

    r = client.delete(f"/api/posts/{created['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Post deleted successfully"}
    assert client.get(f"/api/posts/{created['id']}").status_code == 404


def test_update_and_delete_missing_are_404(client, auth_headers):
    assert client.put("/api/posts/nope", json={"title": "x"}, headers=auth_headers).status_code == 404
    assert client.delete("/api/posts/nope", headers=auth_headers).status_code == 404


def test_create_failure_is_500(client, auth_headers, store):
    store.fail_writes = True
    r = client.post("/api/posts", json={"title": "A", "content": "B"}, headers=auth_headers)
    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to create post"


def test_signup_signin_me(client):
    r = client.post("/api/auth/signup", json={"email": "b@example.com", "password": "pw", "name": "Bob"})
    assert r.status_code == 201
    assert "password" not in r.json()

    dup = client.post("/api/auth/signup", json={"email": "b@example.com", "password": "pw", "name": "Bob"})
    assert dup.status_code == 409

    assert client.post("/api/auth/signin", json={"email": "b@example.com", "password": "no"}).status_code == 401

    r = client.post("/api/auth/signin", json={"email": "b@example.com", "password": "pw"})
    assert r.status_code == 200
    token = r.json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json() == {"name": "Bob", "email": "b@example.com"}


def test_signup_missing_fields_is_400(client):
    assert client.post("/api/auth/signup", json={"email": "b@example.com"}).status_code == 400
