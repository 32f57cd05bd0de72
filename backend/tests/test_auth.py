"""Session gate, auth routes and the response envelope."""
import uuid
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from vidtube.core.database import get_db
from vidtube.core.supabase import get_supabase
from vidtube.main import app

API = "/api/v1"


class FakeSupabaseAuth:
    """In-memory stand-in for ``supabase.auth`` issuing 'token-<user id>' tokens."""

    def __init__(self):
        self.accounts = {}
        self.revoked = []
        self.admin = SimpleNamespace(sign_out=self._revoke)

    def _session(self, user_id):
        return SimpleNamespace(
            user=SimpleNamespace(id=user_id),
            session=SimpleNamespace(access_token=f"token-{user_id}", refresh_token=f"refresh-{user_id}"),
        )

    def sign_up(self, credentials):
        if credentials["email"] in self.accounts:
            raise Exception("User already registered")
        user_id = str(uuid.uuid4())
        self.accounts[credentials["email"]] = (user_id, credentials["password"])
        return SimpleNamespace(user=SimpleNamespace(id=user_id), session=None)

    def sign_in_with_password(self, credentials):
        account = self.accounts.get(credentials["email"])
        if not account or account[1] != credentials["password"]:
            raise Exception("Invalid login credentials")
        return self._session(account[0])

    def refresh_session(self, refresh_token):
        if not refresh_token.startswith("refresh-"):
            raise Exception("Invalid Refresh Token")
        return self._session(refresh_token[len("refresh-"):])

    def _revoke(self, jwt, scope="global"):
        self.revoked.append((jwt, scope))


@pytest.fixture
def fake_auth(client):
    fake = FakeSupabaseAuth()
    app.dependency_overrides[get_supabase] = lambda: SimpleNamespace(auth=fake)
    return fake


def _register(client, username="alice", email="alice@example.com"):
    return client.post(f"{API}/auth/register", json={
        "email": email,
        "password": "secret123",
        "username": username,
        "fullName": "Alice Example",
    })


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_auth_routes_without_supabase_config(client):
    r = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert r.status_code == 503
    assert r.json()["message"] == "Authentication service is not configured"
    assert r.json()["success"] is False


def test_register_login_logout(client, fake_auth):
    r = _register(client, username="Alice")
    assert r.status_code == 201
    profile = r.json()["data"]
    assert profile["username"] == "alice"
    assert profile["fullName"] == "Alice Example"
    assert "password" not in profile

    r = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "wrong"})
    assert r.status_code == 401

    r = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["user"]["id"] == profile["id"]
    assert data["accessToken"] == f"token-{profile['id']}"
    assert r.cookies.get("accessToken") == data["accessToken"]

    # the session cookie alone authenticates
    r = client.get(f"{API}/users/me")
    assert r.status_code == 200
    assert r.json()["data"]["email"] == "alice@example.com"

    r = client.post(f"{API}/auth/logout")
    assert r.status_code == 200
    assert fake_auth.revoked == [(data["accessToken"], "local")]


def test_register_conflicts(client, fake_auth):
    assert _register(client).status_code == 201

    r = _register(client, email="other@example.com")
    assert r.status_code == 409
    assert r.json()["message"] == "Username already taken"

    r = _register(client, username="bob")
    assert r.status_code == 409


def test_register_validation(client, fake_auth):
    r = client.post(f"{API}/auth/register", json={"email": "not-an-email", "password": "x"})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["data"] is None
    assert body["errors"]


def test_refresh_token_from_body(client, fake_auth):
    user_id = _register(client).json()["data"]["id"]

    r = client.post(f"{API}/auth/refresh-token", json={"refreshToken": f"refresh-{user_id}"})
    assert r.status_code == 200
    assert r.json()["data"]["accessToken"] == f"token-{user_id}"

    # the refresh cookie takes precedence over the body
    client.cookies.clear()
    r = client.post(f"{API}/auth/refresh-token", json={"refreshToken": "garbage"})
    assert r.status_code == 401


def test_session_gate_sources(client, auth, make_user):
    user = make_user()

    assert client.get(f"{API}/users/me").status_code == 401
    assert client.get(f"{API}/users/me", headers={"Authorization": "Bearer nonsense"}).status_code == 401
    assert client.get(f"{API}/users/me", headers={"Authorization": "Basic abc"}).status_code == 401

    r = client.get(f"{API}/users/me", headers=auth(user))
    assert r.status_code == 200
    assert r.json()["data"]["id"] == user

    client.cookies.set("accessToken", f"token-{user}")
    r = client.get(f"{API}/users/me")
    assert r.json()["data"]["id"] == user


def test_token_for_unknown_profile_is_rejected(client, auth):
    r = client.get(f"{API}/users/me", headers=auth(str(uuid.uuid4())))
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid access token"


def test_optional_session_routes_accept_guests(client, auth, make_user, make_video):
    owner = make_user()
    video = make_video(owner)
    assert client.get(f"{API}/videos/{video}").status_code == 200
    assert client.get(f"{API}/videos/{video}", headers={"Authorization": "Bearer junk"}).status_code == 200


def test_update_account_and_media(client, auth, make_user):
    user = make_user("first")
    make_user("taken")

    r = client.patch(f"{API}/users/me", json={"fullName": "New Name"}, headers=auth(user))
    assert r.json()["data"]["fullName"] == "New Name"
    assert r.json()["data"]["username"] == "first"

    r = client.patch(f"{API}/users/me", json={"username": "Taken"}, headers=auth(user))
    assert r.status_code == 409

    r = client.patch(f"{API}/users/me/avatar", json={"avatar": "https://cdn.example.com/a.png"}, headers=auth(user))
    assert r.json()["data"]["avatar"] == "https://cdn.example.com/a.png"

    r = client.patch(f"{API}/users/me/cover-image", json={"coverImage": ""}, headers=auth(user))
    assert r.status_code == 400
    assert r.json()["message"] == "Cover image URL is required"


def test_unexpected_errors_do_not_leak_details(client):
    def broken_db():
        raise RuntimeError("no such table: videos_secret")
        yield

    app.dependency_overrides[get_db] = broken_db
    r = TestClient(app, raise_server_exceptions=False).get(f"{API}/videos")
    assert r.status_code == 500
    assert r.json()["message"] == "Internal server error"
    assert r.json()["errors"] == []
    assert "videos_secret" not in r.text
