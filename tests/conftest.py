"""
Pytest configuration and fixtures.
"""

import json
import uuid
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import httpx
import pytest
from httpx import AsyncClient, ASGITransport
from jose import JWTError, jwt

from gietcrm.api.deps import get_backend
from gietcrm.core.backend import BackendClient, Connection
from gietcrm.main import app
from gietcrm.models.user import User


TEST_URL = "https://test-project.supabase.co"
TEST_ANON_KEY = "test-anon-key"
JWT_SECRET = "test-jwt-secret"


def _text(value) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def _json(status_code: int, body=None) -> httpx.Response:
    if body is None:
        return httpx.Response(status_code)
    return httpx.Response(status_code, json=body)


class FakeSupabase:
    """
    In-memory stand-in for the hosted backend.

    Serves the identity provider (``/auth/v1``) and the table API
    (``/rest/v1``) with per-user row ownership: every row carries
    ``user_id`` and is only visible to that user.
    """

    def __init__(self):
        self.users: dict[str, dict] = {}
        self.tables: dict[str, list[dict]] = {"clients": [], "visits": [], "reminders": []}
        self.requests: list[httpx.Request] = []
        self.failures: set[tuple[str, str]] = set()
        self.revoked: set[str] = set()

    # Test helpers

    def add_user(self, email: str, password: str, name: str | None = None) -> dict:
        user = {
            "id": str(uuid.uuid4()),
            "email": email,
            "password": password,
            "user_metadata": {"name": name} if name else {},
        }
        self.users[email] = user
        return user

    def issue_token(self, user: dict, expires_in: int = 3600) -> str:
        now = datetime.now(timezone.utc)
        return jwt.encode(
            {
                "sub": user["id"],
                "email": user["email"],
                "role": "authenticated",
                "iat": int(now.timestamp()),
                "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
            },
            JWT_SECRET,
            algorithm="HS256",
        )

    def fail(self, method: str, table: str) -> None:
        """Make every ``method`` request on ``table`` answer 500."""
        self.failures.add((method, table))

    def rows(self, table: str) -> list[dict]:
        return list(self.tables[table])

    @property
    def writes(self) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method != "GET" and r.url.path.startswith("/rest/v1/")
        ]

    # Transport

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith("/auth/v1/"):
            return self._auth(request, path.removeprefix("/auth/v1/"))
        if path.startswith("/rest/v1/"):
            return self._rest(request, path.removeprefix("/rest/v1/"))
        return _json(404, {"message": "Not found"})

    def _user_for(self, request: httpx.Request) -> dict | None:
        token = request.headers.get("Authorization", "").removeprefix("Bearer ").strip()
        if not token or token == TEST_ANON_KEY or token in self.revoked:
            return None
        try:
            claims = jwt.decode(token, JWT_SECRET, algorithms=["HS256"])
        except JWTError:
            return None
        return next((u for u in self.users.values() if u["id"] == claims["sub"]), None)

    def _public(self, user: dict) -> dict:
        return {k: v for k, v in user.items() if k != "password"}

    def _auth(self, request: httpx.Request, route: str) -> httpx.Response:
        if route == "token" and request.method == "POST":
            body = json.loads(request.content)
            user = self.users.get(body.get("email"))
            if user is None or user["password"] != body.get("password"):
                return _json(400, {
                    "error": "invalid_grant",
                    "error_description": "Invalid login credentials",
                })
            expires_at = datetime.now(timezone.utc) + timedelta(hours=1)
            return _json(200, {
                "access_token": self.issue_token(user),
                "token_type": "bearer",
                "expires_in": 3600,
                "expires_at": int(expires_at.timestamp()),
                "refresh_token": uuid.uuid4().hex,
                "user": self._public(user),
            })

        if route == "user" and request.method == "GET":
            user = self._user_for(request)
            if user is None:
                return _json(401, {"msg": "invalid JWT"})
            return _json(200, self._public(user))

        if route == "logout" and request.method == "POST":
            token = request.headers.get("Authorization", "").removeprefix("Bearer ")
            self.revoked.add(token)
            return _json(204)

        return _json(404, {"msg": "Not found"})

    def _matches(self, row: dict, params: httpx.QueryParams) -> bool:
        for column, condition in params.multi_items():
            if column in ("select", "order"):
                continue
            if _text(row.get(column)) != condition.removeprefix("eq."):
                return False
        return True

    def _rest(self, request: httpx.Request, table: str) -> httpx.Response:
        if table not in self.tables:
            return _json(404, {"message": f"relation {table} does not exist"})
        if (request.method, table) in self.failures:
            return _json(500, {"message": "internal error"})

        user = self._user_for(request)
        uid = user["id"] if user else None
        params = request.url.params
        visible = [
            r for r in self.tables[table]
            if r.get("user_id") == uid and self._matches(r, params)
        ]

        if request.method == "GET":
            for term in reversed(params.get("order", "").split(",")):
                if term:
                    column, _, direction = term.partition(".")
                    visible.sort(key=lambda r: _text(r.get(column)), reverse=direction == "desc")
            return _json(200, [dict(r) for r in visible])

        if request.method == "POST":
            created = []
            for row in json.loads(request.content):
                if uid is None or row.get("user_id") != uid:
                    return _json(403, {
                        "code": "42501",
                        "message": "new row violates row-level security policy",
                    })
                row = {"id": str(uuid.uuid4()), **row}
                if table == "clients":
                    row["created_at"] = datetime.now(timezone.utc).isoformat()
                created.append(row)
            self.tables[table].extend(created)
            return _json(201, [dict(r) for r in created])

        if request.method == "PATCH":
            values = json.loads(request.content)
            for row in visible:
                row.update(values)
            return _json(200, [dict(r) for r in visible])

        if request.method == "DELETE":
            self.tables[table] = [r for r in self.tables[table] if r not in visible]
            return _json(200, [dict(r) for r in visible])

        return _json(405, {"message": "method not allowed"})


@pytest.fixture
def fake_backend() -> FakeSupabase:
    """Fresh in-memory backend."""
    return FakeSupabase()


@pytest.fixture
async def backend(fake_backend: FakeSupabase) -> AsyncGenerator[BackendClient, None]:
    """Backend client wired to the fake backend."""
    client = BackendClient(
        TEST_URL,
        TEST_ANON_KEY,
        transport=httpx.MockTransport(fake_backend),
    )
    yield client
    await client.aclose()


@pytest.fixture
def test_user(fake_backend: FakeSupabase) -> dict:
    """Create a test user in the identity provider."""
    return fake_backend.add_user("test@example.com", "testpassword123", "Test User")


@pytest.fixture
def other_user(fake_backend: FakeSupabase) -> dict:
    """A second user owning separate rows."""
    return fake_backend.add_user("other@example.com", "otherpassword123")


@pytest.fixture
def owner(test_user: dict) -> User:
    """Acting user for data-access calls."""
    return User.from_identity(test_user)


@pytest.fixture
def access_token(fake_backend: FakeSupabase, test_user: dict) -> str:
    return fake_backend.issue_token(test_user)


@pytest.fixture
def db(backend: BackendClient, access_token: str) -> Connection:
    """Table API handle acting as the test user."""
    return backend.connect(access_token)


@pytest.fixture
async def client(backend: BackendClient) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with the backend dependency overridden."""
    app.dependency_overrides[get_backend] = lambda: backend

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def auth_client(
    client: AsyncClient,
    test_user: dict,
) -> AsyncClient:
    """Create authenticated test client."""
    response = await client.post(
        "/api/v1/auth/login",
        json={
            "email": "test@example.com",
            "password": "testpassword123",
        },
    )
    tokens = response.json()

    client.headers["Authorization"] = f"Bearer {tokens['accessToken']}"

    return client
