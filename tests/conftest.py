"""Shared pytest configuration and fixtures for tests."""

import sys
import io
import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import httpx
import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from focodiario.core.backend import create_http_client
from focodiario.core.config import FocoConfig
from focodiario.core.controller import AppController
from focodiario.core.identity import IdentityClient
from focodiario.core.repository import GoalRepository


BASE_URL = "https://test.supabase.co"
API_KEY = "anon-test-key"
GOALS_PATH = "/rest/v1/goals"


class FakeSupabase:
    """
    In-memory stand-in for the auth and REST endpoints, served through
    httpx.MockTransport.

    Attributes:
        users: email -> {"id", "password", "display_name"}
        rows: goal rows as the REST API stores them
        calls: (method, path, params, body) for every request received
        failures: "METHOD /path" -> (status, payload) returned instead of the
            real answer until removed
        require_confirmation: sign-up returns a user but no session
        revoked: access tokens answered with 401
    """

    def __init__(self):
        self.users = {}
        self.rows = []
        self.calls = []
        self.failures = {}
        self.require_confirmation = False
        self.revoked = set()
        self._access_tokens = {}
        self._refresh_tokens = {}
        self._counter = 0
        self._clock = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)

    # --- Test helpers ---

    def add_user(self, username, password, display_name=None):
        email = f"{username}@focodiario.com"
        self._counter += 1
        self.users[email] = {
            "id": f"user-{self._counter}",
            "password": password,
            "display_name": display_name,
        }
        return self.users[email]["id"]

    def add_row(self, user_id, title, category="Pessoal", completed=False):
        row = {
            "id": self._next_id("goal"),
            "title": title,
            "category": category,
            "completed": completed,
            "user_id": user_id,
            "created_at": self._tick(),
        }
        self.rows.append(row)
        return row

    def fail(self, method, path, status=500, payload=None):
        self.failures[f"{method} {path}"] = (status, payload or {"message": "boom"})

    def calls_to(self, method, path):
        return [c for c in self.calls if c[0] == method and c[1] == path]

    def rest_calls(self):
        return [c for c in self.calls if c[1] == GOALS_PATH]

    # --- Transport ---

    def handle(self, request):
        path = request.url.path
        params = dict(request.url.params)
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, path, params, body))

        failure = self.failures.get(f"{request.method} {path}")
        if failure is not None:
            status, payload = failure
            return httpx.Response(status, json=payload)

        if path == "/auth/v1/token":
            if params.get("grant_type") == "password":
                return self._password_grant(body)
            return self._refresh_grant(body)
        if path == "/auth/v1/signup":
            return self._signup(body)
        if path == "/auth/v1/logout":
            return httpx.Response(204)
        if path == GOALS_PATH:
            return self._goals(request, params, body)
        return httpx.Response(404, json={"message": "not found"})

    # --- Internals ---

    def _next_id(self, prefix):
        self._counter += 1
        return f"{prefix}-{self._counter}"

    def _tick(self):
        self._clock += timedelta(minutes=1)
        return self._clock.isoformat()

    def _user_payload(self, email):
        user = self.users[email]
        metadata = {}
        if user["display_name"]:
            metadata["display_name"] = user["display_name"]
        return {"id": user["id"], "email": email, "user_metadata": metadata}

    def _issue(self, email):
        access = self._next_id("access")
        refresh = self._next_id("refresh")
        self._access_tokens[access] = self.users[email]["id"]
        self._refresh_tokens[refresh] = email
        return httpx.Response(
            200,
            json={
                "access_token": access,
                "refresh_token": refresh,
                "token_type": "bearer",
                "expires_in": 3600,
                "user": self._user_payload(email),
            },
        )

    def _password_grant(self, body):
        user = self.users.get(body["email"])
        if user is None or user["password"] != body["password"]:
            return httpx.Response(
                400,
                json={"error": "invalid_grant", "error_description": "Invalid login credentials"},
            )
        return self._issue(body["email"])

    def _refresh_grant(self, body):
        email = self._refresh_tokens.pop(body["refresh_token"], None)
        if email is None:
            return httpx.Response(400, json={"error_description": "Invalid Refresh Token"})
        return self._issue(email)

    def _signup(self, body):
        email = body["email"]
        if email in self.users:
            return httpx.Response(422, json={"msg": "User already registered"})
        self._counter += 1
        self.users[email] = {
            "id": f"user-{self._counter}",
            "password": body["password"],
            "display_name": (body.get("data") or {}).get("display_name"),
        }
        if self.require_confirmation:
            return httpx.Response(200, json=self._user_payload(email))
        return self._issue(email)

    def _goals(self, request, params, body):
        token = request.headers.get("authorization", "").replace("Bearer ", "")
        user_id = self._access_tokens.get(token)
        if user_id is None or token in self.revoked:
            return httpx.Response(401, json={"message": "JWT expired"})

        own = [r for r in self.rows if r["user_id"] == user_id]
        if request.method == "GET":
            rows = sorted(own, key=lambda r: r["created_at"], reverse=True)
            return httpx.Response(200, json=rows)

        if request.method == "POST":
            created = []
            for item in body:
                row = dict(item, id=self._next_id("goal"), created_at=self._tick())
                self.rows.append(row)
                created.append(row)
            return httpx.Response(201, json=created)

        goal_id = params.get("id", "").replace("eq.", "", 1)
        if request.method == "PATCH":
            for row in own:
                if row["id"] == goal_id:
                    row.update(body)
            return httpx.Response(204)
        if request.method == "DELETE":
            self.rows = [r for r in self.rows if not (r["id"] == goal_id and r["user_id"] == user_id)]
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def backend():
    return FakeSupabase()


@pytest.fixture
def config(tmp_path):
    return FocoConfig(
        supabase_url=BASE_URL,
        supabase_key=API_KEY,
        data_dir=str(tmp_path / "data"),
    )


@pytest.fixture
def http(backend, config):
    client = create_http_client(config, transport=httpx.MockTransport(backend.handle))
    yield client
    client.close()


@pytest.fixture
def identity(http, config):
    return IdentityClient(http, session_path=config.session_path)


@pytest.fixture
def repository(http, identity):
    return GoalRepository(http, identity)


@pytest.fixture
def controller(backend, config):
    app = AppController.from_config(config, transport=httpx.MockTransport(backend.handle))
    yield app
    app.close()


@pytest.fixture
def ana(backend, controller):
    """Controller with user 'ana' logged in."""
    backend.add_user("ana", "secret1", display_name="ana")
    controller.start()
    controller.authenticate("ana", "secret1")
    return controller
