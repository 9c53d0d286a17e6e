# SafeWare Web Test Suite - Shared Configuration and Fixtures
#
# This module provides:
# - FakeBackend: an in-memory stand-in for the inventory API behind an
#   httpx.MockTransport, recording every call the frontend makes
# - app / client fixtures wired to the fake backend
# - login_as: puts a session for a given role into the signed cookie

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from safeware_web import create_app


API_BASE_URL = "http://backend.test/api/v1"
HEALTH_URL = "http://backend.test/health"
API_PREFIX = "/api/v1"


# =============================================================================
# USERS
# =============================================================================

USERS = {
    "Manager": {
        "id": "u-manager",
        "email": "maria@acme.test",
        "full_name": "Maria Manager",
        "role": "Manager",
        "company_id": "c-1",
    },
    "Supervisor": {
        "id": "u-supervisor",
        "email": "sam@acme.test",
        "full_name": "Sam Supervisor",
        "role": "Supervisor",
        "company_id": "c-1",
        "warehouse_id": "wh-1",
    },
    "Staff": {
        "id": "u-staff",
        "email": "stella@acme.test",
        "full_name": "Stella Staff",
        "role": "Staff",
        "company_id": "c-1",
        "warehouse_id": "wh-1",
    },
    "Auditor": {
        "id": "u-auditor",
        "email": "arthur@acme.test",
        "full_name": "Arthur Auditor",
        "role": "Auditor",
        "company_id": "c-1",
    },
}

PASSWORD = "Password123"


def token_for(role: str) -> str:
    return f"access-{role.lower()}"


# =============================================================================
# FAKE BACKEND
# =============================================================================

@dataclass
class RecordedCall:
    method: str
    path: str
    params: Dict[str, str]
    body: Any
    authorization: Optional[str]


class FakeBackend:
    """
    Minimal inventory API.

    Built in: /auth/login, /auth/logout, /users/me and /health. Everything
    else answers from `responses` (set with on()), or with a default:
    GET -> 200 [], POST -> 201 {"id": "srv-<n>"}, other verbs -> 200 {}.
    """

    def __init__(self):
        self.responses: Dict[Tuple[str, str], Any] = {}
        self.calls: List[RecordedCall] = []
        self.health_status = 200
        self.unreachable = False
        self._next_id = 0

    # -- configuration -----------------------------------------------------

    def on(self, method: str, path: str, json_body: Any = None, status: int = 200):
        """Answer `method path` with a fixed JSON body (or a callable taking the request)."""
        self.responses[(method.upper(), path)] = (status, json_body)

    def fail(self, method: str, path: str, status: int = 500, error: str = "Internal error"):
        self.on(method, path, {"error": error}, status=status)

    def calls_to(self, method: str, path: str) -> List[RecordedCall]:
        return [c for c in self.calls if c.method == method.upper() and c.path == path]

    def mutating_calls(self) -> List[RecordedCall]:
        return [c for c in self.calls if c.method != "GET" and not c.path.startswith("/auth/")]

    # -- transport -----------------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)

        path = request.url.path
        if path == "/health":
            return httpx.Response(self.health_status, json={"status": "ok"})
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]

        body = json.loads(request.content) if request.content else None
        self.calls.append(RecordedCall(
            method=request.method,
            path=path,
            params=dict(request.url.params),
            body=body,
            authorization=request.headers.get("Authorization"),
        ))

        configured = self.responses.get((request.method, path))
        if configured is not None:
            status, payload = configured
            if callable(payload):
                payload = payload(request)
            return httpx.Response(status, json=payload)

        if path == "/users/me":
            return self._me(request)
        if path == "/auth/login":
            return self._login(body or {})
        if path == "/auth/logout":
            return httpx.Response(200, json={"message": "Logged out"})

        if request.method == "GET":
            return httpx.Response(200, json=[])
        if request.method == "POST":
            self._next_id += 1
            return httpx.Response(201, json={"id": f"srv-{self._next_id}"})
        return httpx.Response(200, json={})

    def _me(self, request: httpx.Request) -> httpx.Response:
        header = request.headers.get("Authorization", "")
        token = header.removeprefix("Bearer ")
        for role, user in USERS.items():
            if token == token_for(role):
                return httpx.Response(200, json=user)
        return httpx.Response(401, json={"error": "Invalid or expired token"})

    def _login(self, body: dict) -> httpx.Response:
        for role, user in USERS.items():
            if body.get("email") == user["email"] and body.get("password") == PASSWORD:
                return httpx.Response(200, json={
                    "access_token": token_for(role),
                    "refresh_token": f"refresh-{role.lower()}",
                    "user": user,
                })
        return httpx.Response(401, json={"error": "Invalid credentials"})


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def app(backend):
    """Create application for testing, wired to the fake backend."""
    app = create_app()
    app.config.update({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "API_BASE_URL": API_BASE_URL,
        "BACKEND_HEALTH_URL": HEALTH_URL,
        "API_TRANSPORT": httpx.MockTransport(backend.handler),
        "REFRESH_AFTER_MUTATION": False,
    })
    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def login_as(client) -> Callable[[str], None]:
    """Store a role's credentials in the session cookie, as a successful login would."""
    def _login(role: str) -> None:
        with client.session_transaction() as sess:
            sess["access_token"] = token_for(role)
            sess["refresh_token"] = f"refresh-{role.lower()}"
    return _login


def page_text(response) -> str:
    return response.get_data(as_text=True)
