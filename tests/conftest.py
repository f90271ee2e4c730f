# tests/conftest.py
import asyncio
import os
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ---- test environment (set before the app is imported) ----
os.environ.setdefault("ENV", "test")
os.environ.setdefault("API_BASE_URL", "http://upstream.test/api")

from portal.client.http import ApiClient  # noqa: E402
from portal.client.storage import CredentialStore  # noqa: E402
from portal.core.config import settings  # noqa: E402
from portal.main import app  # noqa: E402
from portal.services.sessions import SessionManager  # noqa: E402

Reply = Union[httpx.Response, Tuple[int, Any], Callable[[httpx.Request], Any]]

UPSTREAM = "http://upstream.test/api"


class FakeUpstream:
    """In-process stand-in for the terminal REST API.

    Routes answer ``(status, json)`` or run a callable. Routes registered with
    ``auth=True`` answer 401 unless the bearer token is in ``valid_tokens``.
    ``/auth/refresh-token`` is built in: it counts calls, optionally waits on
    ``refresh_gate`` and answers ``refresh_reply``.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[Reply, bool]] = {}
        self.requests: List[httpx.Request] = []
        self.valid_tokens = {"access-1"}
        self.refresh_calls = 0
        self.refresh_bodies: List[bytes] = []
        self.refresh_reply: Tuple[int, Any] = (200, {"accessToken": "access-2"})
        self.refresh_gate: Optional[asyncio.Event] = None
        # set to make the refresh call fail at the network level
        self.refresh_error: Optional[str] = None

    def route(self, method: str, path: str, reply: Reply, auth: bool = True) -> None:
        self.routes[(method.upper(), path)] = (reply, auth)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and self._path(r) == path]

    @staticmethod
    def _path(request: httpx.Request) -> str:
        return request.url.path[len("/api"):]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = self._path(request)

        if request.method == "POST" and path == "/auth/refresh-token":
            self.refresh_calls += 1
            self.refresh_bodies.append(request.content)
            if self.refresh_gate is not None:
                await self.refresh_gate.wait()
            if self.refresh_error is not None:
                raise httpx.ConnectError(self.refresh_error, request=request)
            status, body = self.refresh_reply
            if status == 200 and isinstance(body, dict) and body.get("accessToken"):
                self.valid_tokens = {body["accessToken"]}
            return httpx.Response(status, json=body)

        entry = self.routes.get((request.method, path))
        if entry is None:
            return httpx.Response(404, json={"message": f"No route {request.method} {path}"})
        reply, auth = entry
        if auth:
            header = request.headers.get("Authorization", "")
            token = header[len("Bearer "):] if header.startswith("Bearer ") else None
            if token not in self.valid_tokens:
                return httpx.Response(401, json={"message": "Token expired"})
        if callable(reply):
            reply = reply(request)
            if asyncio.iscoroutine(reply):
                reply = await reply
        if isinstance(reply, httpx.Response):
            return reply
        status, body = reply
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(scope="session")
def anyio_backend():
    """Run anyio-marked tests on asyncio."""
    return "asyncio"


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def credentials() -> CredentialStore:
    store = CredentialStore()
    store.save_login("access-1", "refresh-1", {"id": "u1", "name": "Ada", "email": "ada@example.com", "role": "admin"})
    return store


@pytest_asyncio.fixture
async def api_client(upstream: FakeUpstream, credentials: CredentialStore):
    """ApiClient talking to the fake upstream, logged in with ``access-1``."""
    async with ApiClient(UPSTREAM, credentials, transport=upstream.transport) as c:
        yield c


@pytest_asyncio.fixture
async def client(upstream: FakeUpstream):
    """Portal app over ASGITransport; every session's upstream client hits ``upstream``."""
    sessions = SessionManager(settings, transport=upstream.transport)
    app.state.sessions = sessions
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    await sessions.close_all()


def login_reply(role: str = "admin", access: str = "access-1", name: Optional[str] = "Ada"):
    user = {"id": "u1", "email": "ada@example.com", "role": role}
    if name:
        user["name"] = name
    return (200, {"accessToken": access, "refreshToken": "refresh-1", "user": user})


async def log_in(client: AsyncClient, upstream: FakeUpstream, role: str = "admin") -> httpx.Response:
    upstream.route("POST", "/auth/login", login_reply(role), auth=False)
    r = await client.post(f"/{role}/login", json={"email": "ada@example.com", "password": "secret"})
    assert r.status_code == 200, r.text
    return r
