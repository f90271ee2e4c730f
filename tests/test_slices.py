# tests/test_slices.py
import pytest

from conftest import login_reply
from portal.client.http import ApiClient
from portal.core.errors import SessionExpiredError
from portal.schemas.audit_log import AuditLogFilters
from portal.schemas.container import ContainerForm
from portal.schemas.yard import YardBlockUpdate
from portal.store.state import ResourceState, Status
from portal.store.store import Store

pytestmark = pytest.mark.anyio

CONTAINER = {"id": "c1", "containerNumber": "MSCU1234567", "status": "in-yard", "blacklisted": False}


def test_resource_state_phases():
    state = ResourceState(data=[])
    assert state.status is Status.IDLE

    state.start()
    assert state.is_loading and state.error is None

    state.fail("Failed to fetch containers", 500)
    assert state.status is Status.ERROR
    assert (state.error, state.error_code) == ("Failed to fetch containers", 500)

    state.start()
    assert state.error is None and state.error_code is None

    state.succeed()
    assert state.status is Status.SUCCESS


async def test_fetch_success_stores_data(api_client: ApiClient, upstream):
    upstream.route("GET", "/containers", (200, [CONTAINER]))
    store = Store(api_client)

    found = await store.containers.fetch_all()

    assert [c.container_number for c in found] == ["MSCU1234567"]
    assert store.containers.state.status is Status.SUCCESS
    assert store.containers.containers[0].id == "c1"


async def test_failure_uses_server_message(api_client: ApiClient, upstream):
    upstream.route("GET", "/containers", (400, {"message": "Bad filter"}))
    store = Store(api_client)

    assert await store.containers.fetch_all() is None
    assert store.containers.state.status is Status.ERROR
    assert store.containers.error == "Bad filter"
    assert store.containers.state.error_code == 400


async def test_failure_without_message_uses_fallback(api_client: ApiClient, upstream):
    upstream.route("GET", "/vehicles", (500, None))
    store = Store(api_client)

    await store.vehicles.fetch_all()

    assert store.vehicles.error == "Failed to fetch vehicles"
    store.vehicles.clear_error()
    assert store.vehicles.error is None


async def test_create_refetches_list(api_client: ApiClient, upstream):
    upstream.route("POST", "/containers", (201, {"message": "Container created"}))
    upstream.route("GET", "/containers", (200, [CONTAINER]))
    store = Store(api_client)

    resp = await store.containers.create(ContainerForm(container_number="MSCU1234567", shipping_line="MSC"))

    assert resp.message == "Container created"
    assert len(upstream.calls("GET", "/containers")) == 1
    assert store.containers.containers[0].id == "c1"


async def test_blacklist_flips_cached_flag(api_client: ApiClient, upstream):
    upstream.route("GET", "/containers", (200, [CONTAINER]))
    upstream.route("GET", "/containers/c1", (200, CONTAINER))
    upstream.route("PATCH", "/containers/c1/blacklist", (200, {"message": "ok"}))
    upstream.route("PATCH", "/containers/c1/unblacklist", (200, None))
    store = Store(api_client)
    await store.containers.fetch_all()
    await store.containers.fetch_by_id("c1")

    await store.containers.blacklist("c1")
    assert store.containers.containers[0].blacklisted is True
    assert store.containers.current.blacklisted is True

    await store.containers.unblacklist("c1")
    assert store.containers.containers[0].blacklisted is False
    assert store.containers.current.blacklisted is False


async def test_yard_update_merges_into_list(api_client: ApiClient, upstream):
    upstream.route("GET", "/yard", (200, [{"id": "b1", "name": "A", "capacity": 100, "occupied": 10}]))
    upstream.route("PUT", "/yard/b1", (200, {"message": "updated"}))
    store = Store(api_client)
    await store.yard.fetch_blocks()

    await store.yard.update_block("b1", YardBlockUpdate(capacity=150))

    assert store.yard.blocks[0].capacity == 150
    assert store.yard.blocks[0].name == "A"


async def test_toggle_user_block_updates_list(api_client: ApiClient, upstream):
    upstream.route("GET", "/users", (200, [{"id": "u2", "email": "op@example.com", "role": "operator"}]))
    upstream.route("PATCH", "/users/u2/block", (200, {"user": {"id": "u2", "isBlocked": True}}))
    store = Store(api_client)
    await store.admin.fetch_all_users()

    await store.admin.toggle_user_block("u2")

    assert store.admin.users[0].is_blocked is True


async def test_audit_log_page_defaults(api_client: ApiClient, upstream):
    upstream.route("GET", "/users/audit-logs", (200, {"logs": [], "total": 120, "page": 2, "limit": 50}))
    store = Store(api_client)
    assert store.audit_logs.page.limit == 50

    page = await store.audit_logs.fetch(AuditLogFilters(page=2))

    assert page.total_pages == 3
    assert upstream.requests[0].url.params["page"] == "2"


async def test_login_persists_credentials_and_name_fallback(api_client: ApiClient, upstream, credentials):
    credentials.clear()
    upstream.route("POST", "/auth/login", login_reply("operator", access="access-9", name=None), auth=False)
    store = Store(api_client)

    user = await store.auth.login("ada@example.com", "secret", "operator")

    assert user["name"] == "ada"
    assert credentials.access_token == "access-9"
    assert credentials.refresh_token == "refresh-1"
    assert credentials.user["role"] == "operator"
    assert store.auth.is_authenticated


async def test_login_failure_keeps_logged_out(api_client: ApiClient, upstream, credentials):
    credentials.clear()
    upstream.route("POST", "/auth/login", (401, {"message": "Invalid credentials"}), auth=False)
    store = Store(api_client)

    assert await store.auth.login("ada@example.com", "nope") is None
    assert store.auth.error == "Invalid credentials"
    assert store.auth.state.error_code == 401
    assert credentials.access_token is None
    assert upstream.refresh_calls == 0


async def test_logout_clears_even_when_upstream_fails(api_client: ApiClient, upstream, credentials):
    upstream.route("POST", "/auth/logout", (500, {"message": "down"}))
    store = Store(api_client)

    await store.auth.logout()

    assert credentials.access_token is None
    assert credentials.refresh_token is None
    assert store.auth.user is None


async def test_session_expiry_propagates_out_of_slice(api_client: ApiClient, upstream):
    upstream.route("GET", "/dashboard/kpi", (200, {"gateInToday": 3}))
    upstream.valid_tokens = {"never-issued"}
    upstream.refresh_reply = (401, {"message": "Refresh token expired"})
    store = Store(api_client)

    with pytest.raises(SessionExpiredError):
        await store.dashboard.fetch_kpi()

    assert store.dashboard.state.status is Status.ERROR


async def test_store_reset_returns_to_initial_state(api_client: ApiClient, upstream):
    upstream.route("GET", "/containers", (200, [CONTAINER]))
    store = Store(api_client)
    await store.containers.fetch_all()

    store.reset()

    assert store.containers.containers == []
    assert store.containers.state.status is Status.IDLE
    assert store.auth.user is None


async def test_unreadable_response_uses_fallback_without_code(api_client: ApiClient, upstream):
    upstream.route("GET", "/containers", (200, [{"unexpected": 1}]))
    store = Store(api_client)

    assert await store.containers.fetch_all() is None
    assert store.containers.state.status is Status.ERROR
    assert store.containers.error == "Failed to fetch containers"
    assert store.containers.state.error_code is None
