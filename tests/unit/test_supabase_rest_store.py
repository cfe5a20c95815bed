"""Unit tests for the SupabaseRestStore (PostgREST over httpx)."""

import json

import httpx
import pytest

from workshop_data.application.interfaces import Pagination, QueryFilter, SortSpec
from workshop_data.domain.exceptions import RemoteStoreConfigurationError
from workshop_data.infrastructure.remote import SupabaseRestStore

SUPABASE_URL = "https://demo.supabase.co"


# ── Helpers ──


def _make_store(handler, **kwargs) -> SupabaseRestStore:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SupabaseRestStore(SUPABASE_URL, "anon-key", http_client=client, **kwargs)


def _recording_handler(response: httpx.Response, seen: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return response

    return handler


# ── Tests ──


def test_missing_credentials_raise_configuration_error():
    with pytest.raises(RemoteStoreConfigurationError):
        SupabaseRestStore("", "anon-key")
    with pytest.raises(RemoteStoreConfigurationError):
        SupabaseRestStore(SUPABASE_URL, "")


@pytest.mark.asyncio
async def test_fetch_builds_postgrest_query():
    seen: list[httpx.Request] = []
    rows = [{"id": "c1"}, {"id": "c2"}]
    store = _make_store(
        _recording_handler(
            httpx.Response(200, json=rows, headers={"Content-Range": "0-1/42"}), seen
        )
    )

    result = await store.fetch(
        "client_instruments",
        filters=(
            QueryFilter("client_id", "c1"),
            QueryFilter("relationship_type", ["Owned", "Sold"], operator="in"),
        ),
        sort=SortSpec("created_at", ascending=False),
        pagination=Pagination(offset=20, limit=10),
    )

    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/client_instruments"
    assert request.url.params.multi_items() == [
        ("select", "*"),
        ("client_id", "eq.c1"),
        ("relationship_type", "in.(Owned,Sold)"),
        ("order", "created_at.desc"),
        ("offset", "20"),
        ("limit", "10"),
    ]
    assert request.headers["Prefer"] == "count=exact"
    assert result.data == rows
    assert result.count == 42


@pytest.mark.asyncio
async def test_headers_use_anon_key_until_access_token_is_set():
    seen: list[httpx.Request] = []
    store = _make_store(_recording_handler(httpx.Response(200, json=[]), seen), schema="shop")

    await store.fetch("clients")
    store.set_access_token("user-jwt")
    await store.fetch("clients")

    first, second = seen
    assert first.headers["apikey"] == "anon-key"
    assert first.headers["Authorization"] == "Bearer anon-key"
    assert first.headers["Accept-Profile"] == "shop"
    assert second.headers["Authorization"] == "Bearer user-jwt"


@pytest.mark.asyncio
async def test_fetch_without_content_range_has_no_count():
    store = _make_store(lambda request: httpx.Response(200, json=[{"id": "i1"}]))

    result = await store.fetch("instruments")

    assert result.ok
    assert result.count is None


@pytest.mark.asyncio
async def test_postgrest_error_body_is_mapped():
    body = {
        "message": "permission denied for table clients",
        "code": "42501",
        "details": None,
        "hint": "Check RLS policies",
    }
    store = _make_store(lambda request: httpx.Response(401, json=body))

    result = await store.fetch("clients")

    assert result.data is None
    assert result.error.code == "42501"
    assert result.error.message == "permission denied for table clients"
    assert result.error.hint == "Check RLS policies"


@pytest.mark.asyncio
async def test_non_json_error_falls_back_to_status_code():
    store = _make_store(lambda request: httpx.Response(502, text="Bad Gateway"))

    result = await store.insert("clients", {"first_name": "Ada"})

    assert result.error.code == "502"
    assert result.error.message == "Bad Gateway"


@pytest.mark.asyncio
async def test_timeout_becomes_error_value():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    store = _make_store(handler)

    result = await store.fetch("instruments")

    assert result.error.code == "TIMEOUT"


@pytest.mark.asyncio
async def test_connection_failure_becomes_error_value():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    store = _make_store(handler)

    result = await store.delete("clients", "c1")

    assert result.error.code == "NETWORK_ERROR"
    assert "refused" in result.error.message


@pytest.mark.asyncio
async def test_insert_returns_created_row():
    seen: list[httpx.Request] = []
    created = {"id": "c9", "first_name": "Ada"}
    store = _make_store(_recording_handler(httpx.Response(201, json=[created]), seen))

    result = await store.insert("clients", {"first_name": "Ada"})

    assert result.data == created
    assert seen[0].method == "POST"
    assert seen[0].headers["Prefer"] == "return=representation"
    assert json.loads(seen[0].content) == {"first_name": "Ada"}


@pytest.mark.asyncio
async def test_update_targets_row_by_id():
    seen: list[httpx.Request] = []
    store = _make_store(
        _recording_handler(httpx.Response(200, json=[{"id": "i1", "maker": "Hill"}]), seen)
    )

    result = await store.update("instruments", "i1", {"maker": "Hill"})

    assert result.data["maker"] == "Hill"
    assert seen[0].method == "PATCH"
    assert seen[0].url.params["id"] == "eq.i1"


@pytest.mark.asyncio
async def test_update_matching_nothing_is_not_found():
    store = _make_store(lambda request: httpx.Response(200, json=[]))

    result = await store.update("instruments", "missing", {"maker": "Hill"})

    assert result.error.code == "NOT_FOUND"
    assert "missing" in result.error.message


@pytest.mark.asyncio
async def test_delete_succeeds_on_no_content():
    store = _make_store(lambda request: httpx.Response(204))

    result = await store.delete("client_instruments", "x1")

    assert result.ok
    assert result.data is None


@pytest.mark.asyncio
async def test_close_leaves_injected_client_open():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    store = SupabaseRestStore(SUPABASE_URL, "anon-key", http_client=client)

    await store.close()

    assert not client.is_closed
    await client.aclose()
