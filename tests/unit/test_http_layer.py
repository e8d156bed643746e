# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import httpx
import pytest

from apifacade.config import ApiOptions, AuthScheme
from apifacade.http import (
    ApiResponse,
    AsyncHttpxAdapter,
    AsyncStubAdapter,
    HttpxAdapter,
    StubAdapter,
    build_auth_header,
    build_client_kwargs,
    create_default_adapter,
    merge_headers,
)


def test_build_auth_header_schemes():
    assert build_auth_header(AuthScheme.KEY, "abc") == {"Authorization": "key=abc"}
    assert build_auth_header(AuthScheme.BEARER, "abc") == {"Authorization": "Bearer abc"}
    assert build_auth_header(AuthScheme.NONE, "abc") == {}
    assert build_auth_header("Bearer", "abc") == {"Authorization": "Bearer abc"}
    assert build_auth_header("key", None) == {"Authorization": "key="}


def test_merge_headers_is_case_insensitive():
    merged = merge_headers({"Content-type": "application/json", "X-A": "1"}, None, {"content-type": "text/plain"})
    assert merged == {"X-A": "1", "content-type": "text/plain"}
    assert merge_headers({"X-Empty": None}) == {"X-Empty": ""}


def test_build_client_kwargs_from_options():
    options = ApiOptions(base_path="https://api.example", api_key="abc", auth_type="key", timeout=2500)
    kwargs = build_client_kwargs(options)
    assert kwargs["base_url"] == "https://api.example"
    assert kwargs["timeout"] == 2.5
    assert kwargs["headers"] == {"Content-type": "application/json", "Authorization": "key=abc"}


def test_build_client_kwargs_without_auth():
    kwargs = build_client_kwargs(ApiOptions(api_key="ignored"))
    assert "Authorization" not in kwargs["headers"]


def test_api_response_from_httpx_decodes_json_and_text():
    request = httpx.Request("POST", "https://api.example/items")
    json_resp = httpx.Response(201, json={"id": 7}, request=request)
    parsed = ApiResponse.from_httpx(json_resp)
    assert parsed.data == {"id": 7}
    assert parsed.status_code == 201
    assert parsed.method == "POST"
    assert parsed.url == "https://api.example/items"
    assert parsed.raw is json_resp

    text_resp = httpx.Response(200, text="hello", request=request)
    assert ApiResponse.from_httpx(text_resp).data == "hello"

    empty_resp = httpx.Response(204, request=request)
    assert ApiResponse.from_httpx(empty_resp).data is None

    broken = httpx.Response(200, content=b"{not json", headers={"Content-Type": "application/json"}, request=request)
    assert ApiResponse.from_httpx(broken).data == "{not json"


def test_api_response_without_request():
    resp = ApiResponse.from_httpx(httpx.Response(200, text="x"))
    assert resp.method is None
    assert resp.url is None
    assert resp.data == "x"


def _mock_client(options, handler, *, asynchronous=False):
    kwargs = build_client_kwargs(options)
    transport = httpx.MockTransport(handler)
    if asynchronous:
        return httpx.AsyncClient(transport=transport, **kwargs)
    return httpx.Client(transport=transport, **kwargs)


def test_httpx_adapter_applies_base_url_headers_and_auth():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    options = ApiOptions(base_path="https://api.example/v1/", api_key="abc", auth_type="bearer")
    adapter = HttpxAdapter(options, client=_mock_client(options, handler))
    response = adapter.request("get", "users", params={"page": 2}, headers={"X-Trace": "t1"})

    assert response.data == {"ok": True}
    assert str(seen[0].url) == "https://api.example/v1/users?page=2"
    assert seen[0].method == "GET"
    assert seen[0].headers["Authorization"] == "Bearer abc"
    assert seen[0].headers["Content-type"] == "application/json"
    assert seen[0].headers["X-Trace"] == "t1"
    adapter.close()


def test_httpx_adapter_raises_for_error_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    options = ApiOptions(base_path="https://api.example")
    adapter = HttpxAdapter(options, client=_mock_client(options, handler))
    with pytest.raises(httpx.HTTPStatusError) as excinfo:
        adapter.request("GET", "/fail")
    assert excinfo.value.response.status_code == 500


def test_httpx_adapter_propagates_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    options = ApiOptions(base_path="https://api.example")
    adapter = HttpxAdapter(options, client=_mock_client(options, handler))
    with pytest.raises(httpx.ReadTimeout):
        adapter.request("GET", "/slow")


@pytest.mark.asyncio
async def test_async_httpx_adapter_round_trip():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"created": True})

    options = ApiOptions(base_path="https://api.example", api_key="abc", auth_type="key")
    adapter = AsyncHttpxAdapter(options, client=_mock_client(options, handler, asynchronous=True))
    response = await adapter.request("POST", "/items", json={"name": "widget"})

    assert response.status_code == 201
    assert response.data == {"created": True}
    assert seen[0].headers["Authorization"] == "key=abc"
    assert json.loads(seen[0].content) == {"name": "widget"}
    await adapter.aclose()


@pytest.mark.asyncio
async def test_async_httpx_adapter_raises_for_error_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    options = ApiOptions(base_path="https://api.example")
    adapter = AsyncHttpxAdapter(options, client=_mock_client(options, handler, asynchronous=True))
    with pytest.raises(httpx.HTTPStatusError):
        await adapter.request("DELETE", "/items/1")
    await adapter.aclose()


def test_create_default_adapter_picks_flavour():
    options = ApiOptions(base_path="https://api.example")
    sync_adapter = create_default_adapter(options, asynchronous=False)
    async_adapter = create_default_adapter(options)
    assert isinstance(sync_adapter, HttpxAdapter)
    assert isinstance(async_adapter, AsyncHttpxAdapter)
    assert sync_adapter.options is options
    sync_adapter.close()


def test_stub_adapter_replays_outcomes_and_records_calls():
    ok = ApiResponse(data="ok", status_code=200)
    stub = StubAdapter([RuntimeError("first"), ok])

    with pytest.raises(RuntimeError):
        stub.request("get", "/a")
    assert stub.request("GET", "/b", params={"q": 1}) is ok
    assert stub.request("GET", "/c") is ok
    assert stub.call_count == 3
    assert stub.calls[0].method == "GET"
    assert stub.calls[1].kwargs == {"params": {"q": 1}}


def test_stub_adapter_without_outcomes_fails():
    stub = StubAdapter()
    with pytest.raises(RuntimeError):
        stub.request("GET", "/")
    stub.add(ApiResponse(data=1))
    assert stub.request("GET", "/").data == 1


@pytest.mark.asyncio
async def test_async_stub_adapter():
    stub = AsyncStubAdapter([ApiResponse(data={"x": 1}, status_code=200)])
    response = await stub.request("PATCH", "/x", json={"x": 1})
    assert response.data == {"x": 1}
    assert stub.calls[0].method == "PATCH"


def test_build_client_kwargs_zero_timeout_means_no_timeout():
    assert build_client_kwargs(ApiOptions(timeout=0))["timeout"] is None
