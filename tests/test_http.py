from __future__ import annotations

import httpx
import pytest

from opencnam.net.http import (
    DEFAULT_USER_AGENT,
    HttpClientConfig,
    HttpxTransport,
    build_client,
)
from opencnam.request import LookupRequest

URL = "https://api.opencnam.com/v2/phone/3392033301?format=json&auth_token=tok&account_sid=AC1"


def _mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_httpx_transport_returns_body_from_single_get() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="MASSACHUSETTS\n")

    with _mock_client(handler) as client:
        body = HttpxTransport(client).execute(URL)

    assert body == "MASSACHUSETTS\n"
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/v2/phone/3392033301"
    assert seen[0].url.query == b"format=json&auth_token=tok&account_sid=AC1"


def test_httpx_transport_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="not found")

    with _mock_client(handler) as client:
        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            HttpxTransport(client).execute(URL)

    assert exc_info.value.response.status_code == 404


def test_httpx_transport_can_return_error_bodies() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="busy")

    with _mock_client(handler) as client:
        assert HttpxTransport(client, raise_for_status=False).execute(URL) == "busy"


def test_connection_failure_reaches_caller_once() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        raise httpx.ConnectError("connection refused", request=request)

    with _mock_client(handler) as client:
        req = LookupRequest(HttpxTransport(client))
        req.set_phone_number("3392033301")
        with pytest.raises(httpx.ConnectError):
            req.execute()

    assert calls == 1


def test_lookup_request_over_httpx_transport() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["format"] == "xml"
        return httpx.Response(
            200,
            text="<object><cnam>MASSACHUSETTS</cnam><number>3392033301</number></object>",
            headers={"Content-Type": "application/xml"},
        )

    with _mock_client(handler) as client:
        req = LookupRequest(HttpxTransport(client))
        req.set_phone_number("13392033301")
        req.set_format("xml")
        assert req.execute().startswith("<object><cnam>MASSACHUSETTS</cnam>")


def test_build_client_applies_config() -> None:
    config = HttpClientConfig(timeout_seconds=3.5, user_agent="unit-test/1.0")
    with build_client(config) as client:
        assert client.headers["User-Agent"] == "unit-test/1.0"
        assert client.timeout.read == 3.5
        assert client.follow_redirects is True
    assert client.is_closed


def test_default_user_agent_names_the_library() -> None:
    assert HttpClientConfig().user_agent == DEFAULT_USER_AGENT
    assert DEFAULT_USER_AGENT.startswith("opencnam-python/")
