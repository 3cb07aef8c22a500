"""
Unit tests for the HlaPrint HTTP client.

HTTP traffic is mocked with respx; no real network access.
"""

import json
import logging

import httpx
import pytest

from core.exceptions import HttpError, RequestTimeoutError, ServiceUnavailableError
from core.http_client import MAX_BODY_EXCERPT_LENGTH, HlaPrintClient


BASE_URL = "https://hlaprint.test"


# Fixtures

@pytest.fixture
def client():
    """Create a client against the test base URL."""
    client = HlaPrintClient(BASE_URL, timeout_seconds=5.0, logger=logging.getLogger("test"))
    yield client
    client.close()


class TestInitialization:
    """Constructor checks."""

    def test_requires_base_url(self):
        with pytest.raises(ValueError) as exc_info:
            HlaPrintClient("")

        assert "HLAPRINT_BASE_URL" in str(exc_info.value)

    def test_strips_trailing_slash(self):
        client = HlaPrintClient(BASE_URL + "/")

        assert client.base_url == BASE_URL
        client.close()


class TestSuccess:
    """2xx responses."""

    def test_returns_decoded_json(self, client, respx_mock):
        respx_mock.post(f"{BASE_URL}/api/login").mock(
            return_value=httpx.Response(200, json={"token": "T1", "status": "ok"})
        )

        payload = client.post_json("/api/login", {"email": "a@b.com", "password": "x"})

        assert payload == {"token": "T1", "status": "ok"}

    def test_sends_json_body_with_default_content_type(self, client, respx_mock):
        route = respx_mock.post(f"{BASE_URL}/api/login").mock(
            return_value=httpx.Response(200, json={})
        )

        client.post_json("/api/login", {"email": "a@b.com", "password": "x"})

        request = route.calls.last.request
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"email": "a@b.com", "password": "x"}

    def test_caller_headers_merged_over_default(self, client, respx_mock):
        route = respx_mock.post(f"{BASE_URL}/api/createPrintjob").mock(
            return_value=httpx.Response(200, json={})
        )

        client.post_json(
            "/api/createPrintjob",
            {"device_name": "d"},
            headers={"Authorization": "Bearer T1"},
        )

        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer T1"
        assert request.headers["Content-Type"] == "application/json"

    def test_no_body_when_none(self, client, respx_mock):
        route = respx_mock.get(f"{BASE_URL}/api/ping").mock(
            return_value=httpx.Response(200, text="pong")
        )

        client.request("/api/ping")

        assert route.calls.last.request.content == b""

    def test_non_json_body_falls_back_to_text(self, client, respx_mock):
        respx_mock.get(f"{BASE_URL}/api/ping").mock(
            return_value=httpx.Response(200, text="pong")
        )

        assert client.request("/api/ping") == "pong"

    def test_empty_body_returns_empty_text(self, client, respx_mock):
        respx_mock.post(f"{BASE_URL}/api/logout").mock(return_value=httpx.Response(204))

        assert client.request("/api/logout", method="POST") == ""


class TestHttpErrors:
    """Non-2xx responses become HttpError."""

    def test_status_proxy_header_and_body(self, client, respx_mock):
        respx_mock.post(f"{BASE_URL}/api/createPrintjob").mock(
            return_value=httpx.Response(
                500,
                text="Internal error",
                headers={"X-Upstream-Error": "upstream timeout"},
            )
        )

        with pytest.raises(HttpError) as exc_info:
            client.post_json("/api/createPrintjob", {})

        error = exc_info.value
        assert error.status == 500
        assert error.proxy_error == "upstream timeout"
        assert error.body_excerpt == "Internal error"
        assert str(error) == "HTTP 500 (proxy: upstream timeout): Internal error"

    def test_without_proxy_header(self, client, respx_mock):
        respx_mock.post(f"{BASE_URL}/api/login").mock(
            return_value=httpx.Response(401, json={"message": "Invalid credentials"})
        )

        with pytest.raises(HttpError) as exc_info:
            client.post_json("/api/login", {})

        error = exc_info.value
        assert error.status == 401
        assert error.proxy_error is None
        assert str(error).startswith("HTTP 401: ")
        assert "Invalid credentials" in str(error)

    def test_body_excerpt_truncated(self, client, respx_mock):
        respx_mock.get(f"{BASE_URL}/api/big").mock(
            return_value=httpx.Response(502, text="x" * 1000)
        )

        with pytest.raises(HttpError) as exc_info:
            client.request("/api/big")

        assert len(exc_info.value.body_excerpt) == MAX_BODY_EXCERPT_LENGTH

    def test_custom_proxy_header_name(self, respx_mock):
        client = HlaPrintClient(BASE_URL, proxy_error_header="X-Proxy-Error")
        respx_mock.get(f"{BASE_URL}/api/x").mock(
            return_value=httpx.Response(503, text="", headers={"X-Proxy-Error": "no upstream"})
        )

        with pytest.raises(HttpError) as exc_info:
            client.request("/api/x")

        assert exc_info.value.proxy_error == "no upstream"
        assert str(exc_info.value) == "HTTP 503 (proxy: no upstream)"
        client.close()


class TestTransportErrors:
    """Network failures are reported once, never retried."""

    def test_timeout(self, client, respx_mock):
        route = respx_mock.post(f"{BASE_URL}/api/login").mock(side_effect=httpx.ReadTimeout)

        with pytest.raises(RequestTimeoutError) as exc_info:
            client.post_json("/api/login", {})

        assert exc_info.value.timeout_seconds == 5.0
        assert route.call_count == 1

    def test_connection_error(self, client, respx_mock):
        route = respx_mock.post(f"{BASE_URL}/api/login").mock(side_effect=httpx.ConnectError)

        with pytest.raises(ServiceUnavailableError) as exc_info:
            client.post_json("/api/login", {})

        assert not isinstance(exc_info.value, RequestTimeoutError)
        assert "ConnectError" in exc_info.value.message
        assert route.call_count == 1
