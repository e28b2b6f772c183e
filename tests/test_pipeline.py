"""
Tests for the request/response pipeline

Builder, transport failure handling, decoding and outcome classification,
driven through in-process transports.
"""

import asyncio
import json

import httpx
import pytest
from hypothesis import given, settings, strategies as st

from stytch_auth.errors import ErrorKind, RequestFailure, ServiceError
from stytch_auth.shared import async_request, build_outbound_request, build_url, classify, request
from stytch_auth.types import FetchConfig, RequestConfig

from fakes import AsyncFailingTransport, AsyncFakeTransport, FailingTransport, FakeTransport


BASE_URL = "https://test.stytch.com/v1/"


@pytest.fixture
def fetch_config() -> FetchConfig:
    return FetchConfig(
        base_url=BASE_URL,
        headers={"Authorization": "Basic abc", "content-type": "text/plain", "X-Trace": "1"},
        timeout=5.0,
    )


# =============================================================================
# Request Builder
# =============================================================================

class TestBuildRequest:
    """Tests for URL and outbound request composition."""

    def test_path_is_resolved_against_base_url(self):
        assert build_url(BASE_URL, "passwords/authenticate") == (
            "https://test.stytch.com/v1/passwords/authenticate"
        )

    def test_params_are_appended_and_stringified(self):
        url = build_url(BASE_URL, "users", {"limit": 10, "cursor": "abc"})
        parsed = httpx.URL(url)
        assert parsed.path == "/v1/users"
        assert parsed.params["limit"] == "10"
        assert parsed.params["cursor"] == "abc"

    def test_body_is_json_with_authoritative_content_type(self, fetch_config: FetchConfig):
        outbound = build_outbound_request(
            fetch_config,
            RequestConfig(method="POST", url="passwords", data={"email": "a@example.com"}),
        )
        assert json.loads(outbound.content) == {"email": "a@example.com"}
        assert outbound.headers["Content-Type"] == "application/json"
        assert "content-type" not in outbound.headers
        assert outbound.headers["X-Trace"] == "1"
        assert outbound.timeout == 5.0

    def test_no_body_without_data(self, fetch_config: FetchConfig):
        outbound = build_outbound_request(fetch_config, RequestConfig(method="GET", url="users/u1"))
        assert outbound.content is None
        assert outbound.method == "GET"

    def test_fetch_config_is_not_mutated(self, fetch_config: FetchConfig):
        before = dict(fetch_config.headers)
        build_outbound_request(fetch_config, RequestConfig(method="POST", url="passwords", data={}))
        assert dict(fetch_config.headers) == before


# =============================================================================
# Outcome Classification
# =============================================================================

class TestRequest:
    """Tests for the sync pipeline."""

    def test_success_returns_decoded_payload(self, fetch_config: FetchConfig):
        body = {
            "user_id": "u1",
            "email_id": "e1",
            "user_created": True,
            "status_code": 201,
            "request_id": "r1",
        }
        transport = FakeTransport(201, body)

        result = request(fetch_config, RequestConfig(method="POST", url="passwords/migrate", data={}), transport)

        assert result == body
        assert len(transport.requests) == 1

    def test_service_error(self, fetch_config: FetchConfig):
        transport = FakeTransport(400, {
            "status_code": 400,
            "request_id": "r2",
            "error_type": "invalid_email",
            "error_message": "bad",
            "error_url": "http://x",
        })

        with pytest.raises(ServiceError) as exc_info:
            request(fetch_config, RequestConfig(method="POST", url="passwords", data={}), transport)

        error = exc_info.value
        assert error.kind is ErrorKind.SERVICE_ERROR
        assert error.error_type == "invalid_email"
        assert error.status_code == 400
        assert error.request_id == "r2"
        assert error.error_url == "http://x"
        assert json.loads(str(error))["error_message"] == "bad"

    @settings(max_examples=50)
    @given(status_code=st.integers(min_value=400, max_value=599))
    def test_any_error_status_raises_even_with_success_shape(self, status_code: int):
        """Property: status >= 400 never takes the success path."""
        config = FetchConfig(base_url=BASE_URL, headers={})
        transport = FakeTransport(status_code, {"user_id": "u1", "status_code": 200, "request_id": "r"})

        with pytest.raises(ServiceError) as exc_info:
            request(config, RequestConfig(method="GET", url="users/u1"), transport)

        assert exc_info.value.request_id == "r"
        assert exc_info.value.error_type == ""

    @settings(max_examples=50)
    @given(status_code=st.integers(min_value=200, max_value=399))
    def test_any_non_error_status_succeeds(self, status_code: int):
        config = FetchConfig(base_url=BASE_URL, headers={})
        transport = FakeTransport(status_code, {"ok": True})

        assert request(config, RequestConfig(method="GET", url="x"), transport) == {"ok": True}

    def test_non_object_error_body_still_raises_service_error(self):
        error = pytest.raises(ServiceError, classify, 502, ["upstream"], RequestConfig(method="GET", url="x"))
        assert error.value.status_code == 502
        assert error.value.raw == ["upstream"]

    def test_transport_failure_carries_descriptor(self, fetch_config: FetchConfig):
        descriptor = RequestConfig(method="POST", url="passwords/authenticate", data={"email": "a"})
        transport = FailingTransport(httpx.ConnectError("Name or service not known"))

        with pytest.raises(RequestFailure) as exc_info:
            request(fetch_config, descriptor, transport)

        error = exc_info.value
        assert error.kind is ErrorKind.REQUEST_FAILURE
        assert error.request is descriptor
        assert error.request.url == "passwords/authenticate"
        assert error.request.method == "POST"
        assert "Name or service not known" in error.message
        assert isinstance(error.__cause__, httpx.ConnectError)

    def test_garbage_body_is_request_failure(self, fetch_config: FetchConfig):
        transport = FakeTransport(200, content=b"<html>bad gateway</html>")

        with pytest.raises(RequestFailure) as exc_info:
            request(fetch_config, RequestConfig(method="GET", url="x"), transport)

        assert exc_info.value.message.startswith("Unable to parse JSON response from server:")

    def test_empty_error_body_is_request_failure(self, fetch_config: FetchConfig):
        transport = FakeTransport(500, content=b"")

        with pytest.raises(RequestFailure):
            request(fetch_config, RequestConfig(method="GET", url="x"), transport)


class TestAsyncRequest:
    """Tests for the async pipeline."""

    @pytest.mark.asyncio
    async def test_success(self, fetch_config: FetchConfig):
        transport = AsyncFakeTransport(200, {"status_code": 200})
        result = await async_request(fetch_config, RequestConfig(method="GET", url="x"), transport)
        assert result == {"status_code": 200}

    @pytest.mark.asyncio
    async def test_service_error(self, fetch_config: FetchConfig):
        transport = AsyncFakeTransport(404, {"status_code": 404, "error_type": "user_not_found"})
        with pytest.raises(ServiceError) as exc_info:
            await async_request(fetch_config, RequestConfig(method="GET", url="x"), transport)
        assert exc_info.value.error_type == "user_not_found"

    @pytest.mark.asyncio
    async def test_cancellation_surfaces_as_request_failure(self, fetch_config: FetchConfig):
        descriptor = RequestConfig(method="POST", url="oauth/authenticate", data={"token": "t"})
        transport = AsyncFailingTransport(asyncio.CancelledError())

        with pytest.raises(RequestFailure) as exc_info:
            await async_request(fetch_config, descriptor, transport)

        assert exc_info.value.request is descriptor
        assert "cancelled" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_timeout_is_request_failure(self, fetch_config: FetchConfig):
        transport = AsyncFailingTransport(httpx.ReadTimeout("timed out"))
        with pytest.raises(RequestFailure) as exc_info:
            await async_request(fetch_config, RequestConfig(method="GET", url="x"), transport)
        assert "timed out" in exc_info.value.message
