"""
Tests for the REST middleware chain.

Drives the chain with an in-process handler instead of a network session.
"""

import json
import math
import time

import pytest
import requests

from qdrant_sdk.exceptions import (
    RequestTimeoutError,
    ResourceExhaustedError,
    UnexpectedResponseError,
)
from qdrant_sdk.middleware import (
    ApiKeyMiddleware,
    Request,
    ResponseValidationMiddleware,
    TimeoutMiddleware,
    UserAgentMiddleware,
    build_middlewares,
    compose,
)


def make_response(status_code=200, body=None, headers=None, reason=None):
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if body is None:
        response._content = b""
    elif isinstance(body, bytes):
        response._content = body
    else:
        response._content = json.dumps(body).encode("utf-8")
    response.headers.update(headers or {})
    return response


class RecordingHandler:
    """Terminal handler that records requests and returns a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else make_response(200, {"result": True})
        self.error = error
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


def new_request():
    return Request(method="GET", url="http://localhost:6333/collections")


class TestBuildMiddlewares:
    """Test which middlewares are installed and in what order."""

    def test_full_chain_order(self):
        """Test order: identification, api key, timeout, validation."""
        chain = build_middlewares("agent/1.0", api_key="secret", timeout=5.0)
        assert [type(m) for m in chain] == [
            UserAgentMiddleware,
            ApiKeyMiddleware,
            TimeoutMiddleware,
            ResponseValidationMiddleware,
        ]

    def test_without_key(self):
        """Test that no API key middleware is installed without a key."""
        chain = build_middlewares("agent/1.0", timeout=5.0)
        assert ApiKeyMiddleware not in [type(m) for m in chain]

    @pytest.mark.parametrize("timeout", [None, math.inf])
    def test_infinite_timeout(self, timeout):
        """Test that no timeout middleware is installed for an unbounded timeout."""
        chain = build_middlewares("agent/1.0", timeout=timeout)
        assert [type(m) for m in chain] == [UserAgentMiddleware, ResponseValidationMiddleware]


class TestHeaders:
    """Test identification and authentication headers."""

    def test_user_agent_and_api_key(self):
        """Test that both headers reach the handler."""
        handler = RecordingHandler()
        compose(build_middlewares("agent/1.0", api_key="secret"), handler)(new_request())

        headers = handler.requests[0].headers
        assert headers["User-Agent"] == "agent/1.0"
        assert headers["api-key"] == "secret"

    def test_no_api_key_header_without_key(self):
        handler = RecordingHandler()
        compose(build_middlewares("agent/1.0"), handler)(new_request())
        assert "api-key" not in handler.requests[0].headers

    def test_custom_headers(self):
        """Test that custom headers are sent, lists joined and empty values dropped."""
        handler = RecordingHandler()
        middleware = UserAgentMiddleware(
            "agent/1.0", {"X-Team": "search", "X-Tags": ["a", "b"], "X-Empty": None}
        )
        compose([middleware], handler)(new_request())

        headers = handler.requests[0].headers
        assert headers["X-Team"] == "search"
        assert headers["X-Tags"] == "a, b"
        assert "X-Empty" not in headers


class TestTimeout:
    """Test client-side timeout handling."""

    def test_timeout_passed_to_transport(self):
        handler = RecordingHandler()
        before = time.monotonic()
        compose([TimeoutMiddleware(2.5)], handler)(new_request())

        request = handler.requests[0]
        assert request.timeout == 2.5
        assert before + 2.5 <= request.deadline <= time.monotonic() + 2.5

    def test_zero_timeout_never_dispatches(self):
        """Test that an already expired timeout fails without sending anything."""
        handler = RecordingHandler()
        with pytest.raises(RequestTimeoutError):
            compose(build_middlewares("agent/1.0", timeout=0), handler)(new_request())
        assert handler.requests == []

    def test_requests_timeout_is_mapped(self):
        """Test that a socket timeout surfaces as RequestTimeoutError."""
        handler = RecordingHandler(error=requests.ReadTimeout("slow"))
        with pytest.raises(RequestTimeoutError) as exc_info:
            compose(build_middlewares("agent/1.0", timeout=0.01), handler)(new_request())
        assert isinstance(exc_info.value.__cause__, requests.Timeout)


class TestResponseValidation:
    """Test mapping of responses to errors."""

    def run(self, response):
        return compose([ResponseValidationMiddleware()], RecordingHandler(response))(new_request())

    @pytest.mark.parametrize("status_code", [200, 201])
    def test_success_passes_through(self, status_code):
        response = make_response(status_code, {"result": True})
        assert self.run(response) is response

    def test_bad_request(self):
        """Test that a 400 becomes UnexpectedResponseError with a short body rendering."""
        with pytest.raises(UnexpectedResponseError) as exc_info:
            self.run(make_response(400, {"msg": "x"}, reason="Bad Request"))

        error = exc_info.value
        assert error.status_code == 400
        assert "400" in str(error)
        assert "Bad Request" in str(error)
        assert '"msg": "x"' in error.content
        assert len(error.content) <= 200

    def test_long_body_is_truncated(self):
        with pytest.raises(UnexpectedResponseError) as exc_info:
            self.run(make_response(500, b"e" * 1000))
        assert len(exc_info.value.content) == 200
        assert exc_info.value.content.endswith(" ...")

    def test_unknown_reason(self):
        with pytest.raises(UnexpectedResponseError) as exc_info:
            self.run(make_response(599, b""))
        assert "Unrecognized Status Code" in str(exc_info.value)

    def test_rate_limited_with_retry_after(self):
        """Test that a 429 carrying Retry-After becomes ResourceExhaustedError."""
        response = make_response(
            429,
            {"status": {"error": "Too many requests"}},
            headers={"Retry-After": "5"},
            reason="Too Many Requests",
        )
        with pytest.raises(ResourceExhaustedError) as exc_info:
            self.run(response)

        assert exc_info.value.retry_after == 5
        assert exc_info.value.message == "Too many requests"

    def test_rate_limited_without_retry_after(self):
        """Test that a bare 429 is an ordinary unexpected response."""
        with pytest.raises(UnexpectedResponseError):
            self.run(make_response(429, b"", reason="Too Many Requests"))
