"""
Tests for the gRPC client and its interceptors.

Interceptors are driven with fake continuations, so no server is needed.
"""

from unittest.mock import Mock, patch

import pytest

grpc = pytest.importorskip("grpc")

from qdrant_sdk.exceptions import ConfigError, RequestTimeoutError, ResourceExhaustedError  # noqa: E402
from qdrant_sdk.grpc_client import (  # noqa: E402
    ApiKeyInterceptor,
    QdrantGrpcClient,
    ResourceExhaustedInterceptor,
    TimeoutInterceptor,
    UserAgentInterceptor,
    _ClientCallDetails,
    build_interceptors,
)


class FakeOutcome:
    """Stand-in for the call object returned by a continuation."""

    def __init__(self, code=grpc.StatusCode.OK, details="", trailing_metadata=()):
        self._code = code
        self._details = details
        self._trailing_metadata = trailing_metadata

    def exception(self):
        return None if self._code == grpc.StatusCode.OK else self

    def code(self):
        return self._code

    def details(self):
        return self._details

    def trailing_metadata(self):
        return self._trailing_metadata


class RecordingContinuation:
    def __init__(self, outcome=None):
        self.outcome = outcome or FakeOutcome()
        self.calls = []

    def __call__(self, details, request):
        self.calls.append((details, request))
        return self.outcome


def call_details(metadata=None, timeout=None):
    return _ClientCallDetails("/qdrant.Points/Search", timeout, metadata, None, None, None)


class TestGrpcClientConfig:
    """Test construction of the gRPC client."""

    def test_default_uri(self):
        client = QdrantGrpcClient(check_compatibility=False)

        assert client.uri == "http://127.0.0.1:6334"
        assert client.config.address == "127.0.0.1:6334"
        client.close()

    def test_url_without_port(self):
        client = QdrantGrpcClient(url="https://localhost", check_compatibility=False)
        assert client.uri == "https://localhost:6334"
        client.close()

    def test_invalid_host(self):
        with pytest.raises(ConfigError):
            QdrantGrpcClient(host="localhost:6334", check_compatibility=False)

    def test_secure_channel_for_https(self):
        """Test that https selects a TLS channel to host:port."""
        with patch("qdrant_sdk.grpc_client.grpc.secure_channel") as secure_channel:
            QdrantGrpcClient(url="https://qdrant.example.com:6334", check_compatibility=False)

        target = secure_channel.call_args[0][0]
        assert target == "qdrant.example.com:6334"

    def test_channel_options(self):
        with patch("qdrant_sdk.grpc_client.grpc.insecure_channel") as insecure_channel:
            QdrantGrpcClient(
                grpc_options={"grpc.max_receive_message_length": 1024},
                check_compatibility=False,
            )

        options = insecure_channel.call_args[1]["options"]
        assert ("grpc.max_receive_message_length", 1024) in options

    def test_repr_masks_key(self, api_key):
        client = QdrantGrpcClient(api_key=api_key, check_compatibility=False)

        assert "***" in repr(client)
        assert api_key not in repr(client)
        client.close()

    def test_unknown_api(self):
        client = QdrantGrpcClient(check_compatibility=False)
        with pytest.raises(ValueError, match="Unknown API"):
            client.api("shards")
        client.close()

    def test_close(self):
        client = QdrantGrpcClient(check_compatibility=False)
        with patch.object(client, "channel") as channel:
            client.close()
        channel.close.assert_called_once()


class TestStubs:
    """Test the generated stub cache."""

    def test_api_is_memoized(self):
        pytest.importorskip("qdrant_client")
        client = QdrantGrpcClient(check_compatibility=False)

        points = client.api("points")

        assert client.api("points") is points
        assert type(points).__name__ == "PointsStub"
        client.close()

    def test_server_version_probe(self):
        pytest.importorskip("qdrant_client")
        client = QdrantGrpcClient(check_compatibility=False)
        service = Mock()
        service.HealthCheck.return_value = Mock(version="1.12.4")

        with patch.object(client, "api", return_value=service):
            assert client._fetch_server_version() == "1.12.4"
        client.close()


class TestInterceptors:
    """Test the interceptor chain."""

    def test_chain_order(self):
        chain = build_interceptors("agent/1.0", api_key="secret", timeout=5.0)
        assert [type(i) for i in chain] == [
            UserAgentInterceptor,
            ResourceExhaustedInterceptor,
            ApiKeyInterceptor,
            TimeoutInterceptor,
        ]

    def test_chain_without_key_and_timeout(self):
        chain = build_interceptors("agent/1.0", timeout=None)
        assert [type(i) for i in chain] == [UserAgentInterceptor, ResourceExhaustedInterceptor]

    def test_metadata(self):
        """Test that identification and key metadata are attached."""
        continuation = RecordingContinuation()

        ApiKeyInterceptor("secret").intercept_unary_unary(
            continuation, call_details(metadata=[("x-trace", "1")]), "request"
        )
        details = continuation.calls[0][0]
        assert ("api-key", "secret") in details.metadata
        assert ("x-trace", "1") in details.metadata

        UserAgentInterceptor("agent/1.0").intercept_unary_unary(continuation, call_details(), "request")
        assert ("user-agent", "agent/1.0") in continuation.calls[1][0].metadata

    def test_resource_exhausted_with_retry_after(self):
        continuation = RecordingContinuation(
            FakeOutcome(
                grpc.StatusCode.RESOURCE_EXHAUSTED,
                "rate limited",
                trailing_metadata=(("retry-after", "3"),),
            )
        )

        with pytest.raises(ResourceExhaustedError) as exc_info:
            ResourceExhaustedInterceptor().intercept_unary_unary(continuation, call_details(), "request")

        assert exc_info.value.retry_after == 3
        assert exc_info.value.message == "rate limited"

    def test_resource_exhausted_without_retry_after(self):
        """Test that the original failure is kept when no retry hint is given."""
        outcome = FakeOutcome(grpc.StatusCode.RESOURCE_EXHAUSTED, "rate limited")
        result = ResourceExhaustedInterceptor().intercept_unary_unary(
            RecordingContinuation(outcome), call_details(), "request"
        )
        assert result is outcome

    def test_success_passes_through(self):
        outcome = FakeOutcome()
        result = ResourceExhaustedInterceptor().intercept_unary_unary(
            RecordingContinuation(outcome), call_details(), "request"
        )
        assert result is outcome

    def test_timeout_sets_deadline(self):
        continuation = RecordingContinuation()

        TimeoutInterceptor(2.0).intercept_unary_unary(continuation, call_details(), "request")

        assert continuation.calls[0][0].timeout == 2.0

    def test_shorter_call_timeout_wins(self):
        continuation = RecordingContinuation()

        TimeoutInterceptor(2.0).intercept_unary_unary(continuation, call_details(timeout=0.5), "request")

        assert continuation.calls[0][0].timeout == 0.5

    @pytest.mark.parametrize("code", [grpc.StatusCode.DEADLINE_EXCEEDED, grpc.StatusCode.CANCELLED])
    def test_deadline_mapped_to_timeout_error(self, code):
        continuation = RecordingContinuation(FakeOutcome(code))

        with pytest.raises(RequestTimeoutError):
            TimeoutInterceptor(1.0).intercept_unary_unary(continuation, call_details(), "request")

    def test_zero_timeout_never_dispatches(self):
        continuation = RecordingContinuation()

        with pytest.raises(RequestTimeoutError):
            TimeoutInterceptor(0).intercept_unary_unary(continuation, call_details(), "request")
        assert continuation.calls == []
