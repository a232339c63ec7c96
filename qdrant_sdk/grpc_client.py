"""
gRPC client implementation for the Qdrant SDK.

QdrantGrpcClient shares connection resolution, API key handling and the
version check with the REST client, but talks to the server through a
``grpcio`` channel. Cross-cutting behaviour lives in client interceptors,
applied outermost first:

1. identification (``user-agent`` metadata)
2. RESOURCE_EXHAUSTED with ``retry-after`` mapped to ResourceExhaustedError
3. API key (``api-key`` metadata), only when a key is configured
4. deadline, only when the timeout is finite

Failures other than the two mapped above surface as ``grpc.RpcError``.
Requires the ``grpc`` extra: ``pip install qdrant-sdk[grpc]``.
"""

import collections
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import grpc

from . import __version__
from .auth import API_KEY_HEADER, APIKeyManager
from .config import GRPC_DEFAULT_HOST, GRPC_DEFAULT_PORT, ConnectionConfig, resolve_connection
from .exceptions import RequestTimeoutError, ResourceExhaustedError
from .middleware import is_finite_timeout
from .version import start_compatibility_check

logger = logging.getLogger(__name__)

USER_AGENT = f"qdrant-sdk-python-grpc/{__version__}"

RETRY_AFTER_METADATA = "retry-after"

# sub-client name -> stub class in qdrant_client.grpc
GRPC_STUBS = {
    "collections": "CollectionsStub",
    "points": "PointsStub",
    "snapshots": "SnapshotsStub",
    "service": "QdrantStub",
}

_TIMEOUT_CODES = (grpc.StatusCode.DEADLINE_EXCEEDED, grpc.StatusCode.CANCELLED)


class _ClientCallDetails(
    collections.namedtuple(
        "_ClientCallDetails",
        ("method", "timeout", "metadata", "credentials", "wait_for_ready", "compression"),
    ),
    grpc.ClientCallDetails,
):
    pass


def _replace_details(
    details: grpc.ClientCallDetails,
    metadata: Optional[Sequence[Tuple[str, str]]] = None,
    timeout: Optional[float] = None,
) -> _ClientCallDetails:
    return _ClientCallDetails(
        details.method,
        timeout if timeout is not None else details.timeout,
        list(metadata) if metadata is not None else details.metadata,
        details.credentials,
        getattr(details, "wait_for_ready", None),
        getattr(details, "compression", None),
    )


def _add_metadata(details: grpc.ClientCallDetails, pairs: Sequence[Tuple[str, str]]):
    metadata = [item for item in (details.metadata or ()) if item[0] not in dict(pairs)]
    metadata.extend(pairs)
    return _replace_details(details, metadata=metadata)


class UserAgentInterceptor(grpc.UnaryUnaryClientInterceptor):
    def __init__(self, user_agent: str):
        self.user_agent = user_agent

    def intercept_unary_unary(self, continuation, client_call_details, request):
        details = _add_metadata(client_call_details, [("user-agent", self.user_agent)])
        return continuation(details, request)


class ResourceExhaustedInterceptor(grpc.UnaryUnaryClientInterceptor):
    """Turns rate-limit rejections that carry ``retry-after`` into ResourceExhaustedError."""

    def intercept_unary_unary(self, continuation, client_call_details, request):
        outcome = continuation(client_call_details, request)
        if outcome.exception() is None or outcome.code() != grpc.StatusCode.RESOURCE_EXHAUSTED:
            return outcome

        for key, value in outcome.trailing_metadata() or ():
            if key == RETRY_AFTER_METADATA:
                raise ResourceExhaustedError(outcome.details() or "Resource exhausted", value)
        return outcome


class ApiKeyInterceptor(grpc.UnaryUnaryClientInterceptor):
    def __init__(self, api_key: str):
        self.api_key = api_key

    def intercept_unary_unary(self, continuation, client_call_details, request):
        details = _add_metadata(client_call_details, [(API_KEY_HEADER, self.api_key)])
        return continuation(details, request)


class TimeoutInterceptor(grpc.UnaryUnaryClientInterceptor):
    """Sets the call deadline and reports expiry as RequestTimeoutError.

    A per-call timeout shorter than the client timeout wins.
    """

    def __init__(self, timeout: float):
        self.timeout = timeout

    def intercept_unary_unary(self, continuation, client_call_details, request):
        timeout = self.timeout
        if client_call_details.timeout is not None:
            timeout = min(timeout, client_call_details.timeout)
        if timeout <= 0:
            raise RequestTimeoutError(f"Request timed out after {timeout} seconds")

        outcome = continuation(_replace_details(client_call_details, timeout=timeout), request)
        if outcome.exception() is not None and outcome.code() in _TIMEOUT_CODES:
            raise RequestTimeoutError(
                f"Request timed out after {timeout} seconds",
                details={"method": client_call_details.method},
            )
        return outcome


def build_interceptors(
    user_agent: str,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None,
) -> List[grpc.UnaryUnaryClientInterceptor]:
    """Build the interceptor chain, outermost first."""
    interceptors: List[grpc.UnaryUnaryClientInterceptor] = [
        UserAgentInterceptor(user_agent),
        ResourceExhaustedInterceptor(),
    ]
    if api_key is not None:
        interceptors.append(ApiKeyInterceptor(api_key))
    if is_finite_timeout(timeout):
        interceptors.append(TimeoutInterceptor(timeout))
    return interceptors


class QdrantGrpcClient:
    """
    Client for the Qdrant gRPC API.

    ``api(name)`` returns generated stubs from ``qdrant_client.grpc`` bound to
    an intercepted channel; requests and responses are protobuf messages.
    """

    DEFAULT_TIMEOUT = 300.0

    def __init__(
        self,
        url: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = GRPC_DEFAULT_PORT,
        api_key: Optional[str] = None,
        https: Optional[bool] = None,
        prefix: Optional[str] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        grpc_options: Optional[Dict[str, Any]] = None,
        check_compatibility: bool = True,
    ):
        """Initialize the client.

        Args:
            url: Full URL, e.g. ``https://xyz.cloud.qdrant.io:6334``.
            host: Host name without scheme or port (default: 127.0.0.1).
            port: gRPC port (default: 6334).
            api_key: API key. If None, ``QDRANT_API_KEY`` is consulted.
            https: Use TLS. Defaults to True when an API key is set,
                including a key picked up from ``QDRANT_API_KEY``; such a key
                is also sent as ``api-key`` metadata.
            prefix: Path prefix. Kept in ``config.uri`` only, since gRPC
                channels address ``host:port``.
            timeout: Call deadline in seconds (default: 300). ``None`` or
                ``math.inf`` disables it.
            grpc_options: Extra channel arguments, e.g.
                ``{"grpc.max_receive_message_length": 64 * 1024 * 1024}``.
            check_compatibility: Compare client and server versions in the
                background after construction (default: True).

        Raises:
            ConfigError: If the connection arguments are invalid.
        """
        self.auth_manager = APIKeyManager(api_key)
        self.config: ConnectionConfig = resolve_connection(
            url=url,
            host=host,
            port=port,
            https=https,
            prefix=prefix,
            api_key=self.auth_manager.api_key,
            default_host=GRPC_DEFAULT_HOST,
        )
        if self.config.prefix:
            logger.debug("Prefix %s is not used by gRPC channels", self.config.prefix)
        self.timeout = timeout

        self.channel = grpc.intercept_channel(
            self._create_channel(grpc_options),
            *build_interceptors(USER_AGENT, self.auth_manager.api_key, timeout),
        )

        # {name: stub}, filled lazily by api()
        self._stubs: Dict[str, Any] = {}

        self._compatibility_check = None
        if check_compatibility:
            self._compatibility_check = start_compatibility_check(
                self._fetch_server_version, __version__
            )

    def _create_channel(self, grpc_options: Optional[Dict[str, Any]]) -> grpc.Channel:
        options = [("grpc.primary_user_agent", USER_AGENT)]
        options.extend((grpc_options or {}).items())

        target = self.config.address
        logger.debug("Opening gRPC channel to %s (tls=%s)", target, self.config.https)
        if self.config.https:
            return grpc.secure_channel(target, grpc.ssl_channel_credentials(), options=options)
        return grpc.insecure_channel(target, options=options)

    @property
    def uri(self) -> str:
        return self.config.uri

    def api(self, name: str) -> Any:
        """Get the generated stub for one gRPC service.

        Args:
            name: One of collections, points, snapshots, service.

        Raises:
            ValueError: If ``name`` is not a known service.
        """
        stub = self._stubs.get(name)
        if stub is None:
            stub_name = GRPC_STUBS.get(name)
            if stub_name is None:
                raise ValueError(
                    f"Unknown API '{name}'. Available: {', '.join(sorted(GRPC_STUBS))}"
                )
            from qdrant_client import grpc as qdrant_grpc

            stub = self._stubs.setdefault(name, getattr(qdrant_grpc, stub_name)(self.channel))
        return stub

    def _fetch_server_version(self) -> Optional[str]:
        from qdrant_client.grpc import HealthCheckRequest

        return self.api("service").HealthCheck(HealthCheckRequest()).version

    def close(self) -> None:
        """Close the channel."""
        if hasattr(self, "channel"):
            self.channel.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        masked_key = self.auth_manager.mask_api_key()
        return f"QdrantGrpcClient(url='{self.config.uri}', api_key='{masked_key}')"
